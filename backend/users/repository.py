"""Couche d’accès aux données (Supabase) pour le domaine Utilisateurs.
Table users: email (clé naturelle, index unique), display_name, photo_url, role, created_at.
Les erreurs Supabase remontent à l'appelant: le handler global les transforme en 500.
"""
import re
from typing import Any, Dict, List, Optional
from supabase import Client

from backend.infra.store import USERS, rows, first_row

def get_user_by_email(client: Client, email: str) -> Optional[dict]:
    """Récupère un utilisateur par email.
    - Retour: dict utilisateur ou None si introuvable
    """
    if not email:
        return None
    res = client.table(USERS).select("*").eq("email", email).limit(1).execute()
    return first_row(res)

def insert_user_if_absent(client: Client, user: Dict[str, Any]) -> Optional[dict]:
    """Insère l'utilisateur sauf si l'email existe déjà (upsert ignore_duplicates sur l'index unique).
    - Retour: la ligne créée, ou None si l'email était déjà enregistré
    """
    res = (
        client.table(USERS)
        .upsert(user, on_conflict="email", ignore_duplicates=True)
        .execute()
    )
    return first_row(res)

def _pattern(search_text: str) -> str:
    # Recherche littérale: retire les séparateurs de la syntaxe or= de PostgREST, puis échappe la regex
    return re.escape(re.sub(r"[,()]", "", search_text.strip()))

def search_users(client: Client, search_text: Optional[str] = None, limit: int = 10) -> List[dict]:
    """Liste les utilisateurs, filtrés par regex (insensible à la casse) sur display_name ou email.
    - Tri: created_at desc
    """
    query = client.table(USERS).select("*")
    if search_text and search_text.strip():
        pattern = _pattern(search_text)
        query = query.or_(f"display_name.imatch.{pattern},email.imatch.{pattern}")
    res = query.order("created_at", desc=True).limit(limit).execute()
    return rows(res)

def update_user_role(client: Client, user_id: str, role: str) -> Optional[dict]:
    res = client.table(USERS).update({"role": role}).eq("id", user_id).execute()
    return first_row(res)

def update_role_by_email(client: Client, email: str, role: str) -> Optional[dict]:
    res = client.table(USERS).update({"role": role}).eq("email", email).execute()
    return first_row(res)
