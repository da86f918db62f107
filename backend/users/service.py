"""Couche service du domaine Utilisateurs.
- register_user: fiche créée à l'inscription (rôle 'user'), une seule par email
- get_role: rôle d'un email ('user' par défaut si inconnu)
- search_users / change_role: listing et administration des rôles
"""
import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from backend.infra.store import now_iso
from backend.utils.errors import NotFound
from backend.utils.validators import parse_record_id
from . import repository

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"
ROLES = ("user", "admin", "rider")

def register_user(client: Client, data: Dict[str, Any]) -> Dict[str, Any]:
    """Crée la fiche utilisateur si l'email est nouveau.
    - Le rôle n'est jamais choisi par le client: toujours 'user' à la création
    - Email déjà connu: {"message": "user exists", "insertedId": None}, rien n'est écrit
    """
    email = str(data.get("email") or "").strip().lower()
    user = {
        "email": email,
        "display_name": data.get("display_name"),
        "photo_url": data.get("photo_url"),
        "role": DEFAULT_ROLE,
        "created_at": now_iso(),
    }
    row = repository.insert_user_if_absent(client, user)
    if row is None:
        return {"message": "user exists", "insertedId": None}
    logger.info("users.register email=%s id=%s", email, row.get("id"))
    return {"insertedId": row.get("id"), "user": row}

def get_role(client: Client, email: str) -> Dict[str, str]:
    user = repository.get_user_by_email(client, (email or "").strip().lower())
    return {"role": (user or {}).get("role") or DEFAULT_ROLE}

def search_users(client: Client, search_text: Optional[str] = None) -> List[dict]:
    return repository.search_users(client, search_text=search_text, limit=10)

def change_role(client: Client, user_id: str, role: str) -> Dict[str, Any]:
    row = repository.update_user_role(client, parse_record_id(user_id), role)
    if not row:
        raise NotFound("Utilisateur introuvable")
    logger.info("users.change_role id=%s role=%s", row.get("id"), role)
    return {"modifiedCount": 1, "user": row}
