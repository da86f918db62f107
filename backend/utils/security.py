"""
Chaîne d'autorisation des routes protégées, sous forme de dépendances FastAPI ordonnées:
  get_bearer_token -> verify_token (email vérifié) -> require_admin (rôle 'admin' en base)
Chaque maillon laisse passer ou lève Unauthenticated/Forbidden avant l'exécution du handler.
"""
from typing import Any, Dict, Optional
from fastapi import Depends, Request
from supabase import Client

from backend.infra.supabase_client import get_store
from backend.utils.errors import Forbidden

def verify_token(request: Request, store: Client = Depends(get_store)) -> str:
    # Import du module (et non des fonctions) pour rester patchable par les tests
    from backend.auth import service as auth_service
    token = auth_service.get_bearer_token(request)
    return auth_service.verify_id_token(store, token)

def require_admin(email: str = Depends(verify_token), store: Client = Depends(get_store)) -> Dict[str, Any]:
    from backend.users import repository as users_repository
    user = users_repository.get_user_by_email(store, email)
    if not user or user.get("role") != "admin":
        raise Forbidden()
    return user

def require_email_scope(requested_email: Optional[str], decoded_email: str) -> str:
    """Retourne l'email à utiliser pour filtrer; refuse (403) un email différent de celui de l'appelant."""
    if not requested_email:
        return decoded_email
    if requested_email.strip().lower() != (decoded_email or "").lower():
        raise Forbidden()
    return decoded_email
