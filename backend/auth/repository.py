from typing import Dict, Any
from supabase import Client

# --- Auth (supabase.auth.*) ---

def get_user_from_access_token(client: Client, access_token: str) -> Dict[str, Any]:
    """Récupère et normalise l’utilisateur depuis supabase.auth.get_user(access_token).
    - supabase-py retourne un objet avec attribut 'user' ou un dict selon la version
    - Retour: {} si le jeton ne correspond à aucun utilisateur
    """
    res = client.auth.get_user(access_token)
    user = getattr(res, "user", None) or (res.get("user") if isinstance(res, dict) else None)
    if not user:
        return {}
    if isinstance(user, dict):
        return {"id": user.get("id"), "email": user.get("email")}
    return {"id": getattr(user, "id", None), "email": getattr(user, "email", None)}
