"""
Helpers communs aux repositories (tables Supabase).
Les réponses supabase-py exposent .data sous forme de liste (ou dict selon les versions):
on normalise ici plutôt que dans chaque repository.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

PARCELS = "parcels"
USERS = "users"
PAYMENTS = "payments"
RIDERS = "riders"

def rows(res: Any) -> List[Dict[str, Any]]:
    data = getattr(res, "data", None)
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return [data]
    return []

def first_row(res: Any) -> Optional[Dict[str, Any]]:
    found = rows(res)
    return found[0] if found else None

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def now_iso() -> str:
    # Horodatage sérialisable (PostgREST attend du JSON)
    return utc_now().isoformat()

def ping(client) -> bool:
    """Lecture minimale sur la table parcels pour vérifier l'accès à la base."""
    client.table(PARCELS).select("id").limit(1).execute()
    return True
