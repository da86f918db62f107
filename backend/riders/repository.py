"""
Accès aux données pour la feature 'riders' (table riders: candidatures de livreurs).
"""
from typing import Any, Dict, List, Optional
from supabase import Client

from backend.infra.store import RIDERS, rows, first_row

# module backend.riders.repository
def list_riders(client: Client, status: Optional[str] = None) -> List[dict]:
    query = client.table(RIDERS).select("*")
    if status:
        query = query.eq("status", status)
    res = query.order("created_at", desc=True).execute()
    return rows(res)

def get_rider(client: Client, rider_id: str) -> Optional[dict]:
    res = client.table(RIDERS).select("*").eq("id", rider_id).limit(1).execute()
    return first_row(res)

def create_rider(client: Client, data: Dict[str, Any]) -> Optional[dict]:
    res = client.table(RIDERS).insert(data).execute()
    return first_row(res)

def update_rider_status(client: Client, rider_id: str, status: str) -> Optional[dict]:
    res = client.table(RIDERS).update({"status": status}).eq("id", rider_id).execute()
    return first_row(res)

def delete_rider(client: Client, rider_id: str) -> Optional[dict]:
    res = client.table(RIDERS).delete().eq("id", rider_id).execute()
    return first_row(res)
