"""
Accès aux données pour la feature 'parcels' (table parcels).
"""
from typing import Any, Dict, List, Optional
from supabase import Client

from backend.infra.store import PARCELS, rows, first_row

# module backend.parcels.repository
def list_parcels(client: Client, *, sender_email: Optional[str] = None, delivery_status: Optional[str] = None) -> List[dict]:
    """
    Colis triés du plus récent au plus ancien.
    - Filtres optionnels (égalité exacte): sender_email, delivery_status
    """
    query = client.table(PARCELS).select("*")
    if sender_email:
        query = query.eq("sender_email", sender_email)
    if delivery_status:
        query = query.eq("delivery_status", delivery_status)
    res = query.order("created_at", desc=True).execute()
    return rows(res)

def get_parcel(client: Client, parcel_id: str) -> Optional[dict]:
    res = client.table(PARCELS).select("*").eq("id", parcel_id).limit(1).execute()
    return first_row(res)

def create_parcel(client: Client, data: Dict[str, Any]) -> Optional[dict]:
    res = client.table(PARCELS).insert(data).execute()
    return first_row(res)

def update_parcel(client: Client, parcel_id: str, data: Dict[str, Any]) -> Optional[dict]:
    res = client.table(PARCELS).update(data).eq("id", parcel_id).execute()
    return first_row(res)

def delete_parcel(client: Client, parcel_id: str) -> Optional[dict]:
    res = client.table(PARCELS).delete().eq("id", parcel_id).execute()
    return first_row(res)

def mark_parcel_paid(client: Client, parcel_id: str, tracking_id: str) -> Dict[str, Any]:
    """
    Passe le colis à payé / en attente d'enlèvement et lui attache son numéro de suivi.
    - Écriture conditionnelle (tracking_id IS NULL): un numéro n'est attribué qu'une fois
      et un colis payé ne redevient jamais impayé.
    Retour: {"matchedCount", "modifiedCount", "parcel"} (parcel = ligne mise à jour ou None)
    """
    res = (
        client.table(PARCELS)
        .update({
            "payment_status": "paid",
            "delivery_status": "pending-pickup",
            "tracking_id": tracking_id,
        })
        .eq("id", parcel_id)
        .is_("tracking_id", "null")
        .execute()
    )
    updated = first_row(res)
    count = len(rows(res))
    return {"matchedCount": count, "modifiedCount": count, "parcel": updated}
