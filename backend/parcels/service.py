"""
Cas d'usage 'parcels' (CRUD des colis).
Les champs de paiement (payment_status, tracking_id) ne sont jamais écrits ici:
seule la confirmation de paiement les modifie.
"""
import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from backend.infra.store import now_iso
from backend.utils.errors import NotFound, ValidationError
from backend.utils.validators import parse_record_id
from . import repository

logger = logging.getLogger(__name__)

PROTECTED_FIELDS = ("id", "payment_status", "tracking_id", "created_at")

def _writable(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}

def list_parcels(client: Client, email: Optional[str] = None, delivery_status: Optional[str] = None) -> List[dict]:
    sender_email = email.strip().lower() if email else None
    return repository.list_parcels(client, sender_email=sender_email, delivery_status=delivery_status)

def get_parcel(client: Client, parcel_id: str) -> dict:
    parcel = repository.get_parcel(client, parse_record_id(parcel_id))
    if not parcel:
        raise NotFound("Colis introuvable")
    return parcel

def create_parcel(client: Client, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Enregistre un nouveau colis (non payé, sans numéro de suivi).
    Retour: {"insertedId": <id>, "parcel": <ligne créée>}
    """
    payload = _writable(data)
    payload["sender_email"] = str(payload.get("sender_email") or "").lower()
    if payload.get("cost") is not None:
        payload["cost"] = str(payload["cost"])
    payload["created_at"] = now_iso()
    row = repository.create_parcel(client, payload)
    if not row:
        raise RuntimeError("Insertion du colis sans retour de ligne")
    logger.info("parcels.create id=%s sender=%s", row.get("id"), row.get("sender_email"))
    return {"insertedId": row.get("id"), "parcel": row}

def update_parcel(client: Client, parcel_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
    payload = _writable(data)
    if not payload:
        raise ValidationError("Aucun champ à mettre à jour")
    if payload.get("cost") is not None:
        payload["cost"] = str(payload["cost"])
    row = repository.update_parcel(client, parse_record_id(parcel_id), payload)
    if not row:
        raise NotFound("Colis introuvable")
    return {"modifiedCount": 1, "parcel": row}

def delete_parcel(client: Client, parcel_id: str) -> Dict[str, Any]:
    row = repository.delete_parcel(client, parse_record_id(parcel_id))
    if not row:
        raise NotFound("Colis introuvable")
    logger.info("parcels.delete id=%s", row.get("id"))
    return {"deletedCount": 1}
