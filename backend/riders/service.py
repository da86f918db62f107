"""
Cas d'usage 'riders'.
Approuver une candidature promeut aussi l'utilisateur correspondant au rôle 'rider'.
Cette seconde écriture n'est pas transactionnelle avec la première: son résultat
est renvoyé explicitement (userRoleUpdated) au lieu d'être confondu avec celui du statut.
"""
import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from backend.infra.store import now_iso
from backend.users import repository as users_repository
from backend.utils.errors import NotFound, ValidationError
from backend.utils.validators import parse_record_id
from . import repository

logger = logging.getLogger(__name__)

def apply(client: Client, data: Dict[str, Any]) -> Dict[str, Any]:
    """Enregistre une candidature (toujours 'pending' à la création)."""
    payload = dict(data)
    payload["email"] = str(payload.get("email") or "").strip().lower()
    payload["status"] = "pending"
    payload["created_at"] = now_iso()
    row = repository.create_rider(client, payload)
    if not row:
        raise RuntimeError("Insertion de la candidature sans retour de ligne")
    return {"insertedId": row.get("id"), "rider": row}

def list_riders(client: Client, status: Optional[str] = None) -> List[dict]:
    return repository.list_riders(client, status=status)

def _promote(client: Client, email: str) -> bool:
    try:
        user = users_repository.update_role_by_email(client, email, "rider")
    except Exception:
        logger.exception("riders.approve: échec de la mise à jour du rôle email=%s", email)
        return False
    if user is None:
        logger.warning("riders.approve: aucun utilisateur pour email=%s", email)
        return False
    return True

def set_status(client: Client, rider_id: str, status: str, email: Optional[str] = None) -> Dict[str, Any]:
    """
    Met à jour le statut d'une candidature.
    - status == 'approved': l'utilisateur de la candidature devient 'rider'
    - email: facultatif, doit correspondre à celui de la candidature (ValidationError sinon, aucune écriture)
    Retour: {"modifiedCount", "rider", "userRoleUpdated"}; userRoleUpdated vaut None hors approbation
    """
    rider_id = parse_record_id(rider_id)
    current = repository.get_rider(client, rider_id)
    if not current:
        raise NotFound("Livreur introuvable")
    target = (current.get("email") or "").strip().lower()
    if email and email.strip().lower() != target:
        raise ValidationError("L'email ne correspond pas à la candidature")

    rider = repository.update_rider_status(client, rider_id, status)
    if not rider:
        raise NotFound("Livreur introuvable")
    role_updated = None
    if status == "approved":
        role_updated = _promote(client, target) if target else False
    logger.info("riders.set_status id=%s status=%s userRoleUpdated=%s", rider.get("id"), status, role_updated)
    return {"modifiedCount": 1, "rider": rider, "userRoleUpdated": role_updated}

def remove(client: Client, rider_id: str) -> Dict[str, Any]:
    row = repository.delete_rider(client, parse_record_id(rider_id))
    if not row:
        raise NotFound("Livreur introuvable")
    return {"deletedCount": 1}
