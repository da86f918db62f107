"""
Cas d'usage 'payments': orchestre stripe_client, metadata, tracking et les repositories.
- create_parcel_checkout: session Stripe Checkout pour payer un colis
- confirm_payment: rapproche une session payée de la base, une seule fois par transaction
"""
import logging
from typing import Any, Dict, Optional

from supabase import Client

from backend.config import CHECKOUT_CURRENCY
from backend.infra.store import now_iso
from backend.parcels import repository as parcels_repository
from backend.utils.validators import parse_cost, parse_record_id, to_smallest_unit, from_smallest_unit
from . import metadata as meta
from . import repository
from . import stripe_client
from . import tracking

logger = logging.getLogger(__name__)

def _checkout_urls() -> Dict[str, str]:
    from backend.config import SITE_DOMAIN, CHECKOUT_SUCCESS_PATH, CHECKOUT_CANCEL_PATH
    sep = "&" if "?" in CHECKOUT_SUCCESS_PATH else "?"
    return {
        "success_url": f"{SITE_DOMAIN}{CHECKOUT_SUCCESS_PATH}{sep}session_id={{CHECKOUT_SESSION_ID}}",
        "cancel_url": f"{SITE_DOMAIN}{CHECKOUT_CANCEL_PATH}",
    }

def create_parcel_checkout(*, parcel_id: str, parcel_name: str, sender_email: str, cost: Any) -> Dict[str, Any]:
    """
    Prépare la session Stripe pour le paiement d'un colis.
    - cost: montant en unité principale (ex: 12.5), converti en centimes
    - metadata: parcelId/parcelName, relus par confirm_payment
    Retour: {"url": <page de paiement hébergée>, "id": <session id>}
    """
    parcel_id = parse_record_id(parcel_id)
    amount = to_smallest_unit(parse_cost(cost))
    line_items = [{
        "price_data": {
            "currency": CHECKOUT_CURRENCY,
            "unit_amount": amount,
            "product_data": {"name": f"Please pay for: {parcel_name}"},
        },
        "quantity": 1,
    }]
    session = stripe_client.create_session(
        line_items=line_items,
        mode="payment",
        customer_email=sender_email,
        metadata=meta.make_metadata(parcel_id, parcel_name),
        **_checkout_urls(),
    )
    logger.info("payments.checkout parcel_id=%s amount=%s session=%s", parcel_id, amount, session.get("id"))
    return {"url": session.get("url"), "id": session.get("id")}

def _already_recorded(transaction_id: str, existing: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "success": True,
        "alreadyExists": True,
        "transactionId": transaction_id,
        "trackingId": existing.get("tracking_id"),
    }

def _payment_record(session: Dict[str, Any], tracking_id: str) -> Dict[str, Any]:
    parcel_id, parcel_name = meta.extract_metadata_from_session(session)
    email = meta.customer_email_from_session(session)
    return {
        "amount": str(from_smallest_unit(session.get("amount_total"))),
        "currency": session.get("currency"),
        "customer_email": email.lower() if email else None,
        "parcel_id": parcel_id,
        "parcel_name": parcel_name,
        "transaction_id": session.get("payment_intent"),
        "payment_status": session.get("payment_status"),
        "paid_at": now_iso(),
        "tracking_id": tracking_id,
    }

def confirm_payment(client: Client, session_id: Optional[str]) -> Dict[str, Any]:
    """
    Confirme le paiement d'une session Checkout (retour de redirection Stripe).
    Étapes (l'ordre compte):
      1) Relire la session chez Stripe (ProviderLookupError si introuvable)
      2) Transaction déjà enregistrée -> renvoie le numéro de suivi existant, aucune écriture
      3) Session non payée -> {"success": False}, aucune écriture
      4) Reprend le numéro de suivi du colis s'il en a déjà un, sinon en génère un,
         enregistre le paiement (insertion atomique si absent), puis passe le colis à payé
    Une confirmation concurrente qui perd l'insertion se comporte comme l'étape 2.
    """
    session = stripe_client.get_session(session_id)
    transaction_id = session.get("payment_intent")

    existing = repository.find_payment_by_transaction(client, transaction_id)
    if existing:
        logger.info("payments.confirm déjà traité transaction_id=%s", transaction_id)
        return _already_recorded(transaction_id, existing)

    payment_status = session.get("payment_status") or ""
    if payment_status != "paid" or not transaction_id:
        logger.info("payments.confirm non payé session=%s payment_status=%s", session_id, payment_status)
        return {"success": False}

    # Un colis déjà suivi garde son numéro: le paiement le reprend au lieu d'en créer un orphelin
    parcel_id, _ = meta.extract_metadata_from_session(session)
    parcel = parcels_repository.get_parcel(client, parcel_id) if parcel_id else None
    tracking_id = (parcel or {}).get("tracking_id") or tracking.generate_tracking_id()
    payment = _payment_record(session, tracking_id)
    inserted = repository.insert_payment_if_absent(client, payment)
    if inserted is None:
        winner = repository.find_payment_by_transaction(client, transaction_id) or {}
        return _already_recorded(transaction_id, winner)

    modified = {"matchedCount": 0, "modifiedCount": 0, "parcel": None}
    if payment["parcel_id"]:
        modified = parcels_repository.mark_parcel_paid(client, payment["parcel_id"], tracking_id)
    if not modified["modifiedCount"]:
        logger.warning(
            "payments.confirm colis non mis à jour parcel_id=%s transaction_id=%s",
            payment["parcel_id"], transaction_id,
        )
    logger.info("payments.confirm ok transaction_id=%s tracking_id=%s", transaction_id, tracking_id)
    return {
        "success": True,
        "modifiedParcel": modified,
        "trackingId": tracking_id,
        "transactionId": transaction_id,
        "paymentRecord": inserted,
    }

def list_customer_payments(client: Client, customer_email: str):
    return repository.list_payments(client, customer_email=customer_email)
