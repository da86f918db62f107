"""
Métadonnées Stripe portées par la session: parcelId / parcelName.
Posées à la création du checkout, relues à la confirmation pour rattacher le paiement au colis.
"""
from typing import Any, Dict, Optional, Tuple

# module backend.payments.metadata
def make_metadata(parcel_id: str, parcel_name: str) -> Dict[str, str]:
    # Stripe limite les valeurs de metadata à 500 caractères
    return {
        "parcelId": str(parcel_id),
        "parcelName": str(parcel_name or "")[:500],
    }

def extract_metadata_from_session(session: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """
    Extrait (parcel_id, parcel_name) depuis une session Stripe Checkout (lecture directe).
    - Tolérant: (None, None) si la session ne porte pas de metadata
    """
    meta = (session or {}).get("metadata") or {}
    return meta.get("parcelId"), meta.get("parcelName")

def customer_email_from_session(session: Dict[str, Any]) -> Optional[str]:
    # customer_email n'est renseigné que si fourni à la création; sinon Stripe le range dans customer_details
    email = (session or {}).get("customer_email")
    if not email:
        email = ((session or {}).get("customer_details") or {}).get("email")
    return email
