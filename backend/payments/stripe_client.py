"""
Adaptateur Stripe: centralise les appels et la configuration Stripe.
Les erreurs du SDK sont traduites en erreurs métier:
- création de session refusée -> PaymentProviderError
- session introuvable / Stripe injoignable -> ProviderLookupError
"""
import logging
import stripe
from typing import Any, Dict, List

from backend.utils.errors import PaymentProviderError, ProviderLookupError, ValidationError

logger = logging.getLogger(__name__)

# module backend.payments.stripe_client
def require_stripe():
    """
    Prépare et retourne le module stripe prêt à l’emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY si disponible.
    - En absence de clé, les appels Stripe échoueront côté SDK (No API key provided).
    """
    from backend.config import STRIPE_SECRET_KEY
    if STRIPE_SECRET_KEY:
        stripe.api_key = STRIPE_SECRET_KEY
    return stripe

def _as_dict(obj: Any) -> Dict[str, Any]:
    # stripe retourne un StripeObject; on le traite comme dict
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return dict(obj)

def create_session(
    *,
    line_items: List[Dict[str, Any]],
    mode: str,
    customer_email: str,
    success_url: str,
    cancel_url: str,
    metadata: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Crée une session Stripe Checkout.
    Retour: dict session (ex: {"id": "cs_test_...", "url": "https://..."})
    """
    require_stripe()
    try:
        session = stripe.checkout.Session.create(
            line_items=line_items,
            mode=mode,
            customer_email=customer_email,
            success_url=success_url,
            cancel_url=cancel_url,
            metadata=metadata,
        )
    except stripe.StripeError as e:
        logger.exception("payments.stripe_client.create_session failed")
        raise PaymentProviderError(getattr(e, "user_message", None) or str(e))
    return _as_dict(session)

def get_session(session_id: str) -> Dict[str, Any]:
    """
    Récupère une session Stripe Checkout par son identifiant.
    Retour: dict session incluant "payment_status", "amount_total", "currency",
    "customer_email", "payment_intent", "metadata".
    """
    if not session_id:
        raise ValidationError("session_id manquant")
    require_stripe()
    try:
        session = stripe.checkout.Session.retrieve(session_id)
    except stripe.StripeError as e:
        logger.warning("payments.stripe_client.get_session failed session_id=%s: %s", session_id, e)
        raise ProviderLookupError(f"Session introuvable: {e}")
    return _as_dict(session)
