"""
Module 'payments' (feature-first): point d'entrée public.
Réunit metadata Stripe, client Stripe, numéros de suivi, repository BD et services.
"""

from .metadata import make_metadata, extract_metadata_from_session, customer_email_from_session
from .stripe_client import require_stripe, create_session, get_session
from .tracking import generate_tracking_id, is_tracking_id
from .repository import (
    find_payment_by_transaction,
    insert_payment_if_absent,
    list_payments,
)
from .service import create_parcel_checkout, confirm_payment, list_customer_payments

__all__ = [
    # metadata
    "make_metadata",
    "extract_metadata_from_session",
    "customer_email_from_session",
    # stripe
    "require_stripe",
    "create_session",
    "get_session",
    # tracking
    "generate_tracking_id",
    "is_tracking_id",
    # repository
    "find_payment_by_transaction",
    "insert_payment_if_absent",
    "list_payments",
    # services
    "create_parcel_checkout",
    "confirm_payment",
    "list_customer_payments",
]
