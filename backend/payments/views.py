"""Endpoints de paiement des colis.
- /checkout-payment: crée une session Stripe Checkout (rate-limité).
- /payment-success: confirme une session au retour de redirection (idempotent par transaction).
- /payments: historique des paiements de l'appelant (authentifié, limité à son propre email).
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, EmailStr, Field
from supabase import Client

from backend.infra.supabase_client import get_store
from backend.utils.rate_limit import optional_rate_limit
from backend.utils.security import verify_token, require_email_scope
from backend.payments import service as payments_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Payments"])

class CheckoutRequest(BaseModel):
    parcelId: str
    parcelName: str = Field(min_length=1)
    senderEmail: EmailStr
    cost: Any

# module backend.payments.views
@router.post("/checkout-payment", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_checkout_payment(req: CheckoutRequest):
    """Crée la session de paiement d'un colis et renvoie {"url"} vers la page Stripe.
    - 400 si coût ou identifiant de colis invalide
    - 500 si Stripe refuse la création (message du fournisseur dans detail)
    """
    session = payments_service.create_parcel_checkout(
        parcel_id=req.parcelId,
        parcel_name=req.parcelName,
        sender_email=req.senderEmail,
        cost=req.cost,
    )
    return {"url": session.get("url")}

@router.patch("/payment-success", dependencies=[Depends(optional_rate_limit(times=20, seconds=60))])
def payment_success(session_id: Optional[str] = Query(default=None), store: Client = Depends(get_store)):
    """Confirme le paiement de la session; rejouer la même session ne réécrit rien."""
    return payments_service.confirm_payment(store, session_id)

@router.get("/payments")
def list_payments(
    email: Optional[str] = Query(default=None),
    decoded_email: str = Depends(verify_token),
    store: Client = Depends(get_store),
):
    customer_email = require_email_scope(email, decoded_email)
    return payments_service.list_customer_payments(store, customer_email)
