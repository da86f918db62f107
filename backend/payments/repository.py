"""
Accès aux données pour la feature 'payments' (table payments).
L'index unique sur transaction_id porte l'idempotence de la confirmation:
insert_payment_if_absent est une écriture atomique (upsert ignore_duplicates),
jamais un couple lecture puis insertion.
"""
from typing import Any, Dict, List, Optional
import logging
from supabase import Client

from backend.infra.store import PAYMENTS, rows, first_row

logger = logging.getLogger(__name__)

# module backend.payments.repository
def find_payment_by_transaction(client: Client, transaction_id: str) -> Optional[dict]:
    if not transaction_id:
        return None
    res = (
        client.table(PAYMENTS)
        .select("*")
        .eq("transaction_id", transaction_id)
        .limit(1)
        .execute()
    )
    return first_row(res)

def insert_payment_if_absent(client: Client, payment: Dict[str, Any]) -> Optional[dict]:
    """
    Insère le paiement sauf si transaction_id existe déjà.
    - Retour: la ligne insérée, ou None si une autre confirmation l'a déjà enregistrée
    """
    res = (
        client.table(PAYMENTS)
        .upsert(payment, on_conflict="transaction_id", ignore_duplicates=True)
        .execute()
    )
    row = first_row(res)
    if row is None:
        logger.info("payments.repository: transaction déjà enregistrée transaction_id=%s", payment.get("transaction_id"))
    return row

def list_payments(client: Client, customer_email: Optional[str] = None) -> List[dict]:
    """Paiements triés par paid_at desc, filtrés par email client si fourni."""
    query = client.table(PAYMENTS).select("*")
    if customer_email:
        query = query.eq("customer_email", customer_email)
    res = query.order("paid_at", desc=True).execute()
    return rows(res)
