from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from uuid import UUID

from backend.utils.errors import ValidationError

def parse_record_id(value: str) -> str:
    """Les identifiants de lignes sont des UUID Postgres: rejette tôt tout le reste (400)."""
    try:
        return str(UUID(str(value or "").strip()))
    except ValueError:
        raise ValidationError(f"Identifiant invalide: {value!r}")

# Plafond Stripe Checkout: 99 999 999 centimes
MAX_COST = Decimal("999999.99")

def parse_cost(value) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError("Coût invalide")
    try:
        cost = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Coût invalide: {value!r}")
    if not cost.is_finite() or cost <= 0:
        raise ValidationError(f"Le coût doit être strictement positif: {value!r}")
    if cost > MAX_COST:
        raise ValidationError(f"Coût trop élevé: {value!r}")
    if to_smallest_unit(cost) < 1:
        raise ValidationError(f"Coût inférieur à la plus petite unité: {value!r}")
    return cost

def to_smallest_unit(amount: Decimal) -> int:
    # Devises à centimes: 12.345 -> 1235
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def from_smallest_unit(amount_total) -> Decimal:
    return (Decimal(int(amount_total or 0)) / Decimal(100)).quantize(Decimal("0.01"))
