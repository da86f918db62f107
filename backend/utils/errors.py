"""
Erreurs métier du backend.
Toutes dérivent de HTTPException: les services les lèvent directement et le
handler HTTPException de l'application (app_setup/exceptions.py) les rend en JSON {"detail": ...}.
"""
from typing import Any, Optional
from fastapi import HTTPException


class Unauthenticated(HTTPException):
    """Jeton absent, mal formé ou refusé par le fournisseur d'identité."""
    def __init__(self, detail: Any = "unauthorized access"):
        super().__init__(status_code=401, detail=detail)


class Forbidden(HTTPException):
    """Authentifié mais rôle insuffisant (ou email ne correspondant pas à l'appelant)."""
    def __init__(self, detail: Any = "forbidden access"):
        super().__init__(status_code=403, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: Any = "Ressource introuvable"):
        super().__init__(status_code=404, detail=detail)


class ValidationError(HTTPException):
    def __init__(self, detail: Any = "Requête invalide"):
        super().__init__(status_code=400, detail=detail)


class PaymentProviderError(HTTPException):
    """Stripe a refusé la création de la session: message du fournisseur renvoyé tel quel."""
    def __init__(self, detail: Optional[str] = None):
        super().__init__(status_code=500, detail=detail or "Erreur du fournisseur de paiement")


class ProviderLookupError(HTTPException):
    """Session Stripe introuvable ou fournisseur injoignable."""
    def __init__(self, detail: Optional[str] = None):
        super().__init__(status_code=502, detail=detail or "Session de paiement introuvable")
