"""
Vérification d'identité (jetons Supabase Auth).
- get_bearer_token: extrait le jeton de l'en-tête Authorization: Bearer <token>
- verify_id_token: valide le jeton et retourne l'email vérifié
  1) Si SUPABASE_JWT_SECRET est défini: vérification locale (HS256, audience, expiration) via PyJWT
  2) Sinon: appel à Supabase Auth (auth.get_user)
Toute erreur se traduit par Unauthenticated (401), sans autre effet de bord.
"""
import logging
from typing import Optional

import jwt
from fastapi import Request
from supabase import Client

from backend.utils.errors import Unauthenticated
from . import repository

logger = logging.getLogger(__name__)

def get_bearer_token(request: Request) -> str:
    auth = request.headers.get("Authorization") or ""
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated()
    return token.strip()

def _decode_locally(token: str) -> Optional[str]:
    from backend.config import SUPABASE_JWT_SECRET, SUPABASE_JWT_AUDIENCE
    try:
        claims = jwt.decode(
            token,
            SUPABASE_JWT_SECRET,
            algorithms=["HS256"],
            audience=SUPABASE_JWT_AUDIENCE,
            options={"require": ["exp"]},
        )
    except jwt.PyJWTError as e:
        logger.info("auth.verify_id_token: jeton refusé (%s)", e)
        raise Unauthenticated()
    return claims.get("email")

def _fetch_remote(client: Client, token: str) -> Optional[str]:
    try:
        user = repository.get_user_from_access_token(client, token)
    except Exception as e:
        # AuthApiError (expiré, signature invalide) ou Supabase injoignable
        logger.info("auth.verify_id_token: Supabase a refusé le jeton (%s)", e)
        raise Unauthenticated()
    return user.get("email")

def verify_id_token(client: Client, token: str) -> str:
    from backend.config import SUPABASE_JWT_SECRET
    if not token:
        raise Unauthenticated()
    if SUPABASE_JWT_SECRET:
        email = _decode_locally(token)
    else:
        email = _fetch_remote(client, token)
    if not email:
        raise Unauthenticated()
    return str(email).strip().lower()
