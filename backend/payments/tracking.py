"""
Identifiants de suivi des colis: PARCEL-YYYYMMDD-XXXXXX
- date UTC sans séparateurs
- 3 octets issus de secrets (CSPRNG) rendus en 6 caractères hexadécimaux majuscules
Visibles par les clients: ils ne doivent pas être devinables.
"""
import re
import secrets
from datetime import datetime, timezone
from typing import Optional

TRACKING_PREFIX = "PARCEL"
TRACKING_ID_PATTERN = re.compile(r"^PARCEL-\d{8}-[0-9A-F]{6}$")

def generate_tracking_id(now: Optional[datetime] = None) -> str:
    # Pas de contrôle de collision (1/16^6 par jour)
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    suffix = secrets.token_hex(3).upper()
    return f"{TRACKING_PREFIX}-{moment:%Y%m%d}-{suffix}"

def is_tracking_id(value: str) -> bool:
    return bool(TRACKING_ID_PATTERN.match(value or ""))
