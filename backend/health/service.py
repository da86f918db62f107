from urllib.parse import urlparse
from typing import Any, Dict

from backend.config import SUPABASE_URL
from backend.infra import store as store_helpers

TABLES = (store_helpers.PARCELS, store_helpers.PAYMENTS, store_helpers.USERS, store_helpers.RIDERS)

def _check_table(client, name: str) -> Dict[str, Any]:
    try:
        res = client.table(name).select("id").limit(1).execute()
        return {"ok": True, "rows": len(store_helpers.rows(res))}
    except Exception as e:
        return {"ok": False, "error": str(e)}

def health_store_info(client) -> Dict[str, Any]:
    """Accessibilité de la base: une lecture minimale par table, sans lever d'exception."""
    parsed = urlparse(SUPABASE_URL) if SUPABASE_URL else None
    info = {
        "supabase_url": SUPABASE_URL,
        "hostname": parsed.hostname if parsed else None,
        "connect_ok": False,
        "tables": {},
    }
    for name in TABLES:
        info["tables"][name] = _check_table(client, name)
    info["connect_ok"] = all(t["ok"] for t in info["tables"].values())
    return info
