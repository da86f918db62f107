from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from supabase import Client

from backend.health.service import health_store_info
from backend.infra.supabase_client import get_store
from backend.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root(request: Request):
    return {"ok": True, "rate_limit": rate_limit_health_info(request)}

@router.get("/store")
def health_store(store: Client = Depends(get_store)):
    info = health_store_info(store)
    return JSONResponse(info, status_code=200 if info["connect_ok"] else 503)
