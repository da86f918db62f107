"""Endpoints des livreurs (/riders). Décision et suppression réservées aux administrateurs."""
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, EmailStr
from supabase import Client

from backend.infra.supabase_client import get_store
from backend.utils.security import require_admin
from backend.riders import service as riders_service

router = APIRouter(prefix="/riders", tags=["Riders"])

class RiderApplication(BaseModel):
    email: EmailStr
    name: Optional[str] = None
    region: Optional[str] = None
    district: Optional[str] = None
    phone: Optional[str] = None

class RiderDecision(BaseModel):
    status: Literal["pending", "approved", "rejected"]
    email: Optional[EmailStr] = None

@router.post("", status_code=201)
def create_rider(req: RiderApplication, store: Client = Depends(get_store)):
    return riders_service.apply(store, req.model_dump(exclude_none=True))

@router.get("")
def list_riders(status: Optional[str] = Query(default=None), store: Client = Depends(get_store)):
    return riders_service.list_riders(store, status)

@router.patch("/{rider_id}")
def update_rider(
    rider_id: str,
    req: RiderDecision,
    _admin: dict = Depends(require_admin),
    store: Client = Depends(get_store),
):
    return riders_service.set_status(store, rider_id, req.status, req.email)

@router.delete("/{rider_id}")
def delete_rider(rider_id: str, _admin: dict = Depends(require_admin), store: Client = Depends(get_store)):
    return riders_service.remove(store, rider_id)
