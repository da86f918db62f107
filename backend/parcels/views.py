"""Endpoints CRUD des colis (/parcels)."""
from decimal import Decimal
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, EmailStr, Field
from supabase import Client

from backend.infra.supabase_client import get_store
from backend.parcels import service as parcels_service

router = APIRouter(prefix="/parcels", tags=["Parcels"])

DeliveryStatus = Literal["pending-pickup", "rider-assigned", "in-transit", "delivered"]

class ParcelCreate(BaseModel):
    sender_email: EmailStr
    parcel_name: str = Field(min_length=1)
    cost: Decimal = Field(gt=0)
    parcel_type: Optional[str] = None
    weight: Optional[Decimal] = Field(default=None, ge=0)
    sender_name: Optional[str] = None
    sender_address: Optional[str] = None
    receiver_name: Optional[str] = None
    receiver_email: Optional[EmailStr] = None
    receiver_address: Optional[str] = None

class ParcelUpdate(BaseModel):
    parcel_name: Optional[str] = Field(default=None, min_length=1)
    cost: Optional[Decimal] = Field(default=None, gt=0)
    parcel_type: Optional[str] = None
    weight: Optional[Decimal] = Field(default=None, ge=0)
    sender_name: Optional[str] = None
    sender_address: Optional[str] = None
    receiver_name: Optional[str] = None
    receiver_email: Optional[EmailStr] = None
    receiver_address: Optional[str] = None
    delivery_status: Optional[DeliveryStatus] = None
    rider_email: Optional[EmailStr] = None

# module backend.parcels.views
@router.get("")
def list_parcels(
    email: Optional[str] = Query(default=None),
    deliveryStatus: Optional[str] = Query(default=None),
    store: Client = Depends(get_store),
):
    return parcels_service.list_parcels(store, email=email, delivery_status=deliveryStatus)

@router.get("/{parcel_id}")
def get_parcel(parcel_id: str, store: Client = Depends(get_store)):
    return parcels_service.get_parcel(store, parcel_id)

@router.post("", status_code=201)
def create_parcel(req: ParcelCreate, store: Client = Depends(get_store)):
    return parcels_service.create_parcel(store, req.model_dump(mode="json", exclude_none=True))

@router.patch("/{parcel_id}")
def update_parcel(parcel_id: str, req: ParcelUpdate, store: Client = Depends(get_store)):
    return parcels_service.update_parcel(store, parcel_id, req.model_dump(mode="json", exclude_unset=True))

@router.delete("/{parcel_id}")
def delete_parcel(parcel_id: str, store: Client = Depends(get_store)):
    return parcels_service.delete_parcel(store, parcel_id)
