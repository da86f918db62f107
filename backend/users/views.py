"""Endpoints du domaine Utilisateurs (/users).
Sécurité:
- verify_token: recherche et lecture du rôle réservées aux appelants authentifiés
- require_admin: changement de rôle réservé aux administrateurs
"""
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, EmailStr
from supabase import Client

from backend.infra.supabase_client import get_store
from backend.utils.security import verify_token, require_admin
from backend.users import service as users_service

router = APIRouter(prefix="/users", tags=["Users"])

class SignupRecord(BaseModel):
    email: EmailStr
    display_name: Optional[str] = None
    photo_url: Optional[str] = None

class RoleUpdate(BaseModel):
    role: Literal["user", "admin", "rider"]

@router.post("")
def create_user(req: SignupRecord, store: Client = Depends(get_store)):
    return users_service.register_user(store, req.model_dump())

@router.get("")
def search_users(
    searchText: Optional[str] = Query(default=None),
    _email: str = Depends(verify_token),
    store: Client = Depends(get_store),
):
    return users_service.search_users(store, searchText)

@router.get("/{email}/role")
def get_user_role(email: str, _caller: str = Depends(verify_token), store: Client = Depends(get_store)):
    return users_service.get_role(store, email)

@router.patch("/{user_id}/role")
def update_user_role(
    user_id: str,
    req: RoleUpdate,
    _admin: dict = Depends(require_admin),
    store: Client = Depends(get_store),
):
    return users_service.change_role(store, user_id, req.role)
