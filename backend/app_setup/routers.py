"""
Registre central des routers.
- CRUD: parcels, users, riders
- Paiements: checkout, confirmation, historique
- Health: health_router
"""
from fastapi import FastAPI
from backend.parcels.views import router as parcels_router
from backend.users.views import router as users_router
from backend.riders.views import router as riders_router
from backend.payments import views as payments_views
from backend.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    """L’ordre n’a pas d’impact sauf conflits de chemins (évités par préfixes)."""
    app.include_router(parcels_router)
    app.include_router(users_router)
    app.include_router(riders_router)
    app.include_router(payments_views.router)
    # Health & monitoring
    app.include_router(health_router)
