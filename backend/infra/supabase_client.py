"""
Client Supabase du backend.
- Créé une seule fois au démarrage (lifespan), rangé dans app.state.store, fermé à l'arrêt.
- Les vues le reçoivent via la dépendance get_store et le passent explicitement aux services/repositories.
"""
import logging
from fastapi import Request
from supabase import create_client, Client
from backend.config import SUPABASE_URL, SUPABASE_KEY

logger = logging.getLogger(__name__)

def create_store_client() -> Client:
    if not SUPABASE_URL or not SUPABASE_KEY:
        raise RuntimeError("SUPABASE_URL/SUPABASE_SERVICE_KEY manquants")
    return create_client(SUPABASE_URL, SUPABASE_KEY)

def close_store_client(client: Client) -> None:
    """Ferme la session HTTP PostgREST sous-jacente (si elle a été ouverte)."""
    postgrest = getattr(client, "postgrest", None)
    session = getattr(postgrest, "session", None)
    if session is not None:
        session.close()
        logger.info("Client Supabase fermé")

def get_store(request: Request) -> Client:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Client Supabase non initialisé (lifespan non exécuté)")
    return store
