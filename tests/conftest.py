import os
import pytest
from typing import Generator
from fastapi.testclient import TestClient

from fakes import FakeStore, ADMIN_EMAIL, USER_EMAIL

# Pas de Redis pendant les tests: posé avant la création de l'app
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

from backend.app_setup.factory import create_app
from backend.utils.security import verify_token


# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "tests/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)

@pytest.fixture()
def store() -> FakeStore:
    s = FakeStore()
    s.seed("users", email=ADMIN_EMAIL, display_name="Admin", role="admin")
    s.seed("users", email=USER_EMAIL, display_name="Sender", role="user")
    return s

@pytest.fixture()
def app(store, monkeypatch):
    # Le lifespan crée le client via le module: on y substitue le faux store
    monkeypatch.setattr("backend.infra.supabase_client.create_store_client", lambda: store)
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)
    application = create_app()
    yield application
    application.dependency_overrides.clear()

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

@pytest.fixture()
def login_as(app):
    """Simule l'email vérifié de l'appelant (court-circuite la vérification du jeton)."""
    def _login(email: str):
        app.dependency_overrides[verify_token] = lambda: email
    return _login

@pytest.fixture()
def fake_stripe(monkeypatch):
    """Remplace les appels Stripe: sessions créées en mémoire, relues par identifiant."""
    sessions = {}

    def _create_session(**kwargs):
        sid = f"cs_test_{len(sessions) + 1}"
        sessions[sid] = {"id": sid, "url": f"https://checkout.stripe.test/{sid}", **kwargs}
        return {"id": sid, "url": sessions[sid]["url"]}

    def _get_session(session_id):
        from backend.utils.errors import ProviderLookupError, ValidationError
        if not session_id:
            raise ValidationError("session_id manquant")
        if session_id not in sessions:
            raise ProviderLookupError(f"Session introuvable: {session_id}")
        return sessions[session_id]

    monkeypatch.setattr("backend.payments.stripe_client.create_session", _create_session)
    monkeypatch.setattr("backend.payments.stripe_client.get_session", _get_session)
    return sessions
