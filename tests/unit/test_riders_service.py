import pytest
from fastapi import HTTPException

from backend.riders import service as riders_service
from fakes import FakeStore

@pytest.fixture
def store():
    s = FakeStore()
    s.seed("users", email="rider@example.com", role="user")
    return s

def test_apply_forces_pending_status(store):
    result = riders_service.apply(store, {"email": "Rider@Example.com", "name": "R", "status": "approved"})
    assert result["rider"]["status"] == "pending"
    assert result["rider"]["email"] == "rider@example.com"

def test_approval_promotes_user(store):
    rider = store.seed("riders", email="rider@example.com", status="pending")
    result = riders_service.set_status(store, rider["id"], "approved")

    assert result["rider"]["status"] == "approved"
    assert result["userRoleUpdated"] is True
    assert store.all("users")[0]["role"] == "rider"

def test_rejection_leaves_role_untouched(store):
    rider = store.seed("riders", email="rider@example.com", status="pending")
    result = riders_service.set_status(store, rider["id"], "rejected")

    assert result["userRoleUpdated"] is None
    assert store.all("users")[0]["role"] == "user"

def test_approval_reports_missing_user(store):
    rider = store.seed("riders", email="stranger@example.com", status="pending")
    result = riders_service.set_status(store, rider["id"], "approved")
    assert result["rider"]["status"] == "approved"
    assert result["userRoleUpdated"] is False

def test_approval_reports_failed_role_write(store):
    rider = store.seed("riders", email="rider@example.com", status="pending")
    store.failures[("users", "update")] = RuntimeError("connection reset")
    result = riders_service.set_status(store, rider["id"], "approved")

    assert result["rider"]["status"] == "approved"
    assert result["userRoleUpdated"] is False
    assert store.all("users")[0]["role"] == "user"

def test_unknown_rider_is_not_found(store):
    with pytest.raises(HTTPException) as exc:
        riders_service.set_status(store, "6f1c2b9e-0b7a-4d43-9a1e-2b7d7c1f9e10", "approved")
    assert exc.value.status_code == 404

def test_approval_with_other_email_is_rejected_before_any_write(store):
    store.seed("users", email="someone@example.com", role="user")
    rider = store.seed("riders", email="rider@example.com", status="pending")
    with pytest.raises(HTTPException) as exc:
        riders_service.set_status(store, rider["id"], "approved", "someone@example.com")

    assert exc.value.status_code == 400
    assert store.all("riders")[0]["status"] == "pending"
    assert store.writes == []
    assert {u["email"]: u["role"] for u in store.all("users")} == {
        "rider@example.com": "user",
        "someone@example.com": "user",
    }

def test_approval_email_matches_case_insensitively(store):
    rider = store.seed("riders", email="rider@example.com", status="pending")
    result = riders_service.set_status(store, rider["id"], "approved", " Rider@Example.com ")
    assert result["userRoleUpdated"] is True
    assert store.all("users")[0]["role"] == "rider"
