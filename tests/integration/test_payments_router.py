from fakes import PARCEL_ID, USER_EMAIL


def test_checkout_returns_redirect_url(client, fake_stripe):
    r = client.post("/checkout-payment", json={
        "parcelId": PARCEL_ID, "parcelName": "Books", "senderEmail": USER_EMAIL, "cost": 500,
    })
    assert r.status_code == 200
    assert r.json()["url"].startswith("https://checkout.stripe.test/")
    [session] = fake_stripe.values()
    assert session["line_items"][0]["price_data"]["unit_amount"] == 50000


def test_checkout_rejects_non_numeric_cost(client, fake_stripe):
    r = client.post("/checkout-payment", json={
        "parcelId": PARCEL_ID, "parcelName": "Books", "senderEmail": USER_EMAIL, "cost": "abc",
    })
    assert r.status_code == 400
    assert fake_stripe == {}


def test_checkout_provider_error_is_500_with_message(client, monkeypatch):
    from backend.utils.errors import PaymentProviderError

    def _refuse(**kwargs):
        raise PaymentProviderError("Amount must be at least 50 cents")
    monkeypatch.setattr("backend.payments.stripe_client.create_session", _refuse)

    r = client.post("/checkout-payment", json={
        "parcelId": PARCEL_ID, "parcelName": "Books", "senderEmail": USER_EMAIL, "cost": 0.1,
    })
    assert r.status_code == 500
    assert r.json() == {"detail": "Amount must be at least 50 cents"}


def test_payment_success_unknown_session_is_502(client, fake_stripe):
    r = client.patch("/payment-success", params={"session_id": "cs_unknown"})
    assert r.status_code == 502


def test_payment_success_without_session_id_is_400(client, fake_stripe):
    assert client.patch("/payment-success").status_code == 400


def test_payments_requires_token(client):
    r = client.get("/payments")
    assert r.status_code == 401
    assert r.json() == {"detail": "unauthorized access"}


def test_payments_scoped_to_caller(client, store, login_as):
    store.seed("payments", transaction_id="tx1", customer_email=USER_EMAIL, paid_at="2024-01-01T00:00:00+00:00")
    store.seed("payments", transaction_id="tx2", customer_email=USER_EMAIL, paid_at="2024-02-01T00:00:00+00:00")
    store.seed("payments", transaction_id="tx3", customer_email="other@example.com", paid_at="2024-03-01T00:00:00+00:00")
    login_as(USER_EMAIL)

    r = client.get("/payments", params={"email": USER_EMAIL})
    assert r.status_code == 200
    assert [p["transaction_id"] for p in r.json()] == ["tx2", "tx1"]

    # Sans email: l'appelant voit ses propres paiements
    assert len(client.get("/payments").json()) == 2


def test_payments_for_another_email_is_forbidden(client, login_as):
    login_as(USER_EMAIL)
    r = client.get("/payments", params={"email": "other@example.com"})
    assert r.status_code == 403
    assert r.json() == {"detail": "forbidden access"}


def test_checkout_rejects_huge_cost_without_server_error(client, fake_stripe):
    r = client.post("/checkout-payment", json={
        "parcelId": PARCEL_ID, "parcelName": "Books", "senderEmail": USER_EMAIL, "cost": "1e30",
    })
    assert r.status_code == 400
    assert fake_stripe == {}
