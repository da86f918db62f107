"""
Parcours complet: création du colis -> checkout -> paiement Stripe (simulé) -> confirmation -> re-confirmation.
"""
from fakes import USER_EMAIL
from backend.payments.tracking import is_tracking_id


def _pay(fake_stripe, session_id, **fields):
    values = {"payment_status": "paid", "payment_intent": "tx1", "amount_total": 500, "currency": "usd"}
    values.update(fields)
    fake_stripe[session_id].update(values)


def _session_id(url):
    return url.rsplit("/", 1)[-1]


def test_checkout_then_confirm_marks_parcel_paid_once(client, store, fake_stripe, login_as):
    parcel = client.post("/parcels", json={"sender_email": USER_EMAIL, "parcel_name": "P1", "cost": "5"}).json()
    parcel_id = parcel["insertedId"]

    checkout = client.post("/checkout-payment", json={
        "parcelId": parcel_id, "parcelName": "P1", "senderEmail": USER_EMAIL, "cost": 5,
    })
    assert checkout.status_code == 200
    session_id = _session_id(checkout.json()["url"])
    assert fake_stripe[session_id]["line_items"][0]["price_data"]["unit_amount"] == 500

    _pay(fake_stripe, session_id)
    first = client.patch("/payment-success", params={"session_id": session_id})
    assert first.status_code == 200
    body = first.json()
    assert body["success"] is True
    assert body["transactionId"] == "tx1"
    assert is_tracking_id(body["trackingId"])

    stored = client.get(f"/parcels/{parcel_id}").json()
    assert stored["payment_status"] == "paid"
    assert stored["delivery_status"] == "pending-pickup"
    assert stored["tracking_id"] == body["trackingId"]

    [payment] = store.all("payments")
    assert payment["transaction_id"] == "tx1"
    assert payment["amount"] == "5.00"
    assert payment["parcel_id"] == parcel_id

    # Rafraîchissement de la page de succès: aucune nouvelle écriture, même numéro de suivi
    writes = len(store.writes)
    again = client.patch("/payment-success", params={"session_id": session_id}).json()
    assert again == {"success": True, "alreadyExists": True, "transactionId": "tx1", "trackingId": body["trackingId"]}
    assert len(store.writes) == writes
    assert len(store.all("payments")) == 1

    login_as(USER_EMAIL)
    history = client.get("/payments").json()
    assert [p["tracking_id"] for p in history] == [body["trackingId"]]


def test_unpaid_session_leaves_everything_untouched(client, store, fake_stripe):
    parcel_id = client.post("/parcels", json={"sender_email": USER_EMAIL, "parcel_name": "P2", "cost": 9}).json()["insertedId"]
    checkout = client.post("/checkout-payment", json={
        "parcelId": parcel_id, "parcelName": "P2", "senderEmail": USER_EMAIL, "cost": 9,
    })
    session_id = _session_id(checkout.json()["url"])
    _pay(fake_stripe, session_id, payment_status="unpaid")

    writes = len(store.writes)
    assert client.patch("/payment-success", params={"session_id": session_id}).json() == {"success": False}
    assert len(store.writes) == writes
    assert store.all("payments") == []
    assert client.get(f"/parcels/{parcel_id}").json().get("tracking_id") is None
