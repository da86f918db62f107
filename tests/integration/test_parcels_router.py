from fakes import USER_EMAIL


def _create(client, **overrides):
    body = {"sender_email": USER_EMAIL, "parcel_name": "Books", "cost": "12.50"}
    body.update(overrides)
    return client.post("/parcels", json=body)


def test_create_parcel_starts_unpaid(client, store):
    r = _create(client, sender_email="Sender@Example.com")
    assert r.status_code == 201
    parcel = r.json()["parcel"]
    assert r.json()["insertedId"] == parcel["id"]
    assert parcel["sender_email"] == USER_EMAIL
    assert parcel["cost"] == "12.50"
    assert parcel.get("tracking_id") is None
    assert parcel.get("payment_status") is None


def test_create_parcel_ignores_payment_fields(client):
    r = _create(client, payment_status="paid", tracking_id="PARCEL-20240101-ABCDEF")
    assert r.status_code == 201
    assert r.json()["parcel"].get("tracking_id") is None


def test_create_parcel_requires_positive_cost(client):
    assert _create(client, cost=0).status_code == 422


def test_list_parcels_filters_and_sorts(client, store):
    store.seed("parcels", sender_email=USER_EMAIL, parcel_name="old", created_at="2024-01-01T00:00:00+00:00")
    store.seed("parcels", sender_email=USER_EMAIL, parcel_name="new", created_at="2024-02-01T00:00:00+00:00",
               delivery_status="pending-pickup")
    store.seed("parcels", sender_email="other@example.com", parcel_name="other", created_at="2024-03-01T00:00:00+00:00")

    names = [p["parcel_name"] for p in client.get("/parcels", params={"email": USER_EMAIL}).json()]
    assert names == ["new", "old"]

    pending = client.get("/parcels", params={"deliveryStatus": "pending-pickup"}).json()
    assert [p["parcel_name"] for p in pending] == ["new"]

    assert len(client.get("/parcels").json()) == 3


def test_get_update_delete_parcel(client):
    parcel_id = _create(client).json()["insertedId"]

    assert client.get(f"/parcels/{parcel_id}").json()["parcel_name"] == "Books"

    r = client.patch(f"/parcels/{parcel_id}", json={"delivery_status": "rider-assigned", "rider_email": "r@example.com"})
    assert r.status_code == 200
    assert r.json()["parcel"]["delivery_status"] == "rider-assigned"

    assert client.delete(f"/parcels/{parcel_id}").json() == {"deletedCount": 1}
    assert client.get(f"/parcels/{parcel_id}").status_code == 404
    assert client.delete(f"/parcels/{parcel_id}").status_code == 404


def test_update_cannot_touch_tracking_id(client):
    parcel_id = _create(client).json()["insertedId"]
    r = client.patch(f"/parcels/{parcel_id}", json={"tracking_id": "PARCEL-20240101-ABCDEF"})
    assert r.status_code == 400
    assert client.get(f"/parcels/{parcel_id}").json().get("tracking_id") is None


def test_malformed_parcel_id_is_400(client):
    assert client.get("/parcels/not-a-uuid").status_code == 400
