import pytest

from order_tracker.application.customer_service import CustomerService
from order_tracker.application.product_service import ProductService
from order_tracker.application.schemas import MAX_QUANTITY, CustomerCreate, ProductCreate

@pytest.fixture
def catalog(db):
    """Customers up to id 7 and products 1-3, mirroring a small live store."""
    customers = CustomerService(db)
    for n in range(1, 8):
        customers.create(CustomerCreate(name=f"Müşteri {n}"))
    for name in ("limonata", "sade soda", "meyveli soda"):
        ProductService(db).create(ProductCreate(name=name))

def place(client, **body):
    body.setdefault("customerId", 7)
    body.setdefault("items", [{"productId": 3, "quantity": 2}])
    return client.post('/api/orders', json=body)

def test_health(client):
    resp = client.get('/api/health')
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}

def test_create_order_defaults(client, catalog):
    resp = place(client)
    assert resp.status_code == 201
    order = resp.json()
    assert order["customerId"] == 7
    assert order["customer"]["name"] == "Müşteri 7"
    assert [(i["productId"], i["quantity"]) for i in order["items"]] == [(3, 2)]
    assert order["items"][0]["product"]["name"] == "meyveli soda"
    assert order["status"] == "in-preparation"
    assert order["paymentStatus"] == "not-collected"
    assert order["invoiceStatus"] == "not-required"
    assert order["totalQuantity"] == 2
    assert order["note"] is None

def test_create_order_with_overrides_and_legacy_values(client, catalog):
    resp = place(client, status="TESLIM_EDILDI", paymentStatus="Tahsil Edildi", invoiceStatus="issued", note="akşam")
    assert resp.status_code == 201
    order = resp.json()
    assert (order["status"], order["paymentStatus"], order["invoiceStatus"]) == ("delivered", "prepaid", "issued")
    assert order["note"] == "akşam"

def test_create_order_accepts_snake_case(client, catalog):
    resp = client.post('/api/orders', json={"customer_id": 7, "items": [{"product_id": 1, "quantity": 1}]})
    assert resp.status_code == 201

def test_create_order_with_inline_customer(client, catalog):
    resp = client.post('/api/orders', json={
        "customer": {"name": "Yeni Büfe", "phone": "0544"},
        "items": [{"productId": 1, "quantity": 12}],
    })
    assert resp.status_code == 201
    assert resp.json()["customer"]["name"] == "Yeni Büfe"
    assert len(client.get('/api/customers').json()) == 8

@pytest.mark.parametrize("body", [
    {"items": [{"productId": 1, "quantity": 1}]},
    {"customerId": 7, "items": []},
    {"customerId": 7, "items": [{"productId": 1, "quantity": 0}, {"productId": 2, "quantity": -2}]},
])
def test_create_order_validation_errors(client, catalog, body):
    resp = client.post('/api/orders', json=body)
    assert resp.status_code == 400
    assert client.get('/api/orders').json() == []

def test_create_order_unknown_references(client, catalog):
    assert place(client, customerId=70).status_code == 404
    assert place(client, items=[{"productId": 30, "quantity": 1}]).status_code == 404
    assert client.get('/api/orders').json() == []

def test_create_order_invalid_status(client, catalog):
    resp = place(client, status="lost")
    assert resp.status_code == 422

def test_update_order_items(client, catalog):
    order = place(client, items=[{"productId": 1, "quantity": 5}]).json()
    resp = client.put(f'/api/orders/{order["id"]}', json={
        "items": [{"productId": 1, "quantity": 0}, {"productId": 2, "quantity": 4}],
    })
    assert resp.status_code == 200
    updated = resp.json()
    assert [(i["productId"], i["quantity"]) for i in updated["items"]] == [(2, 4)]
    assert updated["status"] == "in-preparation"

def test_update_order_statuses_and_note(client, catalog):
    order = place(client).json()
    resp = client.put(f'/api/orders/{order["id"]}', json={
        "status": "delivered",
        "paymentStatus": "collect-on-delivery",
        "invoiceStatus": "customer-declined",
        "note": "teslim edildi",
    })
    updated = resp.json()
    assert (updated["status"], updated["paymentStatus"], updated["invoiceStatus"]) == (
        "delivered", "collect-on-delivery", "customer-declined",
    )
    assert updated["note"] == "teslim edildi"
    assert [(i["productId"], i["quantity"]) for i in updated["items"]] == [(3, 2)]

def test_any_status_may_follow_any_other(client, catalog):
    order = place(client, status="delivered").json()
    resp = client.put(f'/api/orders/{order["id"]}', json={"status": "in-preparation"})
    assert resp.json()["status"] == "in-preparation"

def test_same_update_twice_gives_same_state(client, catalog):
    order = place(client).json()
    payload = {"paymentStatus": "credit", "items": [{"productId": 1, "quantity": 2}, {"productId": 2, "quantity": 1}]}
    first = client.put(f'/api/orders/{order["id"]}', json=payload).json()
    second = client.put(f'/api/orders/{order["id"]}', json=payload).json()

    def state(o):
        return o["paymentStatus"], [(i["productId"], i["quantity"]) for i in o["items"]]

    assert state(first) == state(second)
    assert len(second["items"]) == 2

def test_update_missing_order(client, catalog):
    order = place(client).json()
    resp = client.put('/api/orders/999', json={"status": "delivered", "items": []})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Order not found"
    assert client.get(f'/api/orders/{order["id"]}').json() == order

def test_update_with_unknown_product_rolls_back(client, catalog):
    order = place(client).json()
    resp = client.put(f'/api/orders/{order["id"]}', json={
        "status": "delivered",
        "items": [{"productId": 1, "quantity": 1}, {"productId": 55, "quantity": 1}],
    })
    assert resp.status_code == 404
    assert client.get(f'/api/orders/{order["id"]}').json() == order

def test_get_order(client, catalog):
    order = place(client).json()
    assert client.get(f'/api/orders/{order["id"]}').json()["id"] == order["id"]
    assert client.get('/api/orders/999').status_code == 404

def test_list_orders_newest_first_with_filters(client, catalog):
    first = place(client, customerId=1, items=[{"productId": 1, "quantity": 1}]).json()
    second = place(client, customerId=2, status="delivered").json()

    assert [o["id"] for o in client.get('/api/orders').json()] == [second["id"], first["id"]]
    assert [o["id"] for o in client.get('/api/orders', params={"status": "delivered"}).json()] == [second["id"]]
    assert [o["id"] for o in client.get('/api/orders', params={"status": "HAZIRLANIYOR"}).json()] == [first["id"]]
    assert [o["id"] for o in client.get('/api/orders', params={"customerId": 1}).json()] == [first["id"]]
    assert [o["id"] for o in client.get('/api/orders', params={"q": "limonata"}).json()] == [first["id"]]
    assert client.get('/api/orders', params={"status": "lost"}).status_code == 422

def test_order_totals_match_items(client, catalog):
    place(client, items=[{"productId": 1, "quantity": 3}, {"productId": 2, "quantity": 8}])
    place(client, items=[{"productId": 3, "quantity": 11}])
    for order in client.get('/api/orders').json():
        assert order["totalQuantity"] == sum(i["quantity"] for i in order["items"])

def test_order_stats(client, catalog):
    place(client, items=[{"productId": 1, "quantity": 3}])
    place(client, customerId=3, status="delivered", paymentStatus="prepaid")
    stats = client.get('/api/orders/stats').json()
    assert stats["totalOrders"] == 2
    assert stats["delivered"] == 1
    assert stats["inPreparation"] == 1
    assert stats["collected"] == 1
    assert stats["uniqueCustomers"] == 2
    assert stats["totalQuantity"] == 5
    assert stats["byStatus"] == {"in-preparation": 1, "delivered": 1}

def test_delete_order(client, catalog):
    order = place(client).json()
    assert client.delete(f'/api/orders/{order["id"]}').status_code == 204
    assert client.get(f'/api/orders/{order["id"]}').status_code == 404
    assert client.delete(f'/api/orders/{order["id"]}').status_code == 404

def test_statuses(client):
    vocab = client.get('/api/statuses').json()
    assert [v["value"] for v in vocab["status"]["values"]] == ["in-preparation", "delivered"]
    assert vocab["invoiceStatus"]["values"][1] == {"value": "customer-declined", "label": "İstemiyor"}

def test_request_id_echoed(client):
    resp = client.get('/api/health', headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"

def test_quantity_beyond_column_range_is_rejected(client, catalog):
    resp = place(client, items=[{"productId": 1, "quantity": 2**63}])
    assert resp.status_code == 422
    assert client.get('/api/orders').json() == []

    order = place(client).json()
    resp = client.put(f'/api/orders/{order["id"]}', json={"items": [{"productId": 1, "quantity": MAX_QUANTITY + 1}]})
    assert resp.status_code == 422
    assert client.get(f'/api/orders/{order["id"]}').json() == order

def test_largest_quantities_are_summed_exactly(client, catalog):
    resp = place(client, items=[{"productId": 1, "quantity": MAX_QUANTITY}, {"productId": 2, "quantity": MAX_QUANTITY}])
    assert resp.status_code == 201
    order = resp.json()
    assert [i["quantity"] for i in order["items"]] == [MAX_QUANTITY, MAX_QUANTITY]
    assert order["totalQuantity"] == 2 * MAX_QUANTITY == 4294967294
    assert client.get('/api/orders/stats').json()["totalQuantity"] == 4294967294

@pytest.mark.parametrize("customer_id", [0, -1])
def test_non_positive_customer_id_means_no_customer(client, catalog, customer_id):
    resp = place(client, customerId=customer_id)
    assert resp.status_code == 400
    assert client.get('/api/orders').json() == []

def test_null_note_clears_omitted_note_keeps(client, catalog):
    order = place(client, note="kapıda öde").json()
    kept = client.put(f'/api/orders/{order["id"]}', json={"status": "delivered"}).json()
    assert kept["note"] == "kapıda öde"
    cleared = client.put(f'/api/orders/{order["id"]}', json={"note": None}).json()
    assert cleared["note"] is None
    assert cleared["status"] == "delivered"

@pytest.mark.parametrize("term", ["%", "_", "\\"])
def test_search_wildcards_match_literally(client, catalog, term):
    place(client, note="indirim yok")
    assert client.get('/api/orders', params={"q": term}).json() == []

def test_search_finds_literal_percent(client, catalog):
    place(client, note="yok")
    discounted = place(client, note="%10 indirim").json()
    assert [o["id"] for o in client.get('/api/orders', params={"q": "%10"}).json()] == [discounted["id"]]
