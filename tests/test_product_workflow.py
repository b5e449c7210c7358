import requests

from core_service.app.models import Category, Product, ProvisioningOutbox, OutboxStatus
from core_service.app.services import provisioning_worker
from core_service.app.utils import stock_client
from conftest import UnreachableAdapter
from shared.core import auth
from shared.core.config import settings
from shared.utils.app_status_code import AppStatusCode


def product_payload(**overrides):
    payload = {
        "name": "Dog food",
        "description": "Adult dogs, 10kg",
        "image": "https://cdn.example/dog-food.png",
        "price": 129.9,
    }
    payload.update(overrides)
    return payload


def test_create_product_provisions_stock_with_zero_quantity(core_api, stock_api, auth_headers, stock_adapter):
    response = core_api.post("/product", json=product_payload(), headers=auth_headers)

    assert response.status_code == 201
    product = response.json()
    assert product["name"] == "Dog food"
    assert product["image_url"] == "https://cdn.example/dog-food.png"
    assert product["price"] == 129.9
    assert "quantity" not in product

    stock = stock_api.get(f"/stock/{product['id']}")
    assert stock.status_code == 200
    assert stock.json()["quantity"] == 0
    assert stock.json()["relationId"] == product["id"]
    assert stock.json()["name"] == "Dog food"

    # the caller's token goes through unchanged
    assert len(stock_adapter.sent) == 1
    assert stock_adapter.sent[0].headers["Authorization"] == auth_headers["Authorization"]


def test_create_product_marks_outbox_delivered(core_api, auth_headers, db):
    response = core_api.post("/product", json=product_payload(), headers=auth_headers)
    assert response.status_code == 201

    entry = db.query(ProvisioningOutbox).one()
    assert str(entry.product_id) == response.json()["id"]
    assert entry.status == OutboxStatus.delivered
    assert entry.attempts == 1
    assert entry.last_error is None


def test_created_product_is_stable_on_refetch(core_api, auth_headers):
    created = core_api.post(
        "/product",
        json=product_payload(categories=[{"name": "Dogs"}, {"name": "Food"}]),
        headers=auth_headers,
    ).json()

    fetched = core_api.get(f"/product/{created['id']}")

    assert fetched.status_code == 200
    assert fetched.json() == created
    assert sorted(c["name"] for c in fetched.json()["categories"]) == ["Dogs", "Food"]


def test_naming_an_existing_category_reuses_it(core_api, auth_headers, db):
    first = core_api.post(
        "/product", json=product_payload(categories=[{"name": "Toys"}]), headers=auth_headers)
    second = core_api.post(
        "/product", json=product_payload(name="Ball", categories=[{"name": "Toys"}]), headers=auth_headers)

    assert first.status_code == 201
    assert second.status_code == 201
    assert db.query(Category).filter(Category.name == "Toys").count() == 1
    assert first.json()["categories"][0]["id"] == second.json()["categories"][0]["id"]


def test_category_by_id_is_associated(core_api, auth_headers):
    category = core_api.post("/category", json={"name": "Cats"}).json()

    response = core_api.post(
        "/product",
        json=product_payload(categories=[{"id": category["id"], "name": "ignored"}]),
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert response.json()["categories"] == [category]


def test_unknown_category_id_aborts_before_any_write(core_api, auth_headers, db, stock_adapter):
    response = core_api.post(
        "/product",
        json=product_payload(categories=[{"id": 999, "name": "Ghost"}]),
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert db.query(Product).count() == 0
    assert db.query(ProvisioningOutbox).count() == 0
    assert stock_adapter.sent == []


def test_negative_price_is_rejected_before_any_write(core_api, auth_headers, db, stock_adapter):
    response = core_api.post("/product", json=product_payload(price=-1), headers=auth_headers)

    assert response.status_code == 422
    assert response.json()["status"] == "Failure"
    assert db.query(Product).count() == 0
    assert stock_adapter.sent == []


def test_blank_name_is_rejected(core_api, auth_headers, db):
    response = core_api.post("/product", json=product_payload(name="   "), headers=auth_headers)

    assert response.status_code == 422
    assert db.query(Product).count() == 0


def test_missing_token_fails_request_but_keeps_product(core_api, stock_collection, db):
    response = core_api.post("/product", json=product_payload())

    assert response.status_code == 500
    assert response.json()["message"] == "Internal Server Error"
    assert response.json()["status_code"] == AppStatusCode.UPSTREAM_SERVICE_FAILED

    # committed before the stock service refused the call
    product = db.query(Product).one()
    assert stock_collection.count_documents({"relationId": str(product.id)}) == 0

    entry = db.query(ProvisioningOutbox).one()
    assert entry.status == OutboxStatus.pending
    assert entry.attempts == 1
    assert "401" in entry.last_error


def test_unreachable_stock_service_leaves_orphan_product(core_api, auth_headers, db, monkeypatch):
    session = requests.Session()
    adapter = UnreachableAdapter()
    session.mount(settings.STOCK_SERVICE_URL, adapter)
    monkeypatch.setattr(stock_client, "_session", session)

    response = core_api.post("/product", json=product_payload(), headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["status_code"] == AppStatusCode.UPSTREAM_SERVICE_FAILED
    assert len(adapter.sent) == 1
    assert db.query(Product).count() == 1
    assert db.query(ProvisioningOutbox).one().status == OutboxStatus.pending


def test_worker_leaves_entry_alone_while_inline_call_is_in_flight(
        core_api, auth_headers, session_factory, stock_session, stock_collection, monkeypatch):
    worker_runs = []
    original = auth.extract_bearer_token

    # runs after the product and its outbox entry are committed,
    # right before the inline call to the stock service
    def extract_then_run_worker(authorization):
        worker_db = session_factory()
        try:
            worker_runs.append(provisioning_worker.retry_pending_provisioning(
                worker_db, session=stock_session))
        finally:
            worker_db.close()
        return original(authorization)

    monkeypatch.setattr(auth, "extract_bearer_token", extract_then_run_worker)

    response = core_api.post("/product", json=product_payload(), headers=auth_headers)

    assert response.status_code == 201
    assert worker_runs == [0]
    assert stock_collection.count_documents({"relationId": response.json()["id"]}) == 1

def test_list_products_paginates(core_api, auth_headers):
    for name in ["A", "B", "C"]:
        core_api.post("/product", json=product_payload(name=name), headers=auth_headers)

    first = core_api.get("/product", params={"page": 1, "limit": 2})
    second = core_api.get("/product", params={"page": 2, "limit": 2})

    assert first.status_code == 200
    assert second.status_code == 200
    assert len(first.json()) == 2
    assert len(second.json()) == 1
    names = {p["name"] for p in first.json() + second.json()}
    assert names == {"A", "B", "C"}


def test_get_unknown_product_is_not_found(core_api):
    response = core_api.get("/product/1b4e28ba-2fa1-11d2-883f-0016d3cca427")

    assert response.status_code == 404
    assert response.json()["message"] == "Product not found"


def test_update_product_changes_only_given_fields(core_api, auth_headers):
    created = core_api.post("/product", json=product_payload(), headers=auth_headers).json()

    response = core_api.put(
        f"/product/{created['id']}",
        json={"price": 99.5, "categories": [{"name": "Promo"}]},
    )

    assert response.status_code == 200
    assert response.json()["price"] == 99.5
    assert response.json()["name"] == "Dog food"
    assert [c["name"] for c in response.json()["categories"]] == ["Promo"]


def test_delete_product_does_not_touch_stock(core_api, stock_api, auth_headers):
    created = core_api.post("/product", json=product_payload(), headers=auth_headers).json()

    response = core_api.delete(f"/product/{created['id']}")

    assert response.status_code == 204
    assert core_api.get(f"/product/{created['id']}").status_code == 404
    assert stock_api.get(f"/stock/{created['id']}").status_code == 200
