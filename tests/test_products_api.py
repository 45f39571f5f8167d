"""
Product catalog endpoints.
"""
import uuid

import pytest
from sqlalchemy.exc import OperationalError

from app.models.product import Product
from app.routers import products as products_router
from app.services import product_service

API = "/api/v1"


def create(client, headers, **overrides):
    payload = {"name": "Chocolate Cake", "price": 450.0, "quantity": 5, **overrides}
    response = client.post(f"{API}/products", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestProductCrud:
    def test_create_and_get(self, client, auth_headers, seller):
        created = create(client, auth_headers, name="  Lemon Tart  ")

        assert created["name"] == "Lemon Tart"
        assert created["seller_id"] == str(seller.id)
        assert created["image_url"] is None

        response = client.get(f"{API}/products/{created['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == created

    def test_list_is_newest_first(self, client, auth_headers, seller):
        first = create(client, auth_headers, name="First")
        second = create(client, auth_headers, name="Second")

        response = client.get(f"{API}/products", headers=auth_headers)

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [second["id"], first["id"]]

    def test_validation(self, client, auth_headers, seller):
        bad_payloads = [
            {"name": "", "price": 10},
            {"name": "Cake", "price": 0},
            {"name": "Cake", "price": 10, "quantity": -1},
            {"name": "Cake", "price": 10, "colour": "red"},
        ]
        for payload in bad_payloads:
            response = client.post(f"{API}/products", json=payload, headers=auth_headers)
            assert response.status_code == 422, payload

    def test_partial_update_bumps_updated_at(self, client, auth_headers, seller):
        created = create(client, auth_headers)

        response = client.patch(
            f"{API}/products/{created['id']}",
            json={"quantity": 12},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["quantity"] == 12
        assert body["name"] == created["name"]
        assert body["price"] == created["price"]
        assert body["updated_at"] >= created["updated_at"]

    def test_delete(self, client, auth_headers, seller):
        created = create(client, auth_headers)

        response = client.delete(f"{API}/products/{created['id']}", headers=auth_headers)
        assert response.status_code == 204

        response = client.get(f"{API}/products/{created['id']}", headers=auth_headers)
        assert response.status_code == 404

    def test_other_sellers_products_are_invisible(
        self, client, auth_headers, seller, other_seller, db_session
    ):
        foreign = Product(seller_id=other_seller.id, name="Rival Cake", price=10, quantity=1)
        db_session.add(foreign)
        db_session.commit()

        assert client.get(f"{API}/products", headers=auth_headers).json() == []
        for method in ("get", "delete"):
            response = getattr(client, method)(
                f"{API}/products/{foreign.id}", headers=auth_headers
            )
            assert response.status_code == 404
        response = client.patch(
            f"{API}/products/{foreign.id}", json={"quantity": 0}, headers=auth_headers
        )
        assert response.status_code == 404

    def test_unknown_product(self, client, auth_headers, seller):
        response = client.get(f"{API}/products/{uuid.uuid4()}", headers=auth_headers)
        assert response.status_code == 404


class TestProductImage:
    @pytest.fixture
    def storage(self, monkeypatch):
        calls = {"uploaded": [], "deleted": []}

        def fake_upload(path, file_bytes, content_type):
            calls["uploaded"].append(path)
            return f"https://cdn.example.com/storage/v1/object/public/assets/{path}"

        monkeypatch.setattr(product_service, "upload_to_storage", fake_upload)
        monkeypatch.setattr(product_service, "delete_public_url", calls["deleted"].append)
        return calls

    def test_upload_then_delete_product_cleans_storage(
        self, client, auth_headers, seller, storage
    ):
        created = create(client, auth_headers)
        files = {"file": ("cake.webp", b"RIFF....WEBP", "image/webp")}

        response = client.post(
            f"{API}/products/{created['id']}/image", files=files, headers=auth_headers
        )

        assert response.status_code == 200
        image_url = response.json()["image_url"]
        assert storage["uploaded"] == [f"products/{created['id']}/image.webp"]

        client.delete(f"{API}/products/{created['id']}", headers=auth_headers)
        assert storage["deleted"] == [image_url]

    def test_rejects_unsupported_type(self, client, auth_headers, seller, storage):
        created = create(client, auth_headers)
        files = {"file": ("cake.gif", b"GIF89a", "image/gif")}

        response = client.post(
            f"{API}/products/{created['id']}/image", files=files, headers=auth_headers
        )

        assert response.status_code == 400
        assert storage["uploaded"] == []

    def attach_image(self, db_session, product_id):
        product = db_session.get(Product, uuid.UUID(product_id))
        product.image_url = (
            f"https://cdn.example.com/storage/v1/object/public/assets/products/{product_id}/image.png"
        )
        db_session.add(product)
        db_session.commit()
        return product.image_url

    def test_failed_upload_keeps_the_old_image(
        self, client, auth_headers, seller, db_session, storage, monkeypatch
    ):
        created = create(client, auth_headers)
        old_url = self.attach_image(db_session, created["id"])

        def failing_upload(path, file_bytes, content_type):
            raise RuntimeError("storage unavailable")

        monkeypatch.setattr(product_service, "upload_to_storage", failing_upload)
        files = {"file": ("cake.webp", b"RIFF....WEBP", "image/webp")}

        with pytest.raises(RuntimeError):
            client.post(
                f"{API}/products/{created['id']}/image", files=files, headers=auth_headers
            )

        assert storage["deleted"] == []
        db_session.expire_all()
        assert db_session.get(Product, uuid.UUID(created["id"])).image_url == old_url

    def test_replacing_with_another_type_removes_the_old_object(
        self, client, auth_headers, seller, db_session, storage
    ):
        created = create(client, auth_headers)
        old_url = self.attach_image(db_session, created["id"])
        files = {"file": ("cake.webp", b"RIFF....WEBP", "image/webp")}

        response = client.post(
            f"{API}/products/{created['id']}/image", files=files, headers=auth_headers
        )

        assert response.status_code == 200
        assert storage["deleted"] == [old_url]

    def test_image_survives_a_failed_delete(
        self, client, auth_headers, seller, db_session, storage, monkeypatch
    ):
        created = create(client, auth_headers)
        self.attach_image(db_session, created["id"])

        def broken_delete(session, product):
            raise OperationalError("DELETE", {}, Exception("database is locked"))

        monkeypatch.setattr(products_router.service.repo, "delete", broken_delete)

        with pytest.raises(OperationalError):
            client.delete(f"{API}/products/{created['id']}", headers=auth_headers)

        assert storage["deleted"] == []
