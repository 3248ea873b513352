"""Handler tests for the item pages, driven through the Flask test client."""

import io
import os

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError


def _form(**overrides):
    data = {"name": "Bass Guitar", "description": "Four strings", "price": "250.5", "in_stock": "3"}
    data.update(overrides)
    return data


class TestItemList:
    def test_lists_items_with_categories(self, client, stores):
        items, categories = stores
        guitars = categories.add("Guitars")
        items.add("Acoustic Guitar", category=[guitars.id])

        response = client.get("/inventory/items")

        assert response.status_code == 200
        body = response.get_data(as_text=True)
        assert "Acoustic Guitar" in body
        assert f"/inventory/category/{guitars.id}" in body

    def test_empty_list(self, client, stores):
        response = client.get("/inventory/items")

        assert response.status_code == 200
        assert "There are no items." in response.get_data(as_text=True)


class TestItemDetail:
    def test_renders_item(self, client, stores):
        items, categories = stores
        drums = categories.add("Drums")
        item = items.add("Snare Drum", price=120.0, in_stock=4, category=[drums.id])

        response = client.get(f"/inventory/item/{item.id}")

        body = response.get_data(as_text=True)
        assert response.status_code == 200
        assert "Item Detail: Snare Drum" in body
        assert "120.00" in body
        assert "Drums" in body

    def test_missing_item_is_404(self, client, stores):
        response = client.get(f"/inventory/item/{ObjectId()}")

        assert response.status_code == 404
        assert "Item not found" in response.get_data(as_text=True)

    def test_escaped_name_is_not_escaped_again_in_title(self, client, stores):
        items, _ = stores
        item = items.add("Tom &amp; Jerry")

        body = client.get(f"/inventory/item/{item.id}").get_data(as_text=True)

        assert "<title>Item Detail: Tom &amp; Jerry</title>" in body
        assert "&amp;amp;" not in body

    def test_malformed_id_is_404(self, client, stores):
        response = client.get("/inventory/item/not-an-id")

        assert response.status_code == 404


class TestItemCreate:
    def test_get_renders_empty_form_with_categories(self, client, stores):
        _, categories = stores
        categories.add("Keyboards")

        response = client.get("/inventory/item/create")

        body = response.get_data(as_text=True)
        assert response.status_code == 200
        assert "Create Item" in body
        assert "Keyboards" in body
        assert 'class="errors"' not in body

    def test_short_name_rerenders_form_and_does_not_persist(self, client, stores):
        items, _ = stores

        response = client.post("/inventory/item/create", data=_form(name="AB"))

        body = response.get_data(as_text=True)
        assert response.status_code == 200
        assert "Name must be at least 3 characters" in body
        assert items.docs == {}

    def test_failed_submission_keeps_selected_categories_checked(self, client, stores):
        items, categories = stores
        picked = categories.add("Guitars")
        categories.add("Drums")

        response = client.post(
            "/inventory/item/create",
            data=_form(name=" x ", price="-1", category=picked.id),
        )

        body = response.get_data(as_text=True)
        assert f'value="{picked.id}" checked' in body
        assert body.index("Name must be at least 3 characters") < body.index("Price is required")
        assert items.docs == {}

    def test_valid_submission_redirects_to_created_item(self, client, stores):
        items, categories = stores
        first = categories.add("Guitars")
        second = categories.add("Accessories")

        response = client.post(
            "/inventory/item/create",
            data={**_form(), "category": [first.id, second.id]},
        )

        assert response.status_code == 302
        (stored,) = items.docs.values()
        assert response.headers["Location"].endswith(f"/inventory/item/{stored.id}")
        assert stored.name == "Bass Guitar"
        assert stored.description == "Four strings"
        assert stored.price == 250.5
        assert stored.in_stock == 3
        assert stored.category_ids == [first.id, second.id]
        assert stored.image is None

        detail = client.get(response.headers["Location"])
        assert detail.status_code == 200
        assert "Bass Guitar" in detail.get_data(as_text=True)

    def test_uploaded_image_is_stored_and_referenced(self, app, client, stores):
        items, _ = stores

        response = client.post(
            "/inventory/item/create",
            data={**_form(), "image": (io.BytesIO(b"\x89PNG fake"), "photo.png")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 302
        (stored,) = items.docs.values()
        assert stored.image.endswith(".png")
        assert stored.image != "photo.png"
        assert os.path.exists(os.path.join(app.config["UPLOAD_FOLDER"], stored.image))

    def test_disallowed_upload_is_a_form_error(self, client, stores):
        items, _ = stores

        response = client.post(
            "/inventory/item/create",
            data={**_form(), "image": (io.BytesIO(b"#!/bin/sh"), "script.sh")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        assert "Image must be a png, jpg, jpeg, gif or webp file" in response.get_data(as_text=True)
        assert items.docs == {}

    def test_markup_in_name_is_escaped(self, client, stores):
        items, _ = stores

        client.post("/inventory/item/create", data=_form(name="<b>Loud</b> Amp"))

        (stored,) = items.docs.values()
        assert stored.name == "&lt;b&gt;Loud&lt;/b&gt; Amp"

    @pytest.mark.parametrize("name", ["a<", "<>", "&", " & "])
    def test_name_length_is_checked_before_escaping(self, client, stores, name):
        items, _ = stores

        response = client.post("/inventory/item/create", data=_form(name=name))

        body = response.get_data(as_text=True)
        assert response.status_code == 200
        assert "Name must be at least 3 characters" in body
        assert items.docs == {}

    def test_rejected_markup_is_rerendered_escaped(self, client, stores):
        response = client.post("/inventory/item/create", data=_form(name="a<", description="<script>x</script>"))

        body = response.get_data(as_text=True)
        assert 'value="a&lt;"' in body
        assert "<script>x" not in body
        assert "&lt;script&gt;x&lt;/script&gt;" in body


class TestItemUpdate:
    def test_get_prefills_form_and_checks_categories(self, client, stores):
        items, categories = stores
        current = categories.add("Guitars")
        other = categories.add("Drums")
        item = items.add("Electric Guitar", category=[current.id])

        response = client.get(f"/inventory/item/{item.id}/update")

        body = response.get_data(as_text=True)
        assert response.status_code == 200
        assert "Update Item" in body
        assert 'value="Electric Guitar"' in body
        assert f'value="{current.id}" checked' in body
        assert f'value="{other.id}" checked' not in body

    def test_get_missing_item_is_404(self, client, stores):
        response = client.get(f"/inventory/item/{ObjectId()}/update")

        assert response.status_code == 404

    def test_post_without_upload_keeps_stored_image(self, client, stores):
        items, _ = stores
        item = items.add("Old Name", image="existing.jpg")

        response = client.post(f"/inventory/item/{item.id}/update", data=_form(name="New Name"))

        assert response.status_code == 302
        assert response.headers["Location"].endswith(f"/inventory/item/{item.id}")
        updated = items.docs[item.id]
        assert updated.name == "New Name"
        assert updated.image == "existing.jpg"

    def test_post_with_upload_replaces_image(self, client, stores):
        items, _ = stores
        item = items.add("Old Name", image="existing.jpg")

        client.post(
            f"/inventory/item/{item.id}/update",
            data={**_form(), "image": (io.BytesIO(b"GIF89a"), "new.gif")},
            content_type="multipart/form-data",
        )

        assert items.docs[item.id].image.endswith(".gif")

    def test_post_invalid_does_not_change_item(self, client, stores):
        items, _ = stores
        item = items.add("Keep Me", in_stock=7)

        response = client.post(f"/inventory/item/{item.id}/update", data=_form(in_stock="-3"))

        assert response.status_code == 200
        assert "Number in stock is required" in response.get_data(as_text=True)
        assert items.docs[item.id].name == "Keep Me"
        assert items.docs[item.id].in_stock == 7

    def test_post_missing_item_is_404(self, client, stores):
        response = client.post(f"/inventory/item/{ObjectId()}/update", data=_form())

        assert response.status_code == 404


class TestItemDelete:
    def test_get_renders_confirmation(self, client, stores):
        items, _ = stores
        item = items.add("Old Amp")

        response = client.get(f"/inventory/item/{item.id}/delete")

        assert response.status_code == 200
        assert "Delete Old Amp" in response.get_data(as_text=True)

    def test_get_title_keeps_single_escaping(self, client, stores):
        items, _ = stores
        item = items.add("Fish &amp; Chips")

        body = client.get(f"/inventory/item/{item.id}/delete").get_data(as_text=True)

        assert "<h1>Delete Fish &amp; Chips</h1>" in body
        assert "&amp;amp;" not in body

    def test_get_missing_item_redirects_to_list(self, client, stores):
        response = client.get(f"/inventory/item/{ObjectId()}/delete")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/inventory/items")

    def test_post_removes_item(self, client, stores):
        items, _ = stores
        item = items.add("Old Amp")

        response = client.post(f"/inventory/item/{item.id}/delete")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/inventory/items")
        assert item.id not in items.docs

    def test_post_missing_item_still_redirects(self, client, stores):
        response = client.post(f"/inventory/item/{ObjectId()}/delete")

        assert response.status_code == 302
        assert response.headers["Location"].endswith("/inventory/items")


class TestStoreErrors:
    def test_store_failure_renders_error_page(self, client, stores, monkeypatch):
        items, _ = stores

        def boom(db):
            raise ServerSelectionTimeoutError("no servers")

        monkeypatch.setattr(items, "list_items", boom)

        response = client.get("/inventory/items")

        assert response.status_code == 500
        assert "Database error" in response.get_data(as_text=True)

    def test_store_failure_as_json(self, client, stores, monkeypatch):
        items, _ = stores

        def boom(db):
            raise ServerSelectionTimeoutError("no servers")

        monkeypatch.setattr(items, "list_items", boom)

        response = client.get("/inventory/items", headers={"Accept": "application/json"})

        assert response.status_code == 500
        assert response.get_json()["error"]["code"] == "database_error"
