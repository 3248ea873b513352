"""Item routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, redirect, render_template, request, url_for
from markupsafe import Markup

from inventory_manager.db import get_mongo_db
from inventory_manager.services.item_service import ItemService
from inventory_manager.services.upload_service import ImageStore
from inventory_manager.utils.parallel import configured_workers

items_bp = Blueprint("items", __name__)

_service = ItemService()


def _images() -> ImageStore:
    return ImageStore.from_config(current_app.config)


@items_bp.get("/items")
def item_list():
    """List all items with their categories."""

    items = _service.list_items(get_mongo_db())
    return render_template("item_list.html", title="All items", item_list=items)


@items_bp.get("/item/<item_id>")
def item_detail(item_id: str):
    """Show one item; 404 when it does not exist."""

    item = _service.get_item(get_mongo_db(), item_id)
    # Stored names are already escaped.
    return render_template("item_detail.html", title=Markup(f"Item Detail: {item.name}"), item=item)


@items_bp.get("/item/create")
def item_create_get():
    categories = _service.new_item_form(get_mongo_db())
    return render_template("item_form.html", title="Create Item", item=None, categories=categories, errors=[])


@items_bp.post("/item/create")
def item_create_post():
    outcome = _service.create_item(get_mongo_db(), request.form, request.files.get("image"), _images())
    if not outcome.ok:
        return render_template(
            "item_form.html",
            title="Create Item",
            item=outcome.entity,
            categories=outcome.choices,
            errors=outcome.errors,
        )
    return redirect(outcome.entity.url)


@items_bp.get("/item/<item_id>/delete")
def item_delete_get(item_id: str):
    item = _service.find_item(get_mongo_db(), item_id)
    if item is None:
        return redirect(url_for("items.item_list"))
    return render_template("item_delete.html", title=Markup(f"Delete {item.name}"), item=item)


@items_bp.post("/item/<item_id>/delete")
def item_delete_post(item_id: str):
    # Deleting something that no longer exists is not an error.
    _service.delete_item(get_mongo_db(), item_id)
    return redirect(url_for("items.item_list"))


@items_bp.get("/item/<item_id>/update")
def item_update_get(item_id: str):
    item, categories = _service.edit_item_form(get_mongo_db(), item_id, max_workers=configured_workers())
    return render_template("item_form.html", title="Update Item", item=item, categories=categories, errors=[])


@items_bp.post("/item/<item_id>/update")
def item_update_post(item_id: str):
    outcome = _service.update_item(
        get_mongo_db(), item_id, request.form, request.files.get("image"), _images()
    )
    if not outcome.ok:
        return render_template(
            "item_form.html",
            title="Update Item",
            item=outcome.entity,
            categories=outcome.choices,
            errors=outcome.errors,
        )
    return redirect(outcome.entity.url)
