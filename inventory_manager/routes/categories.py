"""Category routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, redirect, render_template, request
from markupsafe import Markup

from inventory_manager.db import get_mongo_db
from inventory_manager.services.category_service import CategoryService
from inventory_manager.utils.parallel import configured_workers

categories_bp = Blueprint("categories", __name__)

_service = CategoryService()


@categories_bp.get("/categories")
def category_list():
    categories = _service.list_categories(get_mongo_db())
    return render_template("category_list.html", title="All categories", category_list=categories)


@categories_bp.get("/category/<category_id>")
def category_detail(category_id: str):
    category, items = _service.get_category(get_mongo_db(), category_id, max_workers=configured_workers())
    return render_template(
        "category_detail.html",
        title=Markup(f"Category: {category.name}"),
        category=category,
        category_items=items,
    )


@categories_bp.get("/category/create")
def category_create_get():
    return render_template("category_form.html", title="Create Category", category=None, errors=[])


@categories_bp.post("/category/create")
def category_create_post():
    outcome = _service.create_category(get_mongo_db(), request.form)
    if not outcome.ok:
        return render_template(
            "category_form.html",
            title="Create Category",
            category=outcome.entity,
            errors=outcome.errors,
        )
    return redirect(outcome.entity.url)
