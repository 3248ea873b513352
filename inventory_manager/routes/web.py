"""Web page routes: dashboard, search and uploaded images."""

from __future__ import annotations

from flask import Blueprint, Response, current_app, redirect, render_template, request, send_from_directory, url_for

from inventory_manager.db import get_mongo_db
from inventory_manager.services.catalog_service import CatalogService
from inventory_manager.utils.parallel import configured_workers

web_bp = Blueprint("web", __name__)

_service = CatalogService()


@web_bp.get("/")
def root():
    return redirect(url_for("web.index"))


@web_bp.get("/inventory/")
def index():
    dashboard = _service.dashboard(
        get_mongo_db(),
        image_limit=int(current_app.config.get("INDEX_IMAGE_LIMIT", 5)),
        max_workers=configured_workers(),
    )
    return render_template(
        "index.html",
        title="Inventory Manager",
        total_items=dashboard.total_items,
        total_categories=dashboard.total_categories,
        item_images=dashboard.item_images,
    )


@web_bp.get("/inventory/search")
def search_results():
    term = request.args.get("search", "")
    results = _service.search(
        get_mongo_db(),
        term,
        items_index=str(current_app.config.get("ITEMS_SEARCH_INDEX", "items")),
        categories_index=str(current_app.config.get("CATEGORIES_SEARCH_INDEX", "categories")),
        max_workers=configured_workers(),
    )
    return render_template("search_results.html", title="Search", search=term, results=results)


@web_bp.get("/uploads/<path:filename>")
def uploaded_file(filename: str) -> Response:
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)


@web_bp.get("/favicon.ico")
def favicon() -> Response:
    svg = """<svg xmlns='http://www.w3.org/2000/svg' viewBox='0 0 64 64'>
    <rect x='6' y='14' width='52' height='40' rx='6' fill='#2f6f5e'/>
    <rect x='6' y='14' width='52' height='12' rx='6' fill='#3f8f7a'/>
    <text x='32' y='47' text-anchor='middle' font-family='system-ui,Segoe UI,Arial' font-size='16' font-weight='800' fill='#f4f7f5'>INV</text>
</svg>"""

    return Response(svg, mimetype="image/svg+xml")
