"""Flask application for the NextShop catalog and admin panel.

- Products live in a single JSON file managed by ``ProductRepository``; the
  file is created and seeded with fixture products on first access.
- The storefront (home, product detail, recommendations) and the inventory
  dashboard are server-rendered with Jinja templates.
- JSON routes under ``/api`` wrap every result in a ``{success, data, error}``
  envelope.
- Admin mutations require the configured admin API key, supplied either as an
  ``x-api-key`` header or through the admin login form (kept in the signed
  session cookie).
"""

from __future__ import annotations

import logging
from functools import wraps
from pathlib import Path

from flask import (
    Flask,
    abort,
    flash,
    redirect,
    render_template,
    request,
    session,
    url_for,
)
from flask_cors import CORS
from flask_talisman import Talisman
from pydantic import ValidationError
from werkzeug.exceptions import NotFound
from werkzeug.middleware.proxy_fix import ProxyFix

from shopadmin.auth import ApiKeyChecker
from shopadmin.envelope import failure, success, validation_message
from shopadmin.models import ProductForm
from shopadmin.services.product_store import ProductRepository
from shopadmin.services.seed import sample_products
from shopadmin.services.stats import (
    category_counts,
    dashboard_stats,
    distinct_categories,
    filter_products,
    low_stock,
    recommend,
)
from shopcommon.config import configure_logging, load_app_config
from shopcommon.storage import JsonListStore, StoreError

BASE_DIR = Path(__file__).resolve().parent
TEMPLATE_DIR = BASE_DIR / "templates"

# ---------------------------------------------------------------------------
# Config / Secrets
# ---------------------------------------------------------------------------
CONFIG = load_app_config(BASE_DIR)
configure_logging(CONFIG.log_level)
logger = logging.getLogger(__name__)

FORCE_TLS = CONFIG.force_tls
ADMIN_AUTH_ENABLED = CONFIG.admin_auth_enabled
LOW_STOCK_THRESHOLD = CONFIG.low_stock_threshold
RECOMMENDATION_LIMIT = CONFIG.recommendation_limit

PRODUCT_FILE = CONFIG.products_file
CATALOG = ProductRepository(JsonListStore(PRODUCT_FILE, seed=sample_products))
CREDENTIALS = ApiKeyChecker(CONFIG.admin_api_key)

if not CREDENTIALS.configured:
    logger.warning("ADMIN_API_KEY is empty; admin routes will reject every request")
elif not ADMIN_AUTH_ENABLED:
    logger.warning("ADMIN_AUTH_DISABLED is set; admin routes are open to anyone")

# ---------------------------------------------------------------------------
# Flask app
# ---------------------------------------------------------------------------
app = Flask(__name__, template_folder=str(TEMPLATE_DIR))
app.config.update(
    SECRET_KEY=CONFIG.secret_key,
    SESSION_COOKIE_SAMESITE="Lax",
    SESSION_COOKIE_SECURE=FORCE_TLS,
    PREFERRED_URL_SCHEME="https" if FORCE_TLS else "http",
)

CORS(app, resources={r"/api/*": {"origins": list(CONFIG.allowed_origins)}})
Talisman(
    app,
    content_security_policy=None,
    force_https=FORCE_TLS,
    session_cookie_secure=FORCE_TLS,
)

if CONFIG.trust_proxy_headers:
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)  # type: ignore[assignment]


@app.context_processor
def inject_template_globals():
    return {
        "is_admin": is_admin_session(),
        "low_stock_threshold": LOW_STOCK_THRESHOLD,
    }


# ---------------------------------------------------------------------------
# Admin helpers
# ---------------------------------------------------------------------------
def is_admin_session() -> bool:
    return bool(session.get("is_admin"))


def is_admin() -> bool:
    if is_admin_session():
        return True
    return CREDENTIALS.verify(request.headers.get("x-api-key"))


def admin_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if ADMIN_AUTH_ENABLED and not is_admin():
            logger.info("Rejected unauthorised %s %s", request.method, request.path)
            return failure("Unauthorized", 401)
        return fn(*args, **kwargs)

    return wrapper


def _admin_page_denied():
    if ADMIN_AUTH_ENABLED and not is_admin_session():
        flash("Admin privileges required", "danger")
        return redirect(url_for("admin_panel"))
    return None


def _product_payload() -> dict:
    if request.is_json:
        payload = request.get_json(silent=True)
        return payload if isinstance(payload, dict) else {}
    return {k: v for k, v in request.form.items()}


# ---------------------------------------------------------------------------
# Routes — JSON API
# ---------------------------------------------------------------------------
@app.route("/api/products", methods=["GET"])
def api_list_products():
    try:
        products = CATALOG.list_all()
    except StoreError:
        logger.exception("Error fetching products")
        return failure("Failed to fetch products", 500)
    return success([product.to_record() for product in products])


@app.route("/api/products", methods=["POST"])
@admin_required
def api_create_product():
    try:
        form = ProductForm(**_product_payload())
    except ValidationError as err:
        return failure(validation_message(err), 400)
    try:
        product = CATALOG.add(form.to_draft())
    except StoreError:
        logger.exception("Error adding product")
        return failure("Failed to add product", 500)
    logger.info("Added product %s (%s)", product.id, product.slug)
    return success(product.to_record(), 201)


@app.route("/api/products/<slug>", methods=["GET"])
def api_get_product(slug: str):
    try:
        product = CATALOG.find_by_slug(slug)
    except StoreError:
        logger.exception("Error fetching product %s", slug)
        return failure("Failed to fetch product", 500)
    if not product:
        return failure("Product not found", 404)
    return success(product.to_record())


@app.route("/api/products/update/<product_id>", methods=["PUT"])
@admin_required
def api_update_product(product_id: str):
    try:
        form = ProductForm(**_product_payload())
    except ValidationError as err:
        return failure(validation_message(err), 400)
    try:
        product = CATALOG.update(product_id, form.model_dump(by_alias=True))
    except StoreError:
        logger.exception("Error updating product %s", product_id)
        return failure("Failed to update product", 500)
    if not product:
        return failure("Product not found or update failed", 404)
    logger.info("Updated product %s", product.id)
    return success(product.to_record())


@app.route("/api/dashboard", methods=["GET"])
def api_dashboard():
    try:
        products = CATALOG.list_all()
    except StoreError:
        logger.exception("Error fetching dashboard stats")
        return failure("Failed to fetch dashboard statistics", 500)
    stats = dashboard_stats(products, LOW_STOCK_THRESHOLD)
    return success(stats.model_dump(by_alias=True))


# ---------------------------------------------------------------------------
# Storefront views
# ---------------------------------------------------------------------------
@app.route("/")
def storefront_home():
    products = CATALOG.list_all()
    query = request.args.get("q", "").strip()
    category = request.args.get("category", "").strip()
    return render_template(
        "storefront/home.html",
        products=filter_products(products, query, category),
        categories=distinct_categories(products),
        query=query,
        selected_category=category,
    )


@app.route("/products/<slug>")
def product_detail(slug: str):
    product = CATALOG.find_by_slug(slug)
    if not product:
        abort(404)
    return render_template("storefront/product.html", product=product)


@app.route("/recommendations")
def recommendations():
    products = recommend(CATALOG.list_all(), RECOMMENDATION_LIMIT)
    return render_template("storefront/recommendations.html", products=products)


@app.route("/dashboard")
def inventory_dashboard():
    products = CATALOG.list_all()
    return render_template(
        "admin/dashboard.html",
        stats=dashboard_stats(products, LOW_STOCK_THRESHOLD),
        counts=category_counts(products),
        low_stock=low_stock(products, LOW_STOCK_THRESHOLD),
        products=products,
    )


# ---------------------------------------------------------------------------
# Admin panel (SSR)
# ---------------------------------------------------------------------------
@app.route("/admin")
def admin_panel():
    if ADMIN_AUTH_ENABLED and not is_admin_session():
        return render_template("admin/login.html")
    return render_template("admin/panel.html", products=CATALOG.list_all(), form={})


@app.route("/admin/login", methods=["POST"])
def admin_login():
    if not CREDENTIALS.verify(request.form.get("api_key")):
        flash("Invalid API key", "danger")
        return redirect(url_for("admin_panel"))
    session["is_admin"] = True
    flash("Signed in", "success")
    return redirect(url_for("admin_panel"))


@app.route("/admin/logout", methods=["POST"])
def admin_logout():
    session.pop("is_admin", None)
    flash("Signed out", "info")
    return redirect(url_for("admin_panel"))


@app.route("/admin/products/create", methods=["POST"])
def admin_create_product():
    denied = _admin_page_denied()
    if denied:
        return denied
    try:
        form = ProductForm(**_product_payload())
    except ValidationError as err:
        flash(f"Unable to create product: {validation_message(err)}", "danger")
        return redirect(url_for("admin_panel"))
    product = CATALOG.add(form.to_draft())
    logger.info("Added product %s from admin panel", product.id)
    flash(f"Product {product.name} added", "success")
    return redirect(url_for("admin_panel"))


@app.route("/admin/products/<product_id>/edit")
def admin_edit_product(product_id: str):
    denied = _admin_page_denied()
    if denied:
        return denied
    product = CATALOG.find_by_id(product_id)
    if not product:
        flash("Product not found", "warning")
        return redirect(url_for("admin_panel"))
    return render_template("admin/edit.html", product=product, form=product.to_record())


@app.route("/admin/products/<product_id>/update", methods=["POST"])
def admin_update_product(product_id: str):
    denied = _admin_page_denied()
    if denied:
        return denied
    try:
        form = ProductForm(**_product_payload())
    except ValidationError as err:
        flash(f"Unable to update product: {validation_message(err)}", "danger")
        return redirect(url_for("admin_edit_product", product_id=product_id))
    product = CATALOG.update(product_id, form.model_dump(by_alias=True))
    if not product:
        flash("Product not found", "warning")
    else:
        flash(f"Product {product.name} updated", "success")
    return redirect(url_for("admin_panel"))


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(404)
def not_found(exc: NotFound):
    if request.path.startswith("/api/"):
        return failure("Not found", 404)
    return render_template("storefront/not_found.html"), 404


@app.errorhandler(StoreError)
def store_failure(exc: StoreError):
    logger.exception("Catalog storage failure on %s", request.path)
    if request.path.startswith("/api/"):
        return failure("Internal server error", 500)
    return render_template("storefront/error.html"), 500


# ---------------------------------------------------------------------------
# Security headers
# ---------------------------------------------------------------------------
@app.after_request
def secure_headers(resp):
    resp.headers["X-Content-Type-Options"] = "nosniff"
    resp.headers["X-Frame-Options"] = "DENY"
    return resp


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    ssl_ctx = "adhoc" if FORCE_TLS else None
    app.run(host=CONFIG.api_host, port=CONFIG.api_port, ssl_context=ssl_ctx)
