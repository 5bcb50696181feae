import pytest

from shopadmin import app as flask_app
from shopadmin.auth import ApiKeyChecker
from shopadmin.services.product_store import ProductRepository
from shopadmin.services.seed import sample_products
from shopcommon.storage import JsonListStore

ADMIN_KEY = "test-admin-key"


@pytest.fixture(autouse=True)
def configure_test_env(tmp_path, monkeypatch):
    flask_app.app.config.update(TESTING=True)
    talisman = flask_app.app.extensions.get("talisman")
    if talisman:
        talisman.force_https = False
    product_file = tmp_path / "data" / "products.json"
    monkeypatch.setattr(flask_app, "PRODUCT_FILE", product_file)
    monkeypatch.setattr(
        flask_app,
        "CATALOG",
        ProductRepository(JsonListStore(product_file, seed=sample_products)),
    )
    monkeypatch.setattr(flask_app, "CREDENTIALS", ApiKeyChecker(ADMIN_KEY))
    monkeypatch.setattr(flask_app, "ADMIN_AUTH_ENABLED", True)
    monkeypatch.setattr(flask_app, "LOW_STOCK_THRESHOLD", 10)
    monkeypatch.setattr(flask_app, "RECOMMENDATION_LIMIT", 6)
    yield product_file


@pytest.fixture
def client():
    return flask_app.app.test_client()


@pytest.fixture
def admin_client():
    client = flask_app.app.test_client()
    with client.session_transaction() as session:
        session["is_admin"] = True
    return client
