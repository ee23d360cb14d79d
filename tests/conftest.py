# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from shop_api.config import Settings
from shop_api.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        products_file=str(tmp_path / "products.json"),
        ssl_keyfile=str(tmp_path / "missing-key.pem"),
        ssl_certfile=str(tmp_path / "missing-cert.pem"),
        http_port=8080,
        https_port=8443,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)
