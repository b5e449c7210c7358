import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("MONGO_DB_NAME", "stock_test")
os.environ.setdefault("STOCK_SERVICE_URL", "http://stock.test")

from urllib.parse import urlsplit

import mongomock
import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shared.core import auth
from shared.core.config import settings
from shared.core.database import CoreBase, get_core_db
from core_service.app import models  # noqa: F401
from core_service.app.main import app as core_app
from core_service.app.utils import stock_client
from stock_service.app.main import app as stock_app
from stock_service.app.core.database import stock_db


class StockAppAdapter(BaseAdapter):
    """Serves outbound ``requests`` calls from the stock app in-process."""

    def __init__(self, client: TestClient):
        super().__init__()
        self.client = client
        self.sent = []

    def send(self, request, **kwargs):
        self.sent.append(request)
        parts = urlsplit(request.url)
        path = parts.path + (f"?{parts.query}" if parts.query else "")

        upstream = self.client.request(
            request.method,
            path,
            content=request.body,
            headers=dict(request.headers),
        )

        response = requests.Response()
        response.status_code = upstream.status_code
        response.reason = upstream.reason_phrase
        response._content = upstream.content
        response.headers = CaseInsensitiveDict(upstream.headers)
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


class UnreachableAdapter(BaseAdapter):
    def __init__(self):
        super().__init__()
        self.sent = []

    def send(self, request, **kwargs):
        self.sent.append(request)
        raise requests.ConnectionError("stock service unreachable")

    def close(self):
        pass


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    CoreBase.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    CoreBase.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def stock_collection():
    stock_db.connect(client=mongomock.MongoClient())
    yield stock_db.collection()
    stock_db.close()


@pytest.fixture
def stock_api(stock_collection):
    return TestClient(stock_app, raise_server_exceptions=False)


@pytest.fixture
def stock_adapter(stock_api):
    return StockAppAdapter(stock_api)


@pytest.fixture
def stock_session(stock_adapter):
    session = requests.Session()
    session.mount(settings.STOCK_SERVICE_URL, stock_adapter)
    return session


@pytest.fixture
def core_api(session_factory, stock_session, monkeypatch):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    core_app.dependency_overrides[get_core_db] = override_get_db
    monkeypatch.setattr(stock_client, "_session", stock_session)
    yield TestClient(core_app, raise_server_exceptions=False)
    core_app.dependency_overrides.clear()


@pytest.fixture
def token():
    return auth.create_access_token({"username": "tester", "user_id": 1})


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
