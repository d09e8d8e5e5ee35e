# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from marketplace.data.database import init_db, make_engine, make_session_factory
from marketplace.main import create_app
from marketplace.repos.database_storage import DatabaseStorage
from marketplace.repos.memory_storage import MemStorage
from tests.helpers import FailingAIClient, SessionPerCallStorage, register


@pytest.fixture(params=["memory", "database"])
def backend(request):
    return request.param


@pytest.fixture
def app(backend):
    # database => swieza baza sqlite w pamieci dla kazdego testu
    app = create_app(backend, seed=False, database_url="sqlite://")
    app.state.ai_client = FailingAIClient()
    app.state.payment_gateway = None
    yield app
    if app.state.engine is not None:
        app.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def store(app):
    """Bezposredni dostep do tych samych danych, ktore widza routy."""
    if app.state.memory_storage is not None:
        return app.state.memory_storage
    return SessionPerCallStorage(app.state.session_factory)


@pytest.fixture(params=["memory", "database"])
def storage(request):
    if request.param == "memory":
        yield MemStorage()
        return

    engine = make_engine("sqlite://")
    init_db(engine)
    session = make_session_factory(engine)()
    try:
        yield DatabaseStorage(session)
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def buyer(client):
    return register(client, "buyer@example.com", "buyer", "Buyer")


@pytest.fixture
def seller(client):
    return register(client, "seller@example.com", "seller", "Seller")


@pytest.fixture
def admin(client, store):
    # admina nie da sie zarejestrowac przez API
    token, user = register(client, "admin@example.com", "buyer", "Admin")
    store.update_user(user["id"], {"role": "admin"})
    return token, {**user, "role": "admin"}
