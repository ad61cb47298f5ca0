import pytest
from starlette.testclient import TestClient
from pico_cart import CartSettings, CartStore, InMemoryKeyValueStore, ProductIn, create_app


@pytest.fixture()
def shirt():
    return ProductIn(id="p1", title="Shirt", image_url="u", price=10)

@pytest.fixture()
def mug():
    return ProductIn(id="p2", title="Mug", image_url="https://img/mug.png", price=4.5)

@pytest.fixture()
def storage():
    return InMemoryKeyValueStore()

@pytest.fixture()
def settings():
    return CartSettings()

@pytest.fixture()
def store(storage, settings):
    return CartStore(storage, settings)

@pytest.fixture()
def app(storage):
    return create_app(storage=storage)

@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
