import os

# Configuration is read at import time; keep the suite on in-memory SQLite
os.environ.setdefault("TESTING", "true")

import pytest
from lendtrack.core.db import Store


@pytest.fixture
def store():
    store = Store("sqlite://").init()
    try:
        yield store
    finally:
        store.close()


@pytest.fixture
def db_session(store):
    with store.session() as session:
        yield session
