import asyncio
import copy
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument
from pymongo.errors import ServerSelectionTimeoutError

# Flat layout: make the project root importable when running from anywhere
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

from core.config import Settings  # noqa: E402
from database.mongo import get_recipe_collection  # noqa: E402
from main_async import create_app  # noqa: E402


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    async def to_list(self, length=None):
        await asyncio.sleep(0)
        docs = [copy.deepcopy(d) for d in self._docs]
        return docs if length is None else docs[:length]


class FakeCollection:
    """In-memory stand-in for the Motor recipes collection.

    Every call yields to the event loop before touching its data, like a
    real round-trip to the server.
    """

    def __init__(self):
        self.docs = {}

    def find(self, filter=None):
        return FakeCursor(list(self.docs.values()))

    async def find_one(self, filter):
        await asyncio.sleep(0)
        doc = self.docs.get(filter["_id"])
        return copy.deepcopy(doc) if doc is not None else None

    async def insert_one(self, doc):
        await asyncio.sleep(0)
        doc.setdefault("_id", ObjectId())
        self.docs[doc["_id"]] = copy.deepcopy(doc)
        return SimpleNamespace(inserted_id=doc["_id"], acknowledged=True)

    async def update_one(self, filter, update):
        await asyncio.sleep(0)
        doc = self.docs.get(filter["_id"])
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        doc.update(copy.deepcopy(update.get("$set", {})))
        return SimpleNamespace(matched_count=1, modified_count=1)

    async def find_one_and_update(self, filter, update, return_document=ReturnDocument.BEFORE):
        await asyncio.sleep(0)
        doc = self.docs.get(filter["_id"])
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        doc.update(copy.deepcopy(update.get("$set", {})))
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before

    async def find_one_and_delete(self, filter):
        await asyncio.sleep(0)
        return self.docs.pop(filter["_id"], None)


class UnreachableCollection(FakeCollection):
    """Every store call fails as if the server could not be selected"""

    def find(self, filter=None):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    async def find_one(self, filter):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    async def insert_one(self, doc):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    async def update_one(self, filter, update):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    async def find_one_and_update(self, filter, update, return_document=ReturnDocument.BEFORE):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    async def find_one_and_delete(self, filter):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def app(collection):
    application = create_app(Settings())
    application.dependency_overrides[get_recipe_collection] = lambda: collection
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def soup(client):
    res = client.post("/recipes", json={"name": "Soup", "ingredients": ["water", "salt"]})
    assert res.status_code == 201
    return res.json()
