"""Fixtures for repository and plugin tests."""

import uuid

import pytest
from faker import Faker

from unique_validation.indexes import IndexMetadataCache
from unique_validation.plugin import UniqueValidationPlugin
from unique_validation.repositories import DocumentRepository
from unique_validation.schema import Schema
from .fake_mongo import FakeDatabase

# NOTE: every test gets its own database name, so cache keys never collide across tests.


@pytest.fixture(params=[True, False], ids=["key-pattern", "index-lookup"])
def fake_database(request) -> FakeDatabase:
    """
    In-memory database, once per server error style:
      - key-pattern: modern servers, the error details list the index fields
      - index-lookup: legacy servers, fields are resolved via index_information()
    """
    return FakeDatabase(f"buv_{uuid.uuid4().hex[:12]}", report_key_pattern=request.param)


@pytest.fixture
def legacy_database() -> FakeDatabase:
    """Database whose duplicate errors carry only the message (forces index metadata lookups)."""
    return FakeDatabase(f"buv_{uuid.uuid4().hex[:12]}", report_key_pattern=False)


@pytest.fixture
def index_cache() -> IndexMetadataCache:
    return IndexMetadataCache()


@pytest.fixture
def make_repository(fake_database, index_cache):
    """
    Factory: build a repository for `schema`, install the unique validation
    plugin on it and create the unique indexes the schema implies.

    Usage:
        repo = await make_repository(schema, options={"defaultMessage": "..."})
    """
    async def _make(schema: Schema, *, options=None, collection_name: str | None = None,
                    database: FakeDatabase | None = None) -> DocumentRepository:
        db = database or fake_database
        collection = db[collection_name or f"coll_{uuid.uuid4().hex[:8]}"]
        repository = DocumentRepository(collection, schema)
        plugin = UniqueValidationPlugin(schema, options, index_cache=index_cache).install(repository)

        for index in plugin.schema.unique_indexes():
            await collection.create_index(index.keys, unique=True, name=index.name)

        return repository

    return _make


@pytest.fixture
def fake() -> Faker:
    generator = Faker()
    Faker.seed(1234)
    return generator


@pytest.fixture
def sample_person(fake) -> dict:
    """A person-like document with realistic values."""
    return {
        "name": fake.name(),
        "age": fake.random_int(min=18, max=90),
        "address": fake.street_address(),
    }
