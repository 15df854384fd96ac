"""
Unit tests for the stack and service catalog.
"""
import pytest

from composegen.CATALOG import Catalog, default_catalog
from composegen.exceptions import UnknownServiceError, UnknownStackError


@pytest.fixture
def catalog():
    return Catalog()


def test_list_stacks(catalog):
    stacks = catalog.list_stacks()
    assert [s.id for s in stacks] == ["mean", "lamp", "next-postgres", "rails-redis"]
    assert stacks[0].name == "MEAN Stack"
    assert stacks[0].description == "MongoDB + Express + Angular + Node.js"


def test_list_services(catalog):
    assert catalog.list_services() == [
        "postgres", "mysql", "redis", "mongo", "nginx", "rabbitmq", "elasticsearch", "minio",
    ]


def test_get_stack(catalog):
    document = catalog.get_stack("mean")
    assert list(document.services) == ["mongo", "api", "frontend"]
    assert document.services["mongo"].ports == ["27017:27017"]
    assert document.volumes == {"mongo_data": None}


def test_get_stack_returns_copy(catalog):
    document = catalog.get_stack("mean")
    document.services["mongo"].ports.append("1234:1234")
    document.services["mongo"].environment["EXTRA"] = "1"
    del document.services["api"]
    document.volumes["other"] = None

    fresh = catalog.get_stack("mean")
    assert fresh.services["mongo"].ports == ["27017:27017"]
    assert "EXTRA" not in fresh.services["mongo"].environment
    assert "api" in fresh.services
    assert fresh.volumes == {"mongo_data": None}


def test_get_stack_is_case_sensitive(catalog):
    with pytest.raises(UnknownStackError):
        catalog.get_stack("MEAN")


def test_unknown_stack_lists_all_ids(catalog):
    with pytest.raises(UnknownStackError) as exc_info:
        catalog.get_stack("nonexistent")
    assert exc_info.value.stack_id == "nonexistent"
    assert len(exc_info.value.available) == 4
    assert exc_info.value.available == ["mean", "lamp", "next-postgres", "rails-redis"]


def test_get_service_case_insensitive(catalog):
    assert catalog.get_service("REDIS") == catalog.get_service("redis")
    assert catalog.get_service("Redis").id == "redis"


def test_get_service_volumes(catalog):
    assert catalog.get_service("redis").volumes == ["redis_data"]
    assert catalog.get_service("nginx").volumes == []


def test_get_service_returns_copy(catalog):
    entry = catalog.get_service("minio")
    entry.service.ports.clear()
    entry.volumes.append("extra")

    fresh = catalog.get_service("minio")
    assert fresh.service.ports == ["9000:9000", "9001:9001"]
    assert fresh.volumes == ["minio_data"]


def test_unknown_service_lists_all_ids(catalog):
    with pytest.raises(UnknownServiceError) as exc_info:
        catalog.get_service("cassandra")
    assert exc_info.value.service_id == "cassandra"
    assert exc_info.value.available == catalog.list_services()


def test_custom_definitions():
    catalog = Catalog(
        stacks={"solo": {"name": "Solo", "description": "One service",
                         "compose": {"version": "3.8", "services": {"app": {"image": "app"}}}}},
        services={"App": {"service": {"image": "app"}}},
    )
    assert catalog.stack_ids() == ["solo"]
    assert catalog.list_services() == ["app"]
    assert catalog.get_service("APP").service.image == "app"


def test_listing(catalog):
    listing = catalog.listing()
    data = listing.to_dict()
    assert [s["id"] for s in data["stacks"]] == ["mean", "lamp", "next-postgres", "rails-redis"]
    assert data["stacks"][1] == {"id": "lamp", "name": "LAMP Stack", "description": "Linux + Apache + MySQL + PHP"}
    assert data["services"][2] == "redis"


def test_default_catalog_is_shared():
    assert default_catalog() is default_catalog()
