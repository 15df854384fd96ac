"""
Unit tests for stack generation and custom builds.
"""
import pytest
import yaml

from composegen.CATALOG import Catalog
from composegen.EMITTERS.compose_emitter import ComposeEmitter
from composegen.GENERATORS.stack_generator import StackGenerator
from composegen.exceptions import UnknownServiceError, UnknownStackError


@pytest.fixture
def generator():
    return StackGenerator(Catalog())


def test_generate(generator, tmp_path):
    path = tmp_path / "docker-compose.yml"
    result = generator.generate("mean", str(path))

    assert result.stack == "mean"
    assert result.name == "MEAN Stack"
    assert result.services == ["mongo", "api", "frontend"]
    assert result.succeeded
    assert path.read_text(encoding="utf-8") == ComposeEmitter.emit_document(Catalog().get_stack("mean"))


def test_generate_overwrites(generator, tmp_path):
    path = tmp_path / "docker-compose.yml"
    path.write_text("old content\n" * 100, encoding="utf-8")
    generator.generate("next-postgres", str(path))

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert list(data["services"]) == ["db", "app"]


def test_generate_unknown_stack(generator, tmp_path):
    path = tmp_path / "docker-compose.yml"
    with pytest.raises(UnknownStackError):
        generator.generate("nonexistent", str(path))
    assert not path.exists()


def test_build_custom(generator):
    document = generator.build_custom(["REDIS", "postgres", "redis"])
    assert list(document.services) == ["redis", "postgres"]
    assert document.volumes == {"redis_data": None, "pg_data": None}
    assert document.version == "3.8"


def test_build_custom_without_volumes(generator):
    document = generator.build_custom(["nginx"])
    assert document.volumes is None


def test_build_custom_empty(generator):
    document = generator.build_custom([])
    assert ComposeEmitter.emit_document(document) == "version: 3.8\nservices: {}\n"


def test_build_custom_unknown_service(generator):
    with pytest.raises(UnknownServiceError):
        generator.build_custom(["redis", "cassandra"])


def test_write_custom(tmp_path):
    generator = StackGenerator(Catalog(), format_version="3.9")
    path = tmp_path / "custom.yml"
    result = generator.write(generator.build_custom(["mongo", "nginx"]), str(path))

    assert result.stack is None
    assert result.name == "Custom"
    assert result.to_dict() == {"stack": None, "file": str(path), "services": ["mongo", "nginx"]}
    assert path.read_text(encoding="utf-8").startswith("version: 3.9\n")
