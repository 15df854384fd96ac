"""
Unit tests for the compose validator.
"""
import pytest

from composegen.CATALOG import Catalog
from composegen.EMITTERS.compose_emitter import ComposeEmitter
from composegen.VALIDATORS.compose_validator import ComposeValidator
from composegen.exceptions import ComposeFileNotFoundError


def test_missing_services():
    issues = ComposeValidator.validate("version: 3.8\nfoo: bar\n")
    assert len(issues) >= 1
    assert any("services" in issue for issue in issues)


def test_tab_reports_line_number():
    issues = ComposeValidator.validate("version: 3.8\nservices:\n\tweb:\n    image: nginx\n")
    assert issues == ["Line 3: Tab character found (use spaces)"]


def test_one_issue_per_tab_line():
    issues = ComposeValidator.validate("version: 3.8\nservices:\n\tweb:\n\t\timage: nginx\n")
    assert issues == [
        "Line 3: Tab character found (use spaces)",
        "Line 4: Tab character found (use spaces)",
    ]


def test_missing_version_is_reported():
    assert ComposeValidator.validate("services:\n  web:\n    image: nginx\n") == [
        "Missing 'version' key (recommended)",
    ]


def test_all_checks_run():
    assert ComposeValidator.validate("\t") == [
        "Missing 'services' key",
        "Line 1: Tab character found (use spaces)",
        "Missing 'version' key (recommended)",
    ]


@pytest.mark.parametrize("stack_id", ["mean", "lamp", "next-postgres", "rails-redis"])
def test_generated_stacks_are_valid(stack_id):
    text = ComposeEmitter.emit_document(Catalog().get_stack(stack_id))
    assert ComposeValidator.validate(text) == []
    assert ComposeValidator.validate(text, strict=True) == []


def test_strict_dangling_dependency():
    text = "version: 3.8\nservices:\n  web:\n    image: nginx\n    depends_on:\n      - db\n"
    assert ComposeValidator.validate(text, strict=True) == [
        "Service 'web' depends on undefined service 'db'",
    ]


def test_strict_long_form_dependency():
    text = (
        "version: 3.8\nservices:\n  web:\n    image: nginx\n"
        "    depends_on:\n      db:\n        condition: service_healthy\n"
    )
    assert ComposeValidator.validate(text, strict=True) == [
        "Service 'web' depends on undefined service 'db'",
    ]


def test_strict_undeclared_volume():
    text = (
        "version: 3.8\nservices:\n"
        "  db:\n    image: postgres\n    volumes:\n      - pg_data:/var/lib/postgresql/data\n      - ./init:/init\n"
        "  backup:\n    image: postgres\n    volumes:\n      - pg_data:/data\n"
    )
    assert ComposeValidator.validate(text, strict=True) == [
        "Volume 'pg_data' used by service 'db' is not declared",
    ]


def test_strict_parse_error():
    issues = ComposeValidator.validate("version: 3.8\nservices: [unclosed\n", strict=True)
    assert len(issues) == 1
    assert issues[0].startswith("YAML parse error")


def test_strict_not_run_by_default():
    text = "version: 3.8\nservices:\n  web:\n    image: nginx\n    depends_on:\n      - db\n"
    assert ComposeValidator.validate(text) == []


def test_validate_file(tmp_path):
    path = tmp_path / "docker-compose.yml"
    path.write_text("services:\n  web:\n    image: nginx\n", encoding="utf-8")

    report = ComposeValidator.validate_file(str(path))

    assert report.file == str(path)
    assert report.lines == 4
    assert not report.valid
    assert report.succeeded
    assert report.to_dict() == {
        "valid": False,
        "file": str(path),
        "issues": ["Missing 'version' key (recommended)"],
        "lines": 4,
    }


def test_validate_file_not_found(tmp_path):
    path = str(tmp_path / "missing.yml")
    with pytest.raises(ComposeFileNotFoundError) as exc_info:
        ComposeValidator.validate_file(path)
    assert exc_info.value.path == path
    assert isinstance(exc_info.value, FileNotFoundError)
    assert exc_info.value.to_dict() == {"valid": False, "error": "File not found", "file": path}
