import importlib.util
from pathlib import Path

import pytest

from shared.codes import ApiErrorCode

_SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "validate_po.py"


@pytest.fixture(scope="module")
def validate_po():
    spec = importlib.util.spec_from_file_location("validate_po", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_required_keys_cover_error_labels(validate_po):
    keys = validate_po.required_keys()
    assert {c.label for c in ApiErrorCode} <= keys
    assert "validation.failed" in keys


def test_shipped_catalogs_are_complete(validate_po):
    assert validate_po.check_catalogs() == []
    assert validate_po.main() == 0


def test_missing_translation_reported(validate_po, tmp_path):
    target = tmp_path / "de" / "LC_MESSAGES"
    target.mkdir(parents=True)
    (target / "messages.po").write_text(
        'msgid ""\nmsgstr ""\n"Content-Type: text/plain; charset=UTF-8\\n"\n\n'
        'msgid "apierrorcode.not_found"\nmsgstr "Nicht gefunden"\n',
        encoding="utf-8",
    )
    problems = validate_po.check_catalogs(tmp_path, keys={"apierrorcode.not_found", "apierrorcode.system_error"})
    assert len(problems) == 1
    assert "apierrorcode.system_error" in problems[0]
