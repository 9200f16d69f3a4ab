#!/usr/bin/env python3
"""Validate the shipped message catalogs using polib.

Every catalog must parse, and must translate every ApiErrorCode label plus
every key passed to ``t("...")`` in the library sources.
Exit non-zero otherwise.
"""
from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Optional

import polib

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.i18n import LOCALES_DIR  # noqa: E402
from shared.codes import ApiErrorCode  # noqa: E402

_KEY_RE = re.compile(r"\bt\(\s*['\"]([a-zA-Z0-9_.]+)['\"]")
_SOURCE_PACKAGES = ("core", "domain", "application", "infrastructure", "api", "shared")


def required_keys(src_root: Path = ROOT) -> set[str]:
    keys = {code.label for code in ApiErrorCode}
    for package in _SOURCE_PACKAGES:
        for p in (src_root / package).rglob("*.py"):
            keys.update(_KEY_RE.findall(p.read_text(encoding="utf-8", errors="ignore")))
    return keys


def check_catalogs(locales_dir: Path = LOCALES_DIR, keys: Optional[set[str]] = None) -> list[str]:
    """Return one problem description per broken, missing or untranslated entry."""
    keys = required_keys() if keys is None else keys
    po_files = sorted(locales_dir.glob("*/LC_MESSAGES/*.po"))
    if not po_files:
        return [f"no catalogs under {locales_dir}"]

    problems: list[str] = []
    for f in po_files:
        try:
            po = polib.pofile(str(f))
        except (OSError, ValueError) as exc:
            problems.append(f"{f}: {exc}")
            continue
        translated = {e.msgid for e in po.translated_entries()}
        for key in sorted(keys - translated):
            problems.append(f"{f}: missing or untranslated '{key}'")
    return problems


def main() -> int:
    problems = check_catalogs()
    for line in problems:
        print(f"[i18n] {line}", file=sys.stderr)
    return 1 if problems else 0


if __name__ == "__main__":
    raise SystemExit(main())
