from __future__ import annotations

import threading
from contextvars import ContextVar
from pathlib import Path
from typing import Optional

import polib

from core.config import settings
from core.logging_config import get_logger

LOCALES_DIR = Path(__file__).resolve().parent / "locales"
CATALOG_DOMAIN = "messages"

_current_locale: ContextVar[Optional[str]] = ContextVar("current_locale", default=None)
_catalogs: dict[str, dict[str, str]] = {}
_catalogs_lock = threading.Lock()
_logger = get_logger(__name__)


def _discover_locales() -> frozenset[str]:
    return frozenset(
        path.parent.parent.name
        for path in LOCALES_DIR.glob(f"*/LC_MESSAGES/{CATALOG_DOMAIN}.po")
    )


# fixed at import; request input never adds catalog entries
AVAILABLE_LOCALES = _discover_locales()


def resolve_locale(locale: Optional[str]) -> str:
    """Return locale if a catalog ships for it, else the configured default."""
    if locale in AVAILABLE_LOCALES:
        return locale
    return settings.DEFAULT_LOCALE


def set_locale(locale: Optional[str]) -> None:
    """Set current request locale; unknown locales fall back to the configured default."""
    _current_locale.set(locale if locale in AVAILABLE_LOCALES else None)


def get_locale() -> str:
    """Get current request locale."""
    return _current_locale.get() or settings.DEFAULT_LOCALE


def _load_catalog(locale: str) -> dict[str, str]:
    path = LOCALES_DIR / locale / "LC_MESSAGES" / f"{CATALOG_DOMAIN}.po"
    if not path.is_file():
        return {}
    try:
        po = polib.pofile(str(path))
    except (OSError, ValueError) as exc:
        _logger.warning("i18n_catalog_unreadable", locale=locale, path=str(path), error=str(exc))
        return {}
    return {
        entry.msgid: entry.msgstr
        for entry in po.translated_entries()
        if not entry.obsolete
    }


def _get_catalog(locale: str) -> dict[str, str]:
    catalog = _catalogs.get(locale)
    if catalog is not None:
        return catalog
    with _catalogs_lock:
        catalog = _catalogs.get(locale)
        if catalog is None:
            catalog = _load_catalog(locale)
            _catalogs[locale] = catalog
    return catalog


def clear_catalog_cache() -> None:
    with _catalogs_lock:
        _catalogs.clear()


def t(msgid: str, *, locale: Optional[str] = None, **params) -> str:
    """Translate msgid using the given (or current) locale and format with params.

    If the catalog is missing or the key not found, the default locale is
    tried, then msgid itself is returned.
    """
    loc = resolve_locale(locale or get_locale())
    text = _get_catalog(loc).get(msgid)
    if text is None and loc != settings.DEFAULT_LOCALE:
        text = _get_catalog(settings.DEFAULT_LOCALE).get(msgid)
    if text is None:
        text = msgid
    if not params:
        return text
    try:
        return text.format(**params)
    except (KeyError, IndexError, ValueError) as exc:
        _logger.warning("i18n_format_failed", msgid=msgid, params=list(params.keys()), error=str(exc))
        return text
