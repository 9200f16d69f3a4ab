"""Pytest bootstrap configuration.

Every test starts from the default locale and freshly loaded catalogs.
"""
import pytest

from core.i18n import clear_catalog_cache, set_locale


@pytest.fixture(autouse=True)
def _reset_i18n():
    set_locale(None)
    clear_catalog_cache()
    yield
    set_locale(None)
