"""
Project-wide pytest configuration and fixtures.

App-specific fixtures are defined in each app's tests/conftest.py.
"""

import pytest


def pytest_configure():
    """Pin test-only settings regardless of the developer's environment."""
    from django.conf import settings

    # Never talk to a real Redis from the test suite
    settings.CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "ledger-tests",
        }
    }
    settings.LEDGER_SUMMARY_CACHE_TTL = 30
    settings.LEDGER_LOCK_TIMEOUT = 5.0


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_integration.py → e2e (full posting/query workflows)
    - test_services.py, test_queries.py, test_admin.py → integration
    - test_models.py, test_amounts.py, test_locks.py, etc. → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    # Filename patterns for each category
    e2e_patterns = ["test_integration.py"]

    integration_patterns = [
        "test_services.py",
        "test_queries.py",
        "test_admin.py",
    ]

    unit_patterns = [
        "test_models.py",
        "test_amounts.py",
        "test_types.py",
        "test_cache.py",
        "test_locks.py",
        "test_exceptions.py",
        "test_helpers.py",
    ]

    for item in items:
        # Skip if test already has unit/integration/e2e marker
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = item.path.name

        # Check patterns in priority order
        if any(pattern in filename for pattern in e2e_patterns):
            item.add_marker(pytest.mark.e2e)
        elif any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            # Default: integration (safe for Django where most tests hit DB)
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def clear_cache():
    """Start and end every test with an empty Django cache."""
    from django.core.cache import cache

    cache.clear()
    yield
    cache.clear()
