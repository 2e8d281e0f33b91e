"""Pytest configuration for all tests."""

from datetime import datetime, timezone

import pytest

from exprkit.core.config import Settings, get_settings
from exprkit.core.expressions import ExpressionContext, UserIdentity
from exprkit.core.expressions.evaluator import get_default_evaluator
from exprkit.core.expressions.registry import get_default_registry
from exprkit.core.logging import configure_logging

FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session", autouse=True)
def _quiet_logging():
    """Keep test output readable."""
    configure_logging(Settings(environment="testing", log_format="console", log_level="WARNING"))


@pytest.fixture(autouse=True)
def _reset_defaults():
    """Give every test a fresh default registry, evaluator and settings."""
    get_settings.cache_clear()
    get_default_registry.cache_clear()
    get_default_evaluator.cache_clear()
    yield
    get_settings.cache_clear()
    get_default_registry.cache_clear()
    get_default_evaluator.cache_clear()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def admin_user() -> UserIdentity:
    return UserIdentity(id="u1", roles=["admin", "user"], permissions=["posts.edit", "posts.view"])


@pytest.fixture
def context(admin_user) -> ExpressionContext:
    """Context for a blog post owned by the admin user."""
    return ExpressionContext(
        data={
            "title": "Hello World",
            "price": 100,
            "quantity": 3,
            "userId": "u1",
            "author": {"id": "u1", "profile": {"bio": "Writer"}},
            "tags": ["python", "rules"],
            "items": [
                {"name": "Pen", "price": 10, "published": True},
                {"name": "Ink", "price": 20, "published": False},
                {"name": "Pad", "price": 30, "published": True},
            ],
            "publishedAt": "2024-06-10T08:00:00Z",
            "deletedAt": None,
        },
        user=admin_user,
        params={"id": "42"},
        globals={"currency": "EUR"},
        now=FIXED_NOW,
    )


@pytest.fixture
def anonymous_context() -> ExpressionContext:
    return ExpressionContext(data={"userId": "u1"}, now=FIXED_NOW)
