"""Fixtures for translatable tests."""

import pytest

from translatable.configuration import TranslatableSettings
from translatable.events import TRANSLATION_SET, EventDispatcher
from translatable.records import Record, TranslatableRecord
from translatable.registry import TranslationDriverRegistry


@pytest.fixture
def settings():
    """Default settings, isolated from the environment and any .env file."""
    return TranslatableSettings(_env_file=None)


@pytest.fixture
def dispatcher():
    """Fresh in-process event dispatcher."""
    return EventDispatcher()


@pytest.fixture
def recorded_events(dispatcher):
    """List collecting every TranslationHasBeenSet dispatched."""
    events = []
    dispatcher.register_handler(TRANSLATION_SET)(events.append)
    return events


@pytest.fixture
def registry(settings, dispatcher):
    """Registry with the built-in drivers, wired to the dispatcher."""
    return TranslationDriverRegistry(settings, events=dispatcher)


@pytest.fixture
def record_factory():
    """Factory for plain attribute-bag records."""

    def _factory(**attributes):
        return Record(attributes)

    return _factory


@pytest.fixture
def article_class():
    """Record class using every built-in layout.

    - title: json column
    - meta->title: nested key of the meta json column
    - subtitle: hybrid, shared column "extra"
    - summary: extra_only, shared column "extra"
    """

    class Article(TranslatableRecord):
        translatable = [
            "title",
            "meta->title",
            {"subtitle": {"driver": "hybrid", "storage_column": "extra"}},
            {"summary": {"driver": "extra_only", "storage_column": "extra"}},
        ]

    return Article


@pytest.fixture
def article(article_class, registry):
    """Empty Article bound to the registry."""
    return article_class(registry)
