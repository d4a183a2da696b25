"""Unit tests for translatable.drivers.hybrid_column."""

import json
from unittest.mock import MagicMock

import pytest

from translatable.drivers import HybridColumnDriver
from translatable.query import NotNull
from translatable.records import Record

pytestmark = pytest.mark.unit


@pytest.fixture
def driver(settings):
    return HybridColumnDriver("title", settings, {"storage_column": "extra"})


def shared(record, column="extra"):
    return json.loads(record.get_raw_attribute(column))


class TestStorageResolution:
    """Tests for storage column and base locale resolution."""

    def test_storage_column_option(self, driver):
        assert driver.resolve_storage_column(Record) == "extra"

    def test_storage_column_from_record_type(self, settings):
        class Product(Record):
            EXTRA_JSON_COLUMN = "i18n"

        driver = HybridColumnDriver("title", settings)

        assert driver.resolve_storage_column(Product) == "i18n"

    def test_storage_column_from_settings(self, settings):
        driver = HybridColumnDriver("title", settings.model_copy(update={"STORAGE_COLUMN": "texts"}))

        assert driver.resolve_storage_column(Record) == "texts"

    def test_storage_column_default(self, settings):
        assert HybridColumnDriver("title", settings).resolve_storage_column(Record) == "translations"

    def test_storage_column_is_memoized(self, settings):
        """The first resolution sticks for the driver's lifetime."""
        driver = HybridColumnDriver("title", settings)

        class Product(Record):
            EXTRA_JSON_COLUMN = "i18n"

        assert driver.resolve_storage_column(Record) == "translations"
        assert driver.resolve_storage_column(Product) == "translations"

    def test_base_locale_option(self, settings):
        driver = HybridColumnDriver("title", settings, {"base_locale": "es"})
        assert driver.resolve_base_locale(Record) == "es"

    def test_base_locale_from_record_type(self, settings):
        class Product(Record):
            BASE_LOCALE = "fr"

        assert HybridColumnDriver("title", settings).resolve_base_locale(Product) == "fr"

    def test_base_locale_from_settings(self, settings):
        driver = HybridColumnDriver("title", settings.model_copy(update={"BASE_LOCALE": "de"}))
        assert driver.resolve_base_locale(Record) == "de"

    def test_base_locale_defaults_to_fallback_locale(self, settings):
        driver = HybridColumnDriver("title", settings.model_copy(update={"FALLBACK_LOCALE": "pt"}))
        assert driver.resolve_base_locale(Record) == "pt"

    def test_base_locale_last_resort(self, settings):
        driver = HybridColumnDriver("title", settings.model_copy(update={"FALLBACK_LOCALE": None}))
        assert driver.resolve_base_locale(Record) == "en"


class TestHybridSet:
    """Tests for HybridColumnDriver.set."""

    def test_base_locale_writes_plain_column_only(self, driver, record_factory):
        record = record_factory()

        driver.set(record, "en", "Hello")

        assert record.get_raw_attribute("title") == "Hello"
        assert record.has_raw_attribute("extra") is False

    def test_other_locale_writes_shared_column(self, driver, record_factory):
        record = record_factory(title="Hello")

        driver.set(record, "fr", "Bonjour")

        assert record.get_raw_attribute("title") == "Hello"
        assert shared(record) == {"fr": {"title": "Bonjour"}}

    def test_base_write_removes_stale_shared_copy(self, driver, record_factory):
        record = record_factory(extra='{"en":{"title":"Old"},"fr":{"title":"Bonjour"}}')

        driver.set(record, "en", "New")

        assert record.get_raw_attribute("title") == "New"
        assert shared(record) == {"fr": {"title": "Bonjour"}}

    def test_force_base_in_storage(self, settings, record_factory):
        driver = HybridColumnDriver(
            "title", settings, {"storage_column": "extra", "force_base_in_storage": True}
        )
        record = record_factory()

        driver.set(record, "en", "Hello")

        assert record.get_raw_attribute("title") == "Hello"
        assert shared(record) == {"en": {"title": "Hello"}}

    def test_other_attributes_in_shared_column_untouched(self, driver, record_factory):
        record = record_factory(extra='{"fr":{"subtitle":"Sous-titre"}}')

        driver.set(record, "fr", "Bonjour")

        assert shared(record) == {"fr": {"subtitle": "Sous-titre", "title": "Bonjour"}}

    def test_set_notifies_with_old_value(self, settings, record_factory):
        sink = MagicMock()
        driver = HybridColumnDriver("title", settings, {"storage_column": "extra"}, events=sink)
        record = record_factory(title="Hello")

        driver.set(record, "en", "Hi")

        event = sink.dispatch.call_args[0][0]
        assert (event.key, event.locale, event.old_value, event.new_value) == (
            "title",
            "en",
            "Hello",
            "Hi",
        )


class TestHybridGet:
    """Tests for HybridColumnDriver.get."""

    @pytest.fixture
    def record(self, record_factory):
        return record_factory(title="Hello", extra='{"fr":{"title":"Bonjour"}}')

    def test_base_locale_reads_plain_column(self, driver, record):
        assert driver.get(record, "en") == "Hello"

    def test_other_locale_reads_shared_column(self, driver, record):
        assert driver.get(record, "fr") == "Bonjour"

    def test_missing_locale_falls_back_to_plain_column(self, driver, record):
        assert driver.get(record, "de") == "Hello"

    def test_missing_locale_prefers_shared_base_entry(self, driver, record_factory):
        record = record_factory(title="Plain", extra='{"en":{"title":"Shared"}}')

        assert driver.get(record, "de") == "Shared"

    def test_missing_locale_without_fallback(self, driver, record):
        assert driver.get(record, "de", False) is None

    def test_base_locale_ignores_shared_column(self, driver, record_factory):
        record = record_factory(extra='{"en":{"title":"Shared"}}')

        assert driver.get(record, "en") is None

    def test_corrupt_shared_column(self, driver, record_factory):
        record = record_factory(title="Hello", extra="{oops")

        assert driver.get(record, "fr", False) is None
        assert driver.get(record, "fr") == "Hello"


class TestHybridForget:
    """Tests for HybridColumnDriver.forget."""

    def test_forget_other_locale(self, driver, record_factory):
        record = record_factory(title="Hello", extra='{"fr":{"title":"Bonjour"}}')

        driver.forget(record, "fr")

        assert record.get_raw_attribute("title") == "Hello"
        assert shared(record) == {}

    def test_forget_keeps_other_attributes_in_bucket(self, driver, record_factory):
        record = record_factory(extra='{"fr":{"title":"Bonjour","subtitle":"Sous"}}')

        driver.forget(record, "fr")

        assert shared(record) == {"fr": {"subtitle": "Sous"}}

    def test_forget_base_locale_clears_plain_column(self, driver, record_factory):
        record = record_factory(title="Hello", extra='{"fr":{"title":"Bonjour"}}')

        driver.forget(record, "en")

        assert record.get_raw_attribute("title") == ""
        assert shared(record) == {"fr": {"title": "Bonjour"}}

    def test_forget_base_locale_leaves_null_column_alone(self, driver):
        record = MagicMock(spec=Record)
        record.get_raw_attribute.return_value = None

        driver.forget(record, "en")

        record.set_raw_attribute.assert_not_called()

    def test_forget_missing_locale_writes_nothing(self, driver, record_factory):
        record = record_factory(title="Hello")

        driver.forget(record, "fr")

        assert record.has_raw_attribute("extra") is False

    def test_forget_all(self, driver, record_factory):
        record = record_factory(
            title="Hello", extra='{"fr":{"title":"Bonjour"},"es":{"title":"Hola","subtitle":"Sub"}}'
        )

        driver.forget(record)

        assert record.get_raw_attribute("title") == ""
        assert shared(record) == {"es": {"subtitle": "Sub"}}

    def test_forget_all_as_null(self, driver, record_factory):
        record = record_factory(title="Hello")

        driver.forget(record, as_null=True)

        assert record.get_raw_attribute("title") is None


class TestHybridAll:
    """Tests for HybridColumnDriver.all."""

    def test_all_merges_plain_and_shared(self, driver, record_factory):
        record = record_factory(title="Hello", extra='{"fr":{"title":"Bonjour"},"es":{"title":""}}')

        assert driver.all(record) == {"en": "Hello", "fr": "Bonjour"}

    def test_plain_column_wins_for_base_locale(self, driver, record_factory):
        record = record_factory(title="Plain", extra='{"en":{"title":"Shared"}}')

        assert driver.all(record) == {"en": "Plain"}

    def test_shared_base_entry_used_without_plain_value(self, driver, record_factory):
        record = record_factory(extra='{"en":{"title":"Shared"}}')

        assert driver.all(record) == {"en": "Shared"}

    def test_all_allowed_locales(self, driver, record_factory):
        record = record_factory(title="Hello", extra='{"fr":{"title":"Bonjour"}}')

        assert driver.all(record, ["fr"]) == {"fr": "Bonjour"}
        assert driver.locales(record) == ["en", "fr"]


class TestHybridPredicates:
    """Tests for where_locale and where_locales."""

    def test_base_locale_uses_plain_column(self, driver):
        assert driver.where_locale(Record, "en") == NotNull(("title",))

    def test_other_locale_uses_shared_column(self, driver):
        assert driver.where_locale(Record, "fr") == NotNull(("extra", "fr", "title"))

    def test_where_locales_mixes_both(self, driver):
        assert driver.where_locales(Record, ["en", "fr"]).render() == (
            "(title IS NOT NULL OR extra->fr->title IS NOT NULL)"
        )


class TestHybridScenario:
    """Base write followed by a translation write."""

    def test_base_then_translation(self, driver, record_factory):
        record = record_factory()

        driver.set(record, "en", "Hello")
        driver.set(record, "fr", "Bonjour")

        assert record.get_raw_attribute("title") == "Hello"
        assert shared(record) == {"fr": {"title": "Bonjour"}}
        assert driver.get(record, "en") == "Hello"
        assert driver.get(record, "fr") == "Bonjour"
        assert driver.get(record, "de") == "Hello"
