"""Translation driver registry.

Maps driver names to driver constructors, maps casts to driver names, and
resolves one cached driver instance per (record type, attribute, driver).

The registry is an explicit object built at application start and handed to
whatever initializes records; there is no global instance.
"""

import threading
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from translatable.casts import (
    ExtraOnlyTranslatable,
    HybridTranslatable,
    cast_identifier,
    cast_parameter,
)
from translatable.configuration import TranslatableSettings, get_settings
from translatable.drivers import (
    ExtraOnlyDriver,
    HybridColumnDriver,
    JsonColumnDriver,
    TranslationDriver,
)
from translatable.events import EventSink, NullEventSink
from translatable.exceptions import (
    ConfigurationError,
    NestedPathNotSupportedError,
    UnknownDriverError,
)
from translatable.logging import get_module_logger
from translatable.models import (
    AttributeConfig,
    AttributePath,
    ImplicitAttribute,
)

logger = get_module_logger()

DEFAULT_DRIVER = "json"

DriverConstructor = Callable[..., TranslationDriver]


class TranslationDriverRegistry:
    """Registry of translation drivers.

    Thread-safe for registration and resolution when one registry is shared
    by several request threads.

    Attributes:
        config: Settings passed to every driver it builds.
        events: Event sink passed to every driver it builds.

    Example:
        registry = TranslationDriverRegistry(settings, events=dispatcher)
        registry.register("redis", RedisTranslationDriver)
        registry.register_cast("app.casts.RedisTranslatable", "redis")

        driver = registry.resolve(Article, ImplicitAttribute(AttributePath("title")))
    """

    def __init__(
        self,
        config: Optional[TranslatableSettings] = None,
        events: Optional[EventSink] = None,
    ):
        """Initialize the registry with the built-in drivers and casts.

        Args:
            config: Settings for built drivers; the process-wide settings when None.
            events: Event sink for built drivers; events are dropped when None.
        """
        self.config = config or get_settings()
        self.events = events or NullEventSink()
        self._drivers: Dict[str, DriverConstructor] = {}
        self._cast_mapping: Dict[str, str] = {}
        self._cache: Dict[Tuple[type, str, str], TranslationDriver] = {}
        self._lock = threading.Lock()
        self._register_default_drivers()

    def register(self, name: str, driver: DriverConstructor) -> "TranslationDriverRegistry":
        """Register a translation driver, replacing any driver of that name.

        Args:
            name: Driver name used in attribute configuration.
            driver: Driver class or factory, called with the keyword arguments
                attribute, config, options and events.

        Returns:
            The registry, for chaining.

        Raises:
            ConfigurationError: If driver is not callable.
        """
        if not callable(driver):
            raise ConfigurationError(
                f"Translation driver [{name}] must be a class or factory, "
                f"got {type(driver).__name__}"
            )

        with self._lock:
            self._drivers[name] = driver
            # Instances built by a replaced constructor must not be served again
            for key in [key for key in self._cache if key[2] == name]:
                del self._cache[key]

        logger.debug(
            "translation_driver_registered",
            driver=name,
            constructor=getattr(driver, "__name__", repr(driver)),
        )
        return self

    def register_cast(self, cast: Any, driver_name: str) -> "TranslationDriverRegistry":
        """Register a cast to driver mapping.

        Args:
            cast: Cast class or cast identifier string.
            driver_name: Driver implied by the cast.

        Returns:
            The registry, for chaining.
        """
        identifier = cast_identifier(cast)
        with self._lock:
            self._cast_mapping[identifier] = driver_name

        logger.debug("translation_cast_registered", cast=identifier, driver=driver_name)
        return self

    def has_driver(self, name: str) -> bool:
        with self._lock:
            return name in self._drivers

    def driver_names(self) -> List[str]:
        with self._lock:
            return list(self._drivers.keys())

    def resolve(
        self,
        record_type: type,
        config: Union[AttributeConfig, str],
    ) -> TranslationDriver:
        """Resolve the driver for a record type's attribute.

        The driver name is, in order: the attribute's explicit driver, the
        driver implied by the record type's cast for the attribute, "json".

        Args:
            record_type: Record class declaring the attribute.
            config: Parsed attribute configuration, or a bare attribute name.

        Returns:
            Cached driver instance shared by all records of record_type.

        Raises:
            UnknownDriverError: If the driver name is not registered.
            NestedPathNotSupportedError: If a nested attribute path is bound
                to a layout that only supports flat columns.
            ConfigurationError: If the constructor does not build a
                TranslationDriver.
        """
        if isinstance(config, str):
            config = ImplicitAttribute(AttributePath.from_string(config))

        cast = self._declared_cast(record_type, config.name)
        driver_name = self.determine_driver_name(config, cast)
        cache_key = (record_type, config.name, driver_name)

        with self._lock:
            cached = self._cache.get(cache_key)
            constructor = self._drivers.get(driver_name)

        if cached is not None:
            return cached

        if constructor is None:
            logger.error(
                "translation_driver_not_registered",
                driver=driver_name,
                record_type=record_type.__name__,
                attribute=config.name,
            )
            raise UnknownDriverError(driver_name)

        # Constructors may call back into the registry, so they run unlocked
        driver = constructor(
            attribute=config.path,
            config=self.config,
            options=self._driver_options(config, cast),
            events=self.events,
        )
        if not isinstance(driver, TranslationDriver):
            raise ConfigurationError(
                f"Translation driver [{driver_name}] built "
                f"{type(driver).__name__}, expected a TranslationDriver"
            )
        if config.path.is_nested and not driver.supports_nested_paths:
            raise NestedPathNotSupportedError(config.name, driver_name)

        with self._lock:
            # A constructor replaced while this one ran must not be cached
            if self._drivers.get(driver_name) is constructor:
                driver = self._cache.setdefault(cache_key, driver)

        logger.debug(
            "translation_driver_resolved",
            driver=driver_name,
            record_type=record_type.__name__,
            attribute=config.name,
        )
        return driver

    def resolve_all(
        self,
        record_type: type,
        configs: Iterable[AttributeConfig],
    ) -> Dict[str, TranslationDriver]:
        """Resolve drivers for several attributes, keyed by attribute name."""
        return {config.name: self.resolve(record_type, config) for config in configs}

    def determine_driver_name(self, config: AttributeConfig, cast: Any = None) -> str:
        """Determine driver name from attribute config and declared cast."""
        if config.driver:
            return config.driver

        if cast is not None:
            with self._lock:
                mapped = self._cast_mapping.get(cast_identifier(cast))
            if mapped is not None:
                return mapped

        return DEFAULT_DRIVER

    def clear_cache(self) -> None:
        """Clear the driver instance cache."""
        with self._lock:
            self._cache.clear()
        logger.debug("translation_driver_cache_cleared")

    @staticmethod
    def _declared_cast(record_type: type, attribute: str) -> Any:
        casts = getattr(record_type, "casts", None)
        if not isinstance(casts, Mapping):
            return None
        return casts.get(attribute)

    @staticmethod
    def _driver_options(config: AttributeConfig, cast: Any) -> Dict[str, Any]:
        options = dict(config.options)
        parameter = cast_parameter(cast)
        if parameter is not None and not config.driver:
            options.setdefault("storage_column", parameter)
        return options

    def _register_default_drivers(self) -> None:
        self.register("json", JsonColumnDriver)
        self.register("hybrid", HybridColumnDriver)
        self.register("extra_only", ExtraOnlyDriver)

        self.register_cast(HybridTranslatable, "hybrid")
        self.register_cast(ExtraOnlyTranslatable, "extra_only")
