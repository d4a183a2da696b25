"""Attribute configuration models.

A record class declares its translatable attributes once; the declaration is
parsed into AttributeConfig values at class definition time and never
re-inspected per call.

Declaration shapes:
    translatable = ["title", "body"]
    translatable = {"title": {}, "subtitle": {"driver": "extra_only"}}
    translatable = ["title", {"subtitle": {"driver": "hybrid", "storage_column": "extra"}}]
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from translatable.exceptions import ConfigurationError

PATH_SEPARATOR = "->"


@dataclass(frozen=True)
class AttributePath:
    """Location of a translatable attribute.

    Frozen to ensure immutability and hashability for caching.

    Attributes:
        column: Physical column holding the attribute.
        segments: Keys inside the column's JSON object, empty for a flat column.
    """

    column: str
    segments: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.name

    @property
    def name(self) -> str:
        """Declared attribute name (e.g., "title" or "meta->title")."""
        return PATH_SEPARATOR.join((self.column, *self.segments))

    @property
    def is_nested(self) -> bool:
        return bool(self.segments)

    @classmethod
    def from_string(cls, name: str) -> "AttributePath":
        """Parse "column->key->key" notation.

        Args:
            name: Declared attribute name.

        Returns:
            AttributePath instance.

        Raises:
            ConfigurationError: If the name is empty or has empty segments.
        """
        parts = tuple(part.strip() for part in name.split(PATH_SEPARATOR))
        if not all(parts):
            raise ConfigurationError(f"Invalid translatable attribute name: {name!r}")
        return cls(column=parts[0], segments=parts[1:])


@dataclass(frozen=True)
class ImplicitAttribute:
    """Attribute declared by name only; the driver comes from casts or defaults."""

    path: AttributePath

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def driver(self) -> Optional[str]:
        return None

    @property
    def options(self) -> Dict[str, Any]:
        return {}


@dataclass(frozen=True)
class ExplicitAttribute:
    """Attribute declared with a configuration mapping.

    Attributes:
        path: Attribute location.
        driver: Driver name, or None to fall back to casts/defaults.
        options: Driver-specific options (storage_column, base_locale, ...).
    """

    path: AttributePath
    driver: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict, hash=False, compare=True)

    @property
    def name(self) -> str:
        return self.path.name


AttributeConfig = Union[ImplicitAttribute, ExplicitAttribute]


def _explicit(name: str, config: Any) -> AttributeConfig:
    if config is None:
        return ImplicitAttribute(AttributePath.from_string(name))
    if not isinstance(config, Mapping):
        raise ConfigurationError(
            f"Configuration for translatable attribute {name!r} must be a mapping, "
            f"got {type(config).__name__}"
        )
    options = dict(config)
    driver = options.pop("driver", None)
    return ExplicitAttribute(
        path=AttributePath.from_string(name),
        driver=driver,
        options=options,
    )


def parse_attribute_configs(declaration: Any) -> Tuple[AttributeConfig, ...]:
    """Normalize a translatable declaration into AttributeConfig values.

    Args:
        declaration: None, a mapping of name -> options, or an iterable of
            names and single-entry mappings.

    Returns:
        Tuple of attribute configs in declaration order.

    Raises:
        ConfigurationError: If the declaration has an unsupported shape or
            names an attribute twice.
    """
    if declaration is None:
        return ()

    if isinstance(declaration, str):
        declaration = [declaration]

    configs = []
    if isinstance(declaration, Mapping):
        configs.extend(_explicit(name, config) for name, config in declaration.items())
    elif isinstance(declaration, Iterable):
        for entry in declaration:
            if isinstance(entry, str):
                configs.append(ImplicitAttribute(AttributePath.from_string(entry)))
            elif isinstance(entry, Mapping):
                configs.extend(_explicit(name, config) for name, config in entry.items())
            else:
                raise ConfigurationError(
                    f"Unsupported translatable declaration entry: {entry!r}"
                )
    else:
        raise ConfigurationError(
            f"Unsupported translatable declaration: {type(declaration).__name__}"
        )

    seen = set()
    for config in configs:
        if config.name in seen:
            raise ConfigurationError(
                f"Translatable attribute {config.name!r} is declared more than once"
            )
        seen.add(config.name)

    return tuple(configs)
