"""Cast markers that imply a translation driver.

A record can pick a layout through its casts instead of an explicit driver
option:

    class Article(TranslatableRecord):
        translatable = ["title", "subtitle"]
        casts = {
            "title": HybridTranslatable,
            "subtitle": "translatable.casts.ExtraOnlyTranslatable:extra",
        }

String casts may carry a parameter after ":"; for shared-column layouts it
names the storage column.
"""

from typing import Any, ClassVar, Optional

CAST_PARAMETER_SEPARATOR = ":"


class TranslatableCast:
    """Marker base class for translatable casts."""

    driver_name: ClassVar[str]


class HybridTranslatable(TranslatableCast):
    driver_name = "hybrid"


class ExtraOnlyTranslatable(TranslatableCast):
    driver_name = "extra_only"


def cast_identifier(cast: Any) -> str:
    """Identifier used to match a cast against registered cast mappings.

    Classes are identified by their dotted path; strings by the part before
    the first ":".
    """
    if isinstance(cast, type):
        return f"{cast.__module__}.{cast.__qualname__}"
    return str(cast).split(CAST_PARAMETER_SEPARATOR, 1)[0].strip()


def cast_parameter(cast: Any) -> Optional[str]:
    """Parameter of a string cast ("Cast:param"), or None."""
    if not isinstance(cast, str) or CAST_PARAMETER_SEPARATOR not in cast:
        return None
    parameter = cast.split(CAST_PARAMETER_SEPARATOR, 1)[1].strip()
    return parameter or None
