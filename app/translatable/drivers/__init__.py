"""Translation drivers - one per storage layout.

- json: JsonColumnDriver, all locales in the attribute's JSON column
- hybrid: HybridColumnDriver, base locale in a plain column, others shared
- extra_only: ExtraOnlyDriver, all locales in a shared JSON column

Custom layouts subclass AbstractTranslationDriver (or implement
TranslationDriver directly) and are registered by name on a
TranslationDriverRegistry.
"""

from translatable.drivers.base import AbstractTranslationDriver
from translatable.drivers.contract import SupportsAttributes, TranslationDriver
from translatable.drivers.extra_only import ExtraOnlyDriver
from translatable.drivers.hybrid_column import HybridColumnDriver
from translatable.drivers.json_column import JsonColumnDriver
from translatable.drivers.shared_column import SharedColumnDriver

__all__ = [
    "TranslationDriver",
    "SupportsAttributes",
    "AbstractTranslationDriver",
    "SharedColumnDriver",
    "JsonColumnDriver",
    "HybridColumnDriver",
    "ExtraOnlyDriver",
]
