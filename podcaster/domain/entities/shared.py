"""Shared utilities and helper functions for domain entities.

Pure utility functions with zero external dependencies beyond attrs.
"""

from typing import Any, Final

import attrs


class UnsetType:
    """Marker type for patch fields the caller did not provide."""

    _instance: "UnsetType | None" = None

    def __new__(cls) -> "UnsetType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNSET"


UNSET: Final = UnsetType()


def is_set(value: Any) -> bool:
    """Check whether a patch field was provided (None counts as provided)."""
    return value is not UNSET


def present_fields(instance: Any) -> dict[str, Any]:
    """Collect the provided fields of an attrs patch object.

    Fields left at UNSET are dropped; explicit None values are kept.
    """
    return attrs.asdict(
        instance,
        recurse=False,
        filter=lambda _attribute, value: is_set(value),
    )


def unset_or(validator: Any) -> Any:
    """Wrap an attrs validator so it is skipped for UNSET values."""

    def _validate(instance: Any, attribute: attrs.Attribute, value: Any) -> None:
        if is_set(value):
            validator(instance, attribute, value)

    return _validate
