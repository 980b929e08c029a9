# src/search_criteria/base/field.py
import logging
from typing import Any, List, Union

from .exceptions import InvalidArgumentError

# --- Setup Logging ---
log = logging.getLogger(__name__)


# --- Field Representation ---
class Field:
    """
    Names a document attribute targeted by a criteria, sort, projection or facet.

    Fields are opaque dotted names chosen by the caller; no mapping to a
    document schema is performed. Nested paths can be built by attribute
    or item access (``Field("address").city`` -> ``address.city``), except
    for the reserved attribute names ``name`` and ``path``.
    """

    _name: str

    def __init__(self, name: str):
        if name is None:
            raise InvalidArgumentError("Field for criteria must not be None.")
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("Field.name for criteria must not be None/empty.")
        object.__setattr__(self, "_name", name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> str:
        return self._name

    def __getitem__(self, key: Any) -> "Field":
        """Handles indexed access (``field[0]`` or ``field["key"]``) for nested paths."""
        if isinstance(key, bool) or not isinstance(key, (int, str)):
            raise TypeError(
                f"Field index must be an integer or string, got {type(key).__name__}"
            )
        if isinstance(key, int) and key < 0:
            raise IndexError("Negative indexing is not supported for fields")
        new_name = f"{self._name}.{key}"
        log.debug(f"Accessing nested field via getitem: key={key!r} -> '{new_name}'")
        return Field(new_name)

    def __getattr__(self, name: str) -> "Field":
        if name.startswith("_"):
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )
        return Field(f"{self._name}.{name}")

    def __setattr__(self, name: str, value: Any):
        raise AttributeError("Cannot modify Field attributes after initialization.")

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Field):
            return self._name == other._name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return f"Field(name={self._name!r})"

    def __str__(self) -> str:
        return self._name


def to_field(field: Union[str, Field]) -> Field:
    """Coerces a field name or Field into a Field."""
    if isinstance(field, Field):
        return field
    if field is None or isinstance(field, str):
        return Field(field)
    raise InvalidArgumentError(
        f"Expected field to be str or Field, got {type(field).__name__}"
    )


# --- Fields Proxy ---
class FieldsProxy:
    """Creates Field instances dynamically for any attribute access."""

    __slots__ = ()

    def __getattr__(self, name: str) -> Field:
        if name.startswith("_"):
            raise AttributeError(f"No attribute '{name}'")
        log.debug(f"FieldsProxy: Creating Field for attribute '{name}'")
        return Field(name)

    def __getitem__(self, name: str) -> Field:
        return Field(name)

    def __dir__(self) -> List[str]:
        return []
