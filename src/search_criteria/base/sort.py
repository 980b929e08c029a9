# src/search_criteria/base/sort.py
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple, Union

from .exceptions import InvalidArgumentError
from .field import Field, to_field

DEFAULT_PAGE_SIZE = 10


class Direction(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Order:
    """One sort key: a field and the direction to sort it in."""

    field_name: str
    direction: Direction = Direction.ASC

    def __post_init__(self):
        if not isinstance(self.direction, Direction):
            raise InvalidArgumentError(
                f"Sort direction must be a Direction, got {self.direction!r}"
            )
        if isinstance(self.field_name, Field):
            object.__setattr__(self, "field_name", self.field_name.name)
        if not isinstance(self.field_name, str) or not self.field_name.strip():
            raise InvalidArgumentError("Property for sort order must not be None/empty.")

    @property
    def ascending(self) -> bool:
        return self.direction is Direction.ASC


class Sort:
    """
    An ordered, immutable list of sort orders.

    ``Sort("a", "b")`` sorts ascending on ``a`` then ``b``;
    ``Sort("a", direction=Direction.DESC)`` sorts descending. Orders built
    separately can be passed with ``orders=[...]``.
    """

    _orders: Tuple[Order, ...]

    def __init__(
        self,
        *properties: Union[str, Field],
        direction: Direction = Direction.ASC,
        orders: Optional[Iterable[Order]] = None,
    ):
        collected = [Order(to_field(p).name, direction) for p in properties]
        if orders is not None:
            collected.extend(orders)
        if not collected:
            raise InvalidArgumentError("You have to provide at least one sort property.")
        self._orders = tuple(collected)

    @property
    def orders(self) -> Tuple[Order, ...]:
        return self._orders

    def and_(self, sort: Optional["Sort"]) -> "Sort":
        """Returns a new Sort with the orders of ``sort`` appended to these."""
        if sort is None:
            return self
        return Sort(orders=self._orders + sort.orders)

    def get_order_for(self, field: Union[str, Field]) -> Optional[Order]:
        name = to_field(field).name
        for order in self._orders:
            if order.field_name == name:
                return order
        return None

    def __iter__(self) -> Iterator[Order]:
        return iter(self._orders)

    def __len__(self) -> int:
        return len(self._orders)

    def __eq__(self, other) -> bool:
        if isinstance(other, Sort):
            return self._orders == other._orders
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._orders)

    def __repr__(self) -> str:
        keys = ", ".join(f"{o.field_name}: {o.direction.value}" for o in self._orders)
        return f"Sort({keys})"


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page request; ``offset`` is ``page * size``."""

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort: Optional[Sort] = None

    def __post_init__(self):
        if not isinstance(self.page, int) or self.page < 0:
            raise InvalidArgumentError("Page index must be a non-negative integer.")
        if not isinstance(self.size, int) or self.size < 1:
            raise InvalidArgumentError("Page size must be a positive integer.")

    @property
    def offset(self) -> int:
        return self.page * self.size
