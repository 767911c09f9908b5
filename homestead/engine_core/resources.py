"""
Resource Ledger - The colony's typed resource store.

Design principles:
- add() never fails; negative entries are allowed
- subtract() and apply() are all-or-nothing: either every entry is
  committed or the ledger is left exactly as it was
- Reading an undefined resource type is a data error and raises

The same type is used for deltas (production, costs, event effects).
Deltas are built with ResourceLedger.of() so they only hold the types
they mention.
"""

from __future__ import annotations
from typing import Iterator

from .errors import InsufficientResource, Outcome, UnknownResourceType

FOOD = "food"
ENERGY = "energy"
MATERIALS = "materials"
OXYGEN = "oxygen"

STARTING_STOCK: dict[str, int] = {
    FOOD: 100,
    ENERGY: 100,
    MATERIALS: 50,
    OXYGEN: 100,
}


class ResourceLedger:
    """
    Mapping of resource type name -> integer quantity.

    Usage:
        stock = ResourceLedger()              # starting stock
        cost = ResourceLedger.of(materials=20)

        if stock.can_afford(cost):
            stock.subtract(cost).unwrap()
    """

    def __init__(self, quantities: dict[str, int] | None = None):
        if quantities is None:
            quantities = STARTING_STOCK
        self._quantities: dict[str, int] = {
            name: int(amount) for name, amount in quantities.items()
        }

    @classmethod
    def of(cls, **amounts: int) -> ResourceLedger:
        """Build a delta holding only the given resource types."""
        return cls(dict(amounts))

    @classmethod
    def empty(cls) -> ResourceLedger:
        return cls({})

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def add(self, delta: ResourceLedger) -> None:
        """Add every entry of delta. Always succeeds."""
        for name, amount in delta.items():
            self._quantities[name] = self._quantities.get(name, 0) + amount

    def subtract(self, delta: ResourceLedger) -> Outcome:
        """
        Remove every entry of delta, or nothing at all.

        Fails with InsufficientResource naming the first resource
        (in delta order) that would go negative.
        """
        return self._commit({name: -amount for name, amount in delta.items()})

    def apply(self, delta: ResourceLedger) -> Outcome:
        """Apply a signed delta with the same floor check as subtract()."""
        return self._commit(dict(delta.items()))

    def _commit(self, signed: dict[str, int]) -> Outcome:
        staged = dict(self._quantities)
        for name, amount in signed.items():
            result = staged.get(name, 0) + amount
            if result < 0:
                return Outcome.failure(InsufficientResource(
                    name,
                    available=self._quantities.get(name, 0),
                    requested=-amount,
                ))
            staged[name] = result
        self._quantities = staged
        return Outcome.ok(self)

    def can_afford(self, cost: ResourceLedger) -> bool:
        """True iff every cost entry is covered. Absent types count as 0."""
        return all(
            self._quantities.get(name, 0) >= amount
            for name, amount in cost.items()
        )

    # =========================================================================
    # Mapping access
    # =========================================================================

    def __getitem__(self, name: str) -> int:
        if name not in self._quantities:
            raise UnknownResourceType(name)
        return self._quantities[name]

    def __setitem__(self, name: str, amount: int) -> None:
        self._quantities[name] = int(amount)

    def __contains__(self, name: object) -> bool:
        return name in self._quantities

    def __iter__(self) -> Iterator[str]:
        return iter(self._quantities)

    def __len__(self) -> int:
        return len(self._quantities)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResourceLedger):
            return NotImplemented
        return self._quantities == other._quantities

    def __repr__(self) -> str:
        return f"ResourceLedger({self._quantities!r})"

    def get(self, name: str, default: int = 0) -> int:
        return self._quantities.get(name, default)

    def items(self):
        return self._quantities.items()

    def is_empty(self) -> bool:
        return not self._quantities

    def copy(self) -> ResourceLedger:
        return ResourceLedger(self._quantities)

    def to_dict(self) -> dict[str, int]:
        return dict(self._quantities)

    def describe(self) -> str:
        """Human-readable one-liner, e.g. 'food:100 energy:100'."""
        return " ".join(f"{name}:{amount}" for name, amount in self.items())
