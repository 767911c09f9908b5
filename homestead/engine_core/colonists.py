"""
Colonists - Workers, their specializations and the colony roster.

A colonist's yield depends on its specialization and grows slowly with
experience. Two health thresholds apply and are intentionally distinct:

- work() refuses below WORK_HEALTH_FLOOR (health < 50)
- the production phase only calls colonists above ELIGIBLE_HEALTH
  (health > 50), so a colonist at exactly 50 is skipped, not refused
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from .errors import ColonistDeceased, ColonistUnwell, Outcome
from .resources import ResourceLedger

MAX_HEALTH = 100
WORK_HEALTH_FLOOR = 50
ELIGIBLE_HEALTH = 50
REST_RECOVERY = 10


class Specialization(Enum):
    """Work category determining a colonist's output."""
    ENGINEER = "Engineer"
    SCIENTIST = "Scientist"
    FARMER = "Farmer"
    GENERALIST = "Generalist"

    @classmethod
    def parse(cls, value: str) -> Specialization:
        """Map a stored name to a specialization; unknown names are generalists."""
        for member in cls:
            if value.strip().lower() in (member.value.lower(), member.name.lower()):
                return member
        return cls.GENERALIST


@dataclass
class Colonist:
    """A single colonist."""
    name: str
    specialization: Specialization = Specialization.GENERALIST
    experience: int = 0
    health: int = MAX_HEALTH
    assigned: bool = False

    def work(self) -> Outcome:
        """
        Do one turn of work.

        Returns the produced delta, or ColonistUnwell if health < 50.
        Experience is gained before the yield is computed.
        """
        if self.health < WORK_HEALTH_FLOOR:
            return Outcome.failure(ColonistUnwell(self.name, self.health))

        self.experience += 1
        exp = self.experience

        if self.specialization == Specialization.ENGINEER:
            output = ResourceLedger.of(materials=5 + exp // 10)
        elif self.specialization == Specialization.SCIENTIST:
            output = ResourceLedger.of(energy=3 + exp // 15, oxygen=2 + exp // 20)
        elif self.specialization == Specialization.FARMER:
            output = ResourceLedger.of(food=8 + exp // 8)
        else:
            output = ResourceLedger.of(materials=2, food=2)

        return Outcome.ok(output)

    @property
    def can_work(self) -> bool:
        """Whether the production phase should ask this colonist to work."""
        return not self.assigned and self.health > ELIGIBLE_HEALTH

    def rest(self):
        """Recover some health and return from any assignment."""
        self.health = min(MAX_HEALTH, self.health + REST_RECOVERY)
        self.assigned = False

    def take_damage(self, damage: int) -> Outcome:
        """Lose health; reports ColonistDeceased when it reaches zero."""
        self.health = max(0, self.health - damage)
        if self.health == 0:
            return Outcome.failure(ColonistDeceased(self.name))
        return Outcome.ok(self.health)

    def describe(self) -> str:
        return (
            f"{self.name} ({self.specialization.value}) - Health: {self.health} "
            f"Experience: {self.experience} Assigned: {'Yes' if self.assigned else 'No'}"
        )


@dataclass
class ColonistRoster:
    """
    Ordered roster of the colony's colonists.

    Colonists leave the roster only by dying.
    """
    colonists: list[Colonist] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.colonists)

    def __iter__(self) -> Iterator[Colonist]:
        return iter(self.colonists)

    def __getitem__(self, index: int) -> Colonist:
        return self.colonists[index]

    @property
    def is_empty(self) -> bool:
        return len(self.colonists) == 0

    def add(self, colonist: Colonist):
        self.colonists.append(colonist)

    def eligible_workers(self) -> list[Colonist]:
        """Colonists the production phase will call, in roster order."""
        return [c for c in self.colonists if c.can_work]

    def first_with(self, specialization: Specialization) -> Colonist | None:
        for colonist in self.colonists:
            if colonist.specialization == specialization:
                return colonist
        return None

    def assign(self, index: int) -> Colonist:
        """Mark the colonist at a 0-based index as assigned."""
        if not 0 <= index < len(self.colonists):
            raise IndexError(f"No colonist at position {index + 1}")
        colonist = self.colonists[index]
        colonist.assigned = True
        return colonist

    def rest_all(self):
        for colonist in self.colonists:
            colonist.rest()

    def damage(self, index: int, amount: int) -> Outcome:
        """Damage one colonist, removing it from the roster if it dies."""
        colonist = self.colonists[index]
        outcome = colonist.take_damage(amount)
        if not outcome.success:
            self.colonists.remove(colonist)
        return outcome
