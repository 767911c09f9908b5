"""
Event Resolver - One-shot world events rolled once per event phase.

Selection:
1. Draw one roll in [1, 100]
2. Scan events in registration order
3. The FIRST event whose probability >= roll fires; scanning stops
4. No match means a peaceful turn

Application is best-effort: an effect that would push a resource below
zero is rejected as a whole, reported, and the phase carries on.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import random

from .colonists import ColonistRoster, Specialization
from .resources import ResourceLedger, ENERGY

logger = logging.getLogger(__name__)

ROLL_MIN = 1
ROLL_MAX = 100
STORM_REPAIR_ENERGY = 10


class EventKind(Enum):
    """Kinds of world events."""
    SOLAR_STORM = "solar_storm"
    TRADE_SHIP = "trade_ship"
    METEOR_SHOWER = "meteor_shower"


@dataclass(frozen=True)
class WorldEvent:
    """A world event with a fixed effect and probability weight."""
    kind: EventKind
    name: str
    description: str
    effect: dict[str, int]
    probability: int

    def __post_init__(self):
        if not 0 <= self.probability <= 100:
            raise ValueError(
                f"Event probability must be in [0, 100], got {self.probability}"
            )

    @property
    def delta(self) -> ResourceLedger:
        return ResourceLedger(self.effect)


def default_events() -> list[WorldEvent]:
    """The standard events, in their significant registration order."""
    return [
        WorldEvent(
            kind=EventKind.SOLAR_STORM,
            name="Solar Storm",
            description="A solar storm damages energy systems!",
            effect={ENERGY: -30},
            probability=15,
        ),
        WorldEvent(
            kind=EventKind.TRADE_SHIP,
            name="Trade Ship Arrival",
            description="A trade ship offers resources!",
            effect={"materials": 20, "food": 15},
            probability=25,
        ),
        WorldEvent(
            kind=EventKind.METEOR_SHOWER,
            name="Meteor Shower",
            description="Meteors provide rare materials but damage buildings!",
            effect={"materials": 30, "oxygen": -10},
            probability=10,
        ),
    ]


@dataclass
class EventOutcome:
    """What happened during one event phase."""
    roll: int
    event: WorldEvent | None = None
    effect_applied: bool = False
    messages: list[str] = field(default_factory=list)
    failure: str | None = None

    @property
    def fired(self) -> bool:
        return self.event is not None


class EventResolver:
    """
    Rolls and applies world events.

    The random source is owned by the resolver and supplied by the caller,
    so tests can inject a seeded random.Random.

    Usage:
        resolver = EventResolver(default_events(), rng=random.Random(42))
        outcome = resolver.resolve(colony.ledger, colony.roster)
    """

    def __init__(
        self,
        events: list[WorldEvent] | None = None,
        rng: random.Random | None = None,
    ):
        self.events: list[WorldEvent] = list(events) if events is not None else default_events()
        self.rng = rng if rng is not None else random.Random()

    def roll(self) -> int:
        return self.rng.randint(ROLL_MIN, ROLL_MAX)

    def select(self, roll: int) -> WorldEvent | None:
        """First registered event whose weight covers the roll."""
        for event in self.events:
            if event.probability >= roll:
                return event
        return None

    def resolve(
        self,
        ledger: ResourceLedger,
        roster: ColonistRoster,
        roll: int | None = None,
    ) -> EventOutcome:
        """Roll (unless given), select and apply at most one event."""
        if roll is None:
            roll = self.roll()

        event = self.select(roll)
        outcome = EventOutcome(roll=roll, event=event)
        if event is None:
            logger.info("Event roll %d: peaceful turn", roll)
            outcome.messages.append("A peaceful turn. No events occurred.")
            return outcome

        logger.info("Event roll %d: %s", roll, event.name)
        outcome.messages.append(f"Event: {event.name}")
        outcome.messages.append(event.description)

        applied = ledger.apply(event.delta)
        if applied.success:
            outcome.effect_applied = True
        else:
            logger.warning("Event %s partially failed: %s", event.name, applied.error)
            outcome.failure = str(applied.error)
            outcome.messages.append(f"Event partially failed: {applied.error}")

        if event.kind == EventKind.SOLAR_STORM:
            self._storm_repairs(ledger, roster, outcome)

        return outcome

    def _storm_repairs(
        self,
        ledger: ResourceLedger,
        roster: ColonistRoster,
        outcome: EventOutcome,
    ):
        engineer = roster.first_with(Specialization.ENGINEER)
        if engineer is None:
            return
        ledger[ENERGY] = ledger.get(ENERGY) + STORM_REPAIR_ENERGY
        outcome.messages.append(f"{engineer.name} quickly repairs some damage!")
