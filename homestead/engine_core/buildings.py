"""
Buildings - The fixed catalog of producing structures.

Every building kind produces a single resource type at a base rate
that scales linearly with level. Kinds are a closed set; their stats
live in BUILDING_CATALOG rather than in subclasses.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .resources import ResourceLedger, ENERGY, FOOD, MATERIALS, OXYGEN

UPGRADE_MATERIALS_BONUS = 5


class BuildingKind(Enum):
    """Kinds of buildings the colony can construct."""
    SOLAR_PANEL = "solar_panel"
    GREENHOUSE = "greenhouse"
    OXYGEN_GENERATOR = "oxygen_generator"
    MATERIAL_FACTORY = "material_factory"


@dataclass(frozen=True)
class BuildingSpec:
    """Catalog entry: display name, build cost and output per level."""
    kind: BuildingKind
    name: str
    cost: dict[str, int]
    resource: str
    base_rate: int
    menu_number: int


BUILDING_CATALOG: dict[BuildingKind, BuildingSpec] = {
    BuildingKind.SOLAR_PANEL: BuildingSpec(
        kind=BuildingKind.SOLAR_PANEL,
        name="Solar Panel",
        cost={MATERIALS: 20},
        resource=ENERGY,
        base_rate=15,
        menu_number=1,
    ),
    BuildingKind.GREENHOUSE: BuildingSpec(
        kind=BuildingKind.GREENHOUSE,
        name="Greenhouse",
        cost={MATERIALS: 30, ENERGY: 10},
        resource=FOOD,
        base_rate=20,
        menu_number=2,
    ),
    BuildingKind.OXYGEN_GENERATOR: BuildingSpec(
        kind=BuildingKind.OXYGEN_GENERATOR,
        name="Oxygen Generator",
        cost={MATERIALS: 25, ENERGY: 15},
        resource=OXYGEN,
        base_rate=10,
        menu_number=3,
    ),
    BuildingKind.MATERIAL_FACTORY: BuildingSpec(
        kind=BuildingKind.MATERIAL_FACTORY,
        name="Material Factory",
        cost={MATERIALS: 40, ENERGY: 20},
        resource=MATERIALS,
        base_rate=8,
        menu_number=4,
    ),
}


@dataclass
class Building:
    """
    A building instance in the colony.

    production_info is descriptive bookkeeping only; produce() reads
    the catalog base rate, never this counter.
    """
    kind: BuildingKind
    level: int = 1
    operational: bool = True
    production_info: ResourceLedger = field(default_factory=ResourceLedger.empty)

    def __post_init__(self):
        if self.level < 1:
            raise ValueError(f"Building level must be >= 1, got {self.level}")
        if self.production_info.is_empty():
            self.production_info[self.spec.resource] = self.spec.base_rate

    @property
    def spec(self) -> BuildingSpec:
        return BUILDING_CATALOG[self.kind]

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def cost(self) -> ResourceLedger:
        return ResourceLedger(self.spec.cost)

    def produce(self) -> ResourceLedger:
        """Output for one production phase."""
        if not self.operational:
            return ResourceLedger.empty()
        return ResourceLedger({self.spec.resource: self.spec.base_rate * self.level})

    def describe(self) -> str:
        output = self.spec.base_rate * self.level
        return f"{self.name} Level {self.level} produces {output} {self.spec.resource}"

    def upgrade(self) -> None:
        """Raise the level by one.

        Every upgrade also credits the materials bookkeeping counter,
        whatever the building actually produces.
        """
        self.level += 1
        self.production_info[MATERIALS] = (
            self.production_info.get(MATERIALS) + UPGRADE_MATERIALS_BONUS
        )


def resolve_building_kind(value: BuildingKind | str | int) -> BuildingKind:
    """
    Look up a building kind by enum, enum value, display name or menu number.

    Raises ValueError for anything outside the catalog.
    """
    if isinstance(value, BuildingKind):
        return value
    if isinstance(value, int):
        for spec in BUILDING_CATALOG.values():
            if spec.menu_number == value:
                return spec.kind
        raise ValueError(f"No building with menu number {value}")

    key = value.strip()
    for spec in BUILDING_CATALOG.values():
        if key in (spec.kind.value, spec.name, spec.kind.name):
            return spec.kind
    raise ValueError(f"Unknown building: {value!r}")


def create_building(
    kind: BuildingKind | str | int,
    level: int = 1,
    operational: bool = True,
) -> Building:
    """
    Factory used by setup, the build action and save loading.

    A building created above level 1 carries the same bookkeeping it
    would have after the equivalent number of upgrades.
    """
    if level < 1:
        raise ValueError(f"Building level must be >= 1, got {level}")
    building = Building(kind=resolve_building_kind(kind), operational=operational)
    for _ in range(level - 1):
        building.upgrade()
    return building
