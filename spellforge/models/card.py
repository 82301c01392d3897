from dataclasses import dataclass
from enum import Enum


class CardKind(str, Enum):
    """Catalog category of an entity."""

    UNIT = "Unit"
    CREATURE = "Creature"
    BUILDING = "Building"
    SPELL = "Spell"
    TITAN = "Titan"
    SPELLCASTER = "Spellcaster"


@dataclass(frozen=True, slots=True)
class CardRef:
    """
    A reference to a catalog entity.

    The codec and rules engine only look at ``id`` and ``kind``. The
    remaining fields are carried through from the catalog so validation
    and the host application can use them.

    Attributes:
        id: Globally unique entity ID (e.g. "u_fire_imp")
        kind: Catalog category
        name: Display name
        rank: Rank label ("I" to "V") for incantations, if known
    """

    id: str
    kind: CardKind = CardKind.UNIT
    name: str = ""
    rank: str | None = None

    @property
    def is_titan(self) -> bool:
        return self.kind == CardKind.TITAN

    @property
    def is_spellcaster(self) -> bool:
        return self.kind == CardKind.SPELLCASTER

    @property
    def is_creature(self) -> bool:
        """Creatures, plus plain units whose catalog entry gives no finer category."""
        return self.kind in (CardKind.CREATURE, CardKind.UNIT)

    @property
    def is_slot_card(self) -> bool:
        """True for anything that can sit in a deck slot (not a spellcaster)."""
        return not self.is_spellcaster
