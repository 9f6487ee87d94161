"""
Archetypes - The four card factions and their stat coefficients.

An archetype decides how a card's cost is split into attack and health.
Taunt units ignore the archetype split and use TAUNT_COEFFICIENTS.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..errors import UnknownArchetypeError


@dataclass(frozen=True)
class Archetype:
    """A card faction."""
    key: str
    name: str
    icon: str
    description: str
    attack_coefficient: float = 1.0
    health_coefficient: float = 1.0


# (attack, health) multipliers applied to cost for taunt units
TAUNT_COEFFICIENTS = (0.6, 1.4)


ARCHETYPES: dict[str, Archetype] = {
    "orc": Archetype(
        key="orc",
        name="Orc",
        icon="🪓",
        description="Aggressive warriors with high attack",
        attack_coefficient=1.2,
        health_coefficient=0.8,
    ),
    "undead": Archetype(
        key="undead",
        name="Undead",
        icon="💀",
        description="Masters of summoning and board control",
    ),
    "human": Archetype(
        key="human",
        name="Human",
        icon="⚔️",
        description="Versatile healers and magic users",
        attack_coefficient=0.9,
        health_coefficient=1.1,
    ),
    "minotaur": Archetype(
        key="minotaur",
        name="Minotaur",
        icon="🐂",
        description="Tanky warriors with high durability",
        attack_coefficient=0.8,
        health_coefficient=1.3,
    ),
}


def is_archetype(key: str) -> bool:
    return key in ARCHETYPES


def get_archetype(key: str) -> Archetype:
    """Look up an archetype by key, raising UnknownArchetypeError if missing."""
    try:
        return ARCHETYPES[key]
    except KeyError:
        raise UnknownArchetypeError(key) from None
