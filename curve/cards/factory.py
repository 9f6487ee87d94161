"""
Card Factory - Generates unit cards and decks from stat formulas.

Stats are derived from cost:
    attack = max(1, floor(cost * attack_coefficient + jitter))
    health = max(1, floor(cost * health_coefficient + jitter))
with an independent jitter in [0, 2) for each stat.

All randomness comes from the rng argument. Passing a seeded
random.Random makes decks reproducible.
"""

from __future__ import annotations
import math
import random

from ..engine_core.state import Card, DECK_SIZE
from .archetypes import TAUNT_COEFFICIENTS, get_archetype

# Fraction of a deck that gets taunt
TAUNT_RATIO = 0.2

JITTER = 2.0

PREVIEW_COST_CURVE = (1, 2, 2, 3, 3, 3, 4, 4, 4, 5, 5, 6, 6, 7, 8)

TAUNT_DESCRIPTION = "Has Taunt: Enemies must attack this unit first."
BASIC_DESCRIPTION = "Basic unit with no special abilities"


def _stat(cost: int, coefficient: float, jitter: float) -> int:
    return max(1, math.floor(cost * coefficient + jitter))


def generate_card(
    card_id: str,
    archetype: str,
    has_taunt: bool = False,
    rng: random.Random | None = None,
) -> Card:
    """
    Generate a single card.

    Cost is uniform in [1, 10]. Taunt units trade attack for health
    regardless of archetype.
    """
    rng = rng or random.Random()
    arch = get_archetype(archetype)

    cost = rng.randint(1, 10)
    if has_taunt:
        attack_coef, health_coef = TAUNT_COEFFICIENTS
    else:
        attack_coef, health_coef = arch.attack_coefficient, arch.health_coefficient

    attack = _stat(cost, attack_coef, rng.random() * JITTER)
    health = _stat(cost, health_coef, rng.random() * JITTER)

    return Card(
        id=card_id,
        name=f"{arch.name} Guardian" if has_taunt else f"{arch.name} Warrior",
        archetype=arch.key,
        cost=cost,
        attack=attack,
        health=health,
        max_health=health,
        has_taunt=has_taunt,
        description=TAUNT_DESCRIPTION if has_taunt else BASIC_DESCRIPTION,
    )


def generate_deck(
    archetype: str,
    rng: random.Random | None = None,
    player_index: int = 0,
) -> list[Card]:
    """
    Generate a shuffled deck of DECK_SIZE cards.

    Exactly floor(DECK_SIZE * TAUNT_RATIO) cards get taunt, at distinct
    positions sampled without replacement. The deck is then shuffled.
    Card IDs are unique per player.
    """
    rng = rng or random.Random()
    get_archetype(archetype)

    num_taunt = math.floor(DECK_SIZE * TAUNT_RATIO)
    taunt_indices = set(rng.sample(range(DECK_SIZE), num_taunt))

    deck = [
        generate_card(
            f"p{player_index}_common_{i}",
            archetype,
            has_taunt=i in taunt_indices,
            rng=rng,
        )
        for i in range(DECK_SIZE)
    ]

    # Fisher-Yates
    rng.shuffle(deck)
    return deck


def generate_preview_deck(archetype: str) -> list[Card]:
    """
    Deterministic deck for the deck selection screen.

    Fixed cost curve, no taunt and no jitter. Uses no randomness at all,
    so showing a preview never disturbs gameplay RNG.
    """
    arch = get_archetype(archetype)
    return [
        Card(
            id=f"preview_{arch.key}_common_{i}",
            name=f"{arch.name} Warrior",
            archetype=arch.key,
            cost=cost,
            attack=_stat(cost, arch.attack_coefficient, 0),
            health=_stat(cost, arch.health_coefficient, 0),
            max_health=_stat(cost, arch.health_coefficient, 0),
            has_taunt=False,
            description=BASIC_DESCRIPTION,
        )
        for i, cost in enumerate(PREVIEW_COST_CURVE)
    ]
