"""
Bot Personalities - Configurable play styles.

Personalities adjust:
- Placement weights (which columns the bot likes)
- Card valuation (which cards it spends mana on first)
- Randomness (chance of shuffling its play order)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import random
from typing import Any

from .evaluator import PlacementWeights


@dataclass
class Personality:
    """A bot personality that defines play style."""
    name: str
    description: str = ""

    weights: PlacementWeights = field(default_factory=PlacementWeights)

    # Card value = cost * (attack * attack_bias + health * health_bias)
    attack_bias: float = 1.0
    health_bias: float = 1.0

    # Probability of playing affordable cards in random order
    randomness: float = 0.0

    metadata: dict[str, Any] = field(default_factory=dict)


# ============================================================================
# Predefined Personalities
# ============================================================================

BALANCED = Personality(
    name="Balanced",
    description="Meets enemy columns head on, favours big cards",
)


AGGRESSIVE = Personality(
    name="Aggressive",
    description="Chases enemy lanes and spends on attack first",
    weights=PlacementWeights(
        proximity_base=12.0,
        enemy_in_column=7.0,
        ally_in_column=1.0,
    ),
    attack_bias=1.5,
    health_bias=0.75,
)


DEFENSIVE = Personality(
    name="Defensive",
    description="Stacks lanes with allies and values toughness",
    weights=PlacementWeights(
        enemy_in_column=6.0,
        ally_in_column=4.0,
        heavy_ally_penalty=1.0,
    ),
    attack_bias=0.75,
    health_bias=1.5,
)


CHAOTIC = Personality(
    name="Chaotic",
    description="Unpredictable, often plays cards in random order",
    weights=PlacementWeights(jitter=10.0),
    randomness=0.5,
)


# All predefined personalities
PERSONALITIES: dict[str, Personality] = {
    "balanced": BALANCED,
    "aggressive": AGGRESSIVE,
    "defensive": DEFENSIVE,
    "chaotic": CHAOTIC,
}


def create_random_personality(
    rng: random.Random,
    base: Personality | None = None,
    variance: float = 0.3,
) -> Personality:
    """
    Jitter a base personality's weights and card biases.

    Each numeric weight moves by up to `variance` of its own value; the
    heavy-attack threshold is a rule of thumb and is left alone.
    """
    base = base or BALANCED

    def vary(value: float) -> float:
        return max(0.0, value * (1 + variance * rng.uniform(-1, 1)))

    w = base.weights
    return Personality(
        name="Random",
        description=f"{base.name} with jittered weights",
        weights=PlacementWeights(
            proximity_base=vary(w.proximity_base),
            enemy_in_column=vary(w.enemy_in_column),
            ally_in_column=vary(w.ally_in_column),
            heavy_attack_threshold=w.heavy_attack_threshold,
            heavy_ally_penalty=vary(w.heavy_ally_penalty),
            jitter=vary(w.jitter),
        ),
        attack_bias=vary(base.attack_bias),
        health_bias=vary(base.health_bias),
        randomness=min(1.0, max(0.0, base.randomness + variance * rng.uniform(-0.5, 0.5))),
        metadata={"base": base.name, "variance": variance},
    )


def resolve_personality(name: str | None, rng: random.Random) -> Personality | None:
    """
    Look up a personality by name.

    "random" builds a fresh one from `rng`; unknown names give None.
    """
    key = (name or "balanced").lower()
    if key == "random":
        return create_random_personality(rng)
    return PERSONALITIES.get(key)
