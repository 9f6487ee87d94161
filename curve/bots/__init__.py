"""
Bots module - AI opponent implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- PlacementEvaluator: Scores spawn columns
- GreedyBot: The default AI opponent
- Personality: Configurable play styles
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy
from .evaluator import PlacementEvaluator, PlacementWeights, find_best_position
from .personality import Personality, PERSONALITIES, resolve_personality
from .greedy_bot import GreedyBot

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "PlacementEvaluator",
    "PlacementWeights",
    "find_best_position",
    "Personality",
    "PERSONALITIES",
    "resolve_personality",
    "GreedyBot",
]
