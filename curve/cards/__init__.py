"""
Cards - Archetypes, card/deck generation and game setup.

This module contains:
- The four archetypes and their stat coefficients
- Card, deck and preview deck generation
- Initial game state creation
"""

from .archetypes import ARCHETYPES, Archetype, get_archetype, is_archetype
from .factory import generate_card, generate_deck, generate_preview_deck
from .setup import initialize_game

__all__ = [
    "ARCHETYPES",
    "Archetype",
    "get_archetype",
    "is_archetype",
    "generate_card",
    "generate_deck",
    "generate_preview_deck",
    "initialize_game",
]
