"""
Curve - Two-player lane battle engine

A deterministic, seedable rules engine for a turn-based card battle on a
5 by 7 grid. The engine provides:
- Immutable game state and a pure reducer
- Battle, draw and advance phase resolution
- Legal action generation
- Bot policies for the AI opponent
- Sessions and a REST API for game UIs
"""

__version__ = "0.1.0"
