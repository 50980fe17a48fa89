"""NBA Career and Matchup Simulator.

A deterministic, rule-based engine that builds a custom player from real
historical player attributes and projects a season-by-season career (stats,
awards, Hall-of-Fame decision, advanced analytics), plus a seeded matchup
and tournament resolver for custom players and drafted teams.

Example:
    >>> from nba_sim.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.roster_path)
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "NBA Sim Team"

# Public API exports
from nba_sim.config import Settings, get_settings

__all__ = [
    "Settings",
    "__author__",
    "__version__",
    "get_settings",
]
