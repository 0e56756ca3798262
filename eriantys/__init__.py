"""
Eriantys - Rules engine for the islands, students, towers and professors game.

A deterministic, rules-enforcing engine for 2 and 3 player games:
- Authoritative game state
- Legality checks on every move
- Atomic action application
- In-memory sessions behind a REST API
"""

__version__ = "0.1.0"
