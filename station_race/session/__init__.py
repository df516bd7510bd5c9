"""
Session Module - Holds game state on behalf of front ends.

A session represents one table:
- Created when a front end starts a game
- Holds the current state and its history
- Feeds actions to the engine one at a time
- Destroyed when the front end ends it

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session

__all__ = [
    "SessionManager",
    "Session",
]
