"""
Station Race - Turn-based secret station guessing game

Players register, take turns riding a train along a line of numbered
stations, and try to be the first to get off exactly at the secret station.
The package provides:
- The pure game state machine (engine_core)
- In-memory sessions with history and undo
- Keyboard bindings for front ends
- A REST API and CLI
"""

__version__ = "0.1.0"
