"""
Memorama - Memory Matching Game Engine

A small, deterministic engine for the classic pairs game.
The engine provides:
- Uniformly shuffled decks for three difficulties
- A reducer that applies flips, ticks and resets to a game session
- A game loop that ties timers to the session that started them
- A REST/WebSocket surface and a terminal front-end
"""

__version__ = "0.1.0"
