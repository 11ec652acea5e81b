"""
Games module - Game-specific content.

Each game has its own subpackage with:
- Symbol sets and board layout per difficulty
- Rendering of symbols for the display surface
"""
