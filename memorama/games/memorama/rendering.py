"""
Symbol rendering for the display surface.

The same game is shown either with inline glyphs or with card images.
Both variants share the engine; only SymbolRenderer knows the difference.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from ...engine_core.state import Card
from .symbols import CARD_BACK_GLYPH, GLYPHS


class AssetKind(Enum):
    """How a symbol is drawn."""
    GLYPH = "glyph"
    IMAGE = "image"


@dataclass(frozen=True)
class RenderedFace:
    """What the display shows for one side of a card."""
    kind: AssetKind
    value: str  # the glyph itself, or an image URL


@dataclass(frozen=True)
class SymbolRenderer:
    """
    Resolves symbol identifiers to glyphs or image URLs.

    Usage:
        renderer = SymbolRenderer(AssetKind.IMAGE, image_base_url="/static/cards")
        renderer.face_for(card)   # RenderedFace(kind=IMAGE, value="/static/cards/back.png")
    """
    asset_kind: AssetKind = AssetKind.GLYPH
    image_base_url: str = "/static/cards"

    def render_symbol(self, symbol: str) -> RenderedFace:
        if self.asset_kind is AssetKind.IMAGE:
            return RenderedFace(self.asset_kind, self._image_url(symbol))
        return RenderedFace(self.asset_kind, GLYPHS.get(symbol, symbol))

    def render_back(self) -> RenderedFace:
        if self.asset_kind is AssetKind.IMAGE:
            return RenderedFace(self.asset_kind, self._image_url("back"))
        return RenderedFace(self.asset_kind, CARD_BACK_GLYPH)

    def face_for(self, card: Card) -> RenderedFace:
        """The visible side of a card: its symbol once turned, else the back."""
        if card.is_face_up or card.is_matched:
            return self.render_symbol(card.symbol)
        return self.render_back()

    def _image_url(self, name: str) -> str:
        return f"{self.image_base_url.rstrip('/')}/{name}.png"


def format_elapsed(seconds: int) -> str:
    """Format seconds as MM:SS. Minutes keep growing past 99."""
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"
