from backend.models.board import Board, Tile
from backend.models.geometry import Rect, StripLayout

__all__ = ["Board", "Rect", "StripLayout", "Tile"]
