from backend.engine.gameplay.game import DropOutcome, GamePlay, TileMove

__all__ = ["DropOutcome", "GamePlay", "TileMove"]
