from backend.models.board import GOAL, Direction, PuzzleState

__all__ = ["GOAL", "Direction", "PuzzleState"]
