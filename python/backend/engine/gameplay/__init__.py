from backend.engine.gameplay.game import GamePlay, SolveTicket

__all__ = ["GamePlay", "SolveTicket"]
