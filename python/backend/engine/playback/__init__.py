from backend.engine.playback.playback import (
    PLAYBACK_INTERVAL_MS,
    PlaybackStatus,
    SolutionPlayback,
)
from backend.engine.playback.ticker import PolledTicker, TickHandle, Ticker

__all__ = [
    "PLAYBACK_INTERVAL_MS",
    "PlaybackStatus",
    "PolledTicker",
    "SolutionPlayback",
    "TickHandle",
    "Ticker",
]
