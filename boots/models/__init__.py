"""Data models for boots."""

from boots.models.enums import ResolutionStatus, SessionStatus, StreamState
from boots.models.outcome import Outcome, Resolution, ResolutionReport

__all__ = [
    "Outcome",
    "Resolution",
    "ResolutionReport",
    "ResolutionStatus",
    "SessionStatus",
    "StreamState",
]
