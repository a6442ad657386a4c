"""Shared enumerations used across boots."""

from __future__ import annotations

from enum import StrEnum

# -- Session -----------------------------------------------------------------


class SessionStatus(StrEnum):
    """Lifecycle of a single ``BootsSession``.

    ``resolution_failed``, ``completed``, ``execution_failed`` and ``cancelled``
    are terminal.
    """

    IDLE = "idle"
    RESOLVING = "resolving"
    RESOLUTION_FAILED = "resolution_failed"
    EXECUTING = "executing"
    COMPLETED = "completed"
    EXECUTION_FAILED = "execution_failed"
    CANCELLED = "cancelled"


# -- Resolution --------------------------------------------------------------


class ResolutionStatus(StrEnum):
    RESOLVED = "resolved"
    UNRESOLVABLE = "unresolvable"
    WRONG_SHAPE = "wrong_shape"


# -- Execution ---------------------------------------------------------------


class StreamState(StrEnum):
    """State of an ``OutcomeStream``."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
