"""Outcome and resolution models.

``Outcome`` is the only value a script hands back to boots, so it is the one
interop contract script authors must satisfy besides ``BootsScript`` itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, model_validator

from boots.models.enums import ResolutionStatus

if TYPE_CHECKING:
    from boots.script import BootsScript


class Outcome(BaseModel):
    """Result of running one script.

    ``error`` is present iff ``success`` is false.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    script_name: str
    error: Any = None

    @model_validator(mode="after")
    def _error_iff_failed(self) -> Outcome:
        if self.success and self.error is not None:
            msg = "a successful outcome must not carry an error"
            raise ValueError(msg)
        if not self.success and self.error is None:
            msg = "a failed outcome must carry an error"
            raise ValueError(msg)
        return self

    @classmethod
    def ok(cls, script_name: str) -> Outcome:
        return cls(success=True, script_name=script_name)

    @classmethod
    def failed(cls, script_name: str, error: Any) -> Outcome:
        return cls(success=False, script_name=script_name, error=error)


# -- Resolution --------------------------------------------------------------


@dataclass
class Resolution:
    """Typed result of resolving a single identifier."""

    identifier: str
    status: ResolutionStatus
    script: BootsScript | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == ResolutionStatus.RESOLVED


@dataclass
class ResolutionReport:
    """Aggregated result of resolving every identifier of a run.

    All lists keep the order of the input identifiers.
    """

    resolutions: list[Resolution] = field(default_factory=list)

    @property
    def scripts(self) -> list[BootsScript]:
        return [r.script for r in self.resolutions if r.script is not None]

    @property
    def unresolvable(self) -> list[str]:
        return [r.identifier for r in self.resolutions if r.status == ResolutionStatus.UNRESOLVABLE]

    @property
    def wrong_shape(self) -> list[str]:
        return [r.identifier for r in self.resolutions if r.status == ResolutionStatus.WRONG_SHAPE]

    @property
    def ok(self) -> bool:
        return not self.unresolvable and not self.wrong_shape
