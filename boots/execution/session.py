"""Boots session -- the top-level orchestrator.

A ``BootsSession`` drives one bootstrap run:

1. **Gather**: identifiers from the config, or scanned from ``argv``
2. **Resolve**: load and validate every identifier (exhaustive)
3. **Execute**: hand the scripts to an ``OutcomeStream`` (fail-fast)

Lifecycle::

    idle -> resolving -> resolution_failed
                      -> executing -> completed
                                   -> execution_failed
                                   -> cancelled

``cancelled`` is reached when the stream is closed early and the script
running at that moment (if any) succeeded.  If that script fails instead the
session ends in ``execution_failed``.

A session runs once.  ``ok`` starts true and flips to false on the first
error; it never flips back.  Cancelling is not an error.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger
from pydantic import BaseModel, Field

from boots.execution.arguments import DEFAULT_FLAG, scan_flag_arguments
from boots.execution.loader import load_module
from boots.execution.resolver import DEFAULT_EXPORT_NAME, ResolutionError, describe_report, resolve_scripts
from boots.execution.sequencer import ExecutionError, OutcomeStream
from boots.models.enums import SessionStatus

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from boots.execution.resolver import Loader
    from boots.models.outcome import Outcome, ResolutionReport
    from boots.script import BootsScript
    from boots.settings import BootsSettings

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigurationError(ValueError):
    """The session has nothing to run."""


class SessionReusedError(RuntimeError):
    """``run()`` was called on a session that already ran."""

    def __init__(self) -> None:
        super().__init__("A BootsSession runs once; create a new session for a fresh run")


NO_SCRIPTS_MESSAGE = "No script paths were specified."
RESOLUTION_FAILED_MESSAGE = (
    "At least one error occurred while attempting to load the boots script modules. "
    "Use BootsSession.log_errors() to view more information."
)

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class SessionConfig(BaseModel):
    """Explicit configuration for one session.

    When ``identifiers`` is ``None`` they are scanned from ``argv`` (or
    ``sys.argv`` when ``argv`` is also ``None``) using ``flag``.
    """

    flag: str = DEFAULT_FLAG
    identifiers: list[str] | None = None
    argv: list[str] | None = None
    base_dir: Path = Field(default_factory=Path.cwd)
    export_name: str = DEFAULT_EXPORT_NAME

    @classmethod
    def from_settings(cls, settings: BootsSettings, **overrides: Any) -> SessionConfig:
        values: dict[str, Any] = {
            "flag": settings.flag,
            "base_dir": settings.base_dir,
            "export_name": settings.export_name,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def gather_identifiers(self) -> list[str]:
        if self.identifiers is not None:
            return list(self.identifiers)
        argv = self.argv if self.argv is not None else sys.argv[1:]
        return scan_flag_arguments(argv, self.flag)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class BootsSession:
    """Resolve and run an ordered list of boots scripts, once."""

    def __init__(self, config: SessionConfig | None = None, *, loader: Loader = load_module) -> None:
        if config is None:
            from boots.settings import get_settings

            config = SessionConfig.from_settings(get_settings())
        self.config = config
        self._loader = loader

        self._identifiers: list[str] = []
        self._scripts: list[BootsScript] = []
        self._errors: list[str] = []
        self._report: ResolutionReport | None = None
        self._status = SessionStatus.IDLE
        self._ok = True

    # -- Query -----------------------------------------------------------------

    @property
    def ok(self) -> bool:
        """``True`` until any error has been recorded."""
        return self._ok

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def identifiers(self) -> list[str]:
        return list(self._identifiers)

    @property
    def scripts(self) -> list[BootsScript]:
        """Validated scripts; empty unless every identifier resolved."""
        return list(self._scripts)

    @property
    def report(self) -> ResolutionReport | None:
        return self._report

    @property
    def errors(self) -> list[str]:
        """Diagnostics recorded while gathering and resolving scripts."""
        return list(self._errors)

    def log_errors(self) -> None:
        for error in self._errors:
            logger.error("Boots Error: {}", error)

    # -- Run -------------------------------------------------------------------

    def run(self) -> OutcomeStream:
        """Resolve the configured scripts and return their outcome stream.

        Gathering and resolution happen immediately, so ``status``, ``ok`` and
        ``errors`` are up to date when this returns.  No script runs until the
        stream is iterated.  Configuration and resolution failures surface as
        a stream that raises on its first pull.
        """
        if self._status != SessionStatus.IDLE:
            raise SessionReusedError

        self._status = SessionStatus.RESOLVING
        self._identifiers = self.config.gather_identifiers()
        if not self._identifiers:
            self._record_error(NO_SCRIPTS_MESSAGE)
            self._status = SessionStatus.RESOLUTION_FAILED
            return OutcomeStream.failing(ConfigurationError(f"Boots Error: {NO_SCRIPTS_MESSAGE}"))

        logger.info("Resolving {} boots scripts", len(self._identifiers))
        report = resolve_scripts(
            self._identifiers,
            base_dir=self.config.base_dir,
            export_name=self.config.export_name,
            loader=self._loader,
        )
        self._report = report
        if not report.ok:
            for line in describe_report(report):
                self._record_error(line)
            self._status = SessionStatus.RESOLUTION_FAILED
            return OutcomeStream.failing(ResolutionError(report, f"Boots Error: {RESOLUTION_FAILED_MESSAGE}"))

        self._scripts = report.scripts
        self._status = SessionStatus.EXECUTING
        return OutcomeStream(
            self._scripts,
            on_failure=self._on_execution_failed,
            on_complete=self._on_execution_completed,
            on_cancel=self._on_execution_cancelled,
        )

    # -- Internal --------------------------------------------------------------

    def _record_error(self, message: str) -> None:
        self._ok = False
        self._errors.append(message)

    def _on_execution_failed(self, error: ExecutionError) -> None:
        self._ok = False
        self._status = SessionStatus.EXECUTION_FAILED

    def _on_execution_completed(self) -> None:
        self._status = SessionStatus.COMPLETED

    def _on_execution_cancelled(self) -> None:
        self._status = SessionStatus.CANCELLED


# ---------------------------------------------------------------------------
# Startup helper
# ---------------------------------------------------------------------------


async def go(
    config: SessionConfig | None = None,
    *,
    loader: Loader = load_module,
    on_outcome: Callable[[Outcome], Awaitable[None]] | None = None,
    raise_on_failure: bool = False,
) -> BootsSession:
    """Run a full boots session at program startup and log its progress.

    Returns the session so the caller can inspect ``ok``, ``status`` and
    ``errors``.  With ``raise_on_failure`` the terminal error is re-raised
    after it has been logged.
    """
    session = BootsSession(config, loader=loader)

    async def _report(outcome: Outcome) -> None:
        logger.info("Script {} was successful", outcome.script_name)
        if on_outcome is not None:
            await on_outcome(outcome)

    try:
        async with session.run() as stream:
            await stream.collect(_report)
    except (ConfigurationError, ResolutionError, ExecutionError) as exc:
        logger.error("{}", exc)
        session.log_errors()
        if raise_on_failure:
            raise

    if session.ok:
        logger.info("Boots scripts were run successfully")
    else:
        logger.error("Boots scripts were unsuccessful")
    return session
