"""Script resolver -- turns identifiers into validated ``BootsScript`` units.

Resolution order for one identifier:

1. Load the identifier as given (absolute path, cwd-relative path or dotted
   module name).
2. If that raises, join it onto ``base_dir`` and load once more.
3. Take the module's export (``export_name``, ``script`` by default) and check
   it against the ``BootsScript`` contract.

Resolution is exhaustive: every identifier is processed and every problem is
collected, so the caller can report all bad identifiers at once.  A module
body that calls ``sys.exit()`` counts as unresolvable.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from boots.execution.loader import load_module
from boots.models.enums import ResolutionStatus
from boots.models.outcome import Resolution, ResolutionReport
from boots.script import ScriptShapeError, check_script

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    Loader = Callable[[str], object]

DEFAULT_EXPORT_NAME = "script"

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ResolutionError(LookupError):
    """One or more identifiers could not be turned into a script."""

    def __init__(self, report: ResolutionReport, message: str | None = None) -> None:
        if message is None:
            message = (
                f"Could not load {len(report.unresolvable) + len(report.wrong_shape)} "
                f"of {len(report.resolutions)} boots scripts"
            )
        super().__init__(message)
        self.report = report


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve_script(
    identifier: str,
    *,
    base_dir: Path | str,
    export_name: str = DEFAULT_EXPORT_NAME,
    loader: Loader = load_module,
) -> Resolution:
    """Resolve a single identifier into a typed ``Resolution``.

    Never raises for a bad identifier; the failure is described by the
    returned ``Resolution``.
    """
    try:
        module = _load(identifier, Path(base_dir), loader)
    except (Exception, SystemExit) as exc:
        logger.opt(exception=exc).debug("Could not resolve boots script {!r}", identifier)
        return Resolution(
            identifier=identifier,
            status=ResolutionStatus.UNRESOLVABLE,
            reason=f"{type(exc).__name__}: {exc}",
        )

    if not hasattr(module, export_name):
        return Resolution(
            identifier=identifier,
            status=ResolutionStatus.WRONG_SHAPE,
            reason=f"no {export_name!r} export",
        )

    try:
        script = check_script(getattr(module, export_name))
    except ScriptShapeError as exc:
        return Resolution(
            identifier=identifier,
            status=ResolutionStatus.WRONG_SHAPE,
            reason=str(exc),
        )

    logger.debug("Resolved boots script {!r} -> {}", identifier, script.name)
    return Resolution(identifier=identifier, status=ResolutionStatus.RESOLVED, script=script)


def resolve_scripts(
    identifiers: Sequence[str],
    *,
    base_dir: Path | str,
    export_name: str = DEFAULT_EXPORT_NAME,
    loader: Loader = load_module,
) -> ResolutionReport:
    """Resolve every identifier, in order, without stopping at failures."""
    report = ResolutionReport()
    for identifier in identifiers:
        resolution = resolve_script(
            identifier,
            base_dir=base_dir,
            export_name=export_name,
            loader=loader,
        )
        if not resolution.ok:
            logger.warning("Boots script {!r} is {}: {}", identifier, resolution.status, resolution.reason)
        report.resolutions.append(resolution)
    return report


def describe_report(report: ResolutionReport) -> list[str]:
    """Format one diagnostic line per non-empty failure list."""
    lines: list[str] = []
    if report.unresolvable:
        lines.append(f"Could not resolve the following paths: {report.unresolvable}")
    if report.wrong_shape:
        lines.append(f"The following modules had no export implementing BootsScript: {report.wrong_shape}")
    return lines


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load(identifier: str, base_dir: Path, loader: Loader) -> object:
    """Load directly, falling back once to ``base_dir / identifier``."""
    try:
        return loader(identifier)
    except (Exception, SystemExit):
        logger.debug("Direct load of {!r} failed, retrying under {}", identifier, base_dir)
    return loader(str(base_dir / identifier))
