"""Boots -- run ordered bootstrap scripts before the host application starts.

Scripts are named on the command line after ``--boots`` (or passed
explicitly through ``SessionConfig``), resolved to ``BootsScript`` units and
run one at a time.  The first failure stops the run.
"""

from loguru import logger

from boots.execution.resolver import ResolutionError, resolve_script, resolve_scripts
from boots.execution.sequencer import ExecutionError, OutcomeStream
from boots.execution.session import BootsSession, ConfigurationError, SessionConfig, SessionReusedError, go
from boots.models import Outcome, Resolution, ResolutionReport, ResolutionStatus, SessionStatus, StreamState
from boots.script import BootsScript, FunctionScript, ScriptFailure, boots_script, check_script, is_boots_script

# Silent unless the host opts in (see boots.log.setup_logging).
logger.disable("boots")

__all__ = [
    "BootsScript",
    "BootsSession",
    "ConfigurationError",
    "ExecutionError",
    "FunctionScript",
    "Outcome",
    "OutcomeStream",
    "Resolution",
    "ResolutionError",
    "ResolutionReport",
    "ResolutionStatus",
    "ScriptFailure",
    "SessionConfig",
    "SessionReusedError",
    "SessionStatus",
    "StreamState",
    "boots_script",
    "check_script",
    "go",
    "is_boots_script",
    "resolve_script",
    "resolve_scripts",
]
