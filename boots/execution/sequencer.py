"""Fail-fast sequencer -- runs scripts one at a time as an async stream.

``OutcomeStream`` is a lazy async iterator: nothing runs until the first
``__anext__``.  Each pull starts exactly one script, awaits it, and yields its
successful ``Outcome``.  The first failure ends the stream with a single
``ExecutionError``; later scripts never start.

Usage::

    async with OutcomeStream(scripts) as stream:
        async for outcome in stream:
            ...

Leaving the ``async with`` block (or calling ``aclose()``) cancels the
stream: scripts not yet started are never run.  Scripts that already ran are
not undone, and a script that was running when the stream was cancelled still
ends it with ``ExecutionError`` if it fails.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Self

from loguru import logger

from boots.models.enums import StreamState
from boots.models.outcome import Outcome
from boots.script import ScriptFailure

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence
    from types import TracebackType

    from boots.script import BootsScript

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ExecutionError(RuntimeError):
    """A script failed; the rest of the sequence was not run."""

    def __init__(self, script_name: str, error: Any) -> None:
        super().__init__(f"Script {script_name} reported the following error: {error}")
        self.script_name = script_name
        self.error = error


# ---------------------------------------------------------------------------
# Stream
# ---------------------------------------------------------------------------


class OutcomeStream:
    """Ordered, fail-fast stream of script outcomes.

    Only one pull may be in progress at a time; an overlapping ``__anext__``
    raises ``RuntimeError`` instead of starting a second script.

    Parameters
    ----------
    scripts:
        Validated scripts, run in the given order.
    on_failure:
        Called with the ``ExecutionError`` before it is raised to the consumer.
        A script that fails after the stream was cancelled still reports here.
    on_complete:
        Called once after the last script succeeded.
    on_cancel:
        Called once when a cancelled stream has settled without a failure,
        that is immediately on ``aclose()``, or after the script that was
        running at the time has succeeded.
    on_teardown:
        Called once when the stream is cancelled.  Defaults to no work.
    """

    def __init__(
        self,
        scripts: Sequence[BootsScript],
        *,
        on_failure: Callable[[ExecutionError], None] | None = None,
        on_complete: Callable[[], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
        on_teardown: Callable[[], None] | None = None,
    ) -> None:
        self._scripts = list(scripts)
        self._index = 0
        self._outcomes: list[Outcome] = []
        self._state = StreamState.PENDING
        self._in_flight = False
        self._pending_error: BaseException | None = None
        self._on_failure = on_failure
        self._on_complete = on_complete
        self._on_cancel = on_cancel
        self._on_teardown = on_teardown

    @classmethod
    def failing(cls, error: BaseException) -> OutcomeStream:
        """A stream that runs nothing and raises *error* on the first pull."""
        stream = cls([])
        stream._pending_error = error
        return stream

    # -- Introspection ---------------------------------------------------------

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def outcomes(self) -> list[Outcome]:
        """Outcomes emitted so far, in script order."""
        return list(self._outcomes)

    @property
    def done(self) -> bool:
        return self._state in (StreamState.COMPLETED, StreamState.FAILED, StreamState.CANCELLED)

    @property
    def in_flight(self) -> bool:
        """``True`` while a script started by this stream has not settled."""
        return self._in_flight

    # -- Async iterator --------------------------------------------------------

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> Outcome:
        if self._in_flight:
            msg = "OutcomeStream is already running a script; pulls must not overlap"
            raise RuntimeError(msg)

        if self.done:
            raise StopAsyncIteration

        if self._pending_error is not None:
            error, self._pending_error = self._pending_error, None
            self._state = StreamState.FAILED
            raise error

        if self._index >= len(self._scripts):
            self._state = StreamState.COMPLETED
            logger.info("All {} boots scripts completed", len(self._outcomes))
            if self._on_complete is not None:
                self._on_complete()
            raise StopAsyncIteration

        self._state = StreamState.RUNNING
        script = self._scripts[self._index]
        self._index += 1

        logger.debug("Running boots script {} ({}/{})", script.name, self._index, len(self._scripts))
        self._in_flight = True
        try:
            outcome = await _run_script(script)
        except BaseException:
            # Task cancellation propagates; a cancelled stream still settles.
            self._in_flight = False
            if self._state == StreamState.CANCELLED:
                self._notify_cancelled()
            raise
        self._in_flight = False

        if not outcome.success:
            raise self._fail(ExecutionError(outcome.script_name, outcome.error))

        if self._state == StreamState.CANCELLED:
            # Cancelled while this script was running; nothing else starts.
            self._notify_cancelled()
            raise StopAsyncIteration

        logger.info("Boots script {} succeeded", outcome.script_name)
        self._outcomes.append(outcome)
        return outcome

    def _fail(self, error: ExecutionError) -> ExecutionError:
        self._state = StreamState.FAILED
        logger.error("{}", error)
        if self._on_failure is not None:
            self._on_failure(error)
        return error

    def _notify_cancelled(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()

    # -- Cancellation ----------------------------------------------------------

    async def aclose(self) -> None:
        """Stop scheduling further scripts.  No-op once the stream is done.

        A script already running is not interrupted; its eventual failure is
        still reported through ``on_failure``.
        """
        if self.done:
            return
        self._state = StreamState.CANCELLED
        logger.info(
            "Boots run cancelled after {} of {} scripts",
            len(self._outcomes),
            len(self._scripts),
        )
        if self._on_teardown is not None:
            self._on_teardown()
        if not self._in_flight:
            self._notify_cancelled()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # -- Draining --------------------------------------------------------------

    async def collect(
        self,
        on_outcome: Callable[[Outcome], Awaitable[None]] | None = None,
    ) -> list[Outcome]:
        """Drain the stream, awaiting *on_outcome* for each outcome.

        Returns every outcome on success; raises the terminal error otherwise.
        """
        async for outcome in self:
            if on_outcome is not None:
                await on_outcome(outcome)
        return self.outcomes


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


async def _run_script(script: BootsScript) -> Outcome:
    """Run one script and normalise every way it can end into an ``Outcome``."""
    try:
        pending = script.run()
        if not inspect.isawaitable(pending):
            return Outcome.failed(script.name, TypeError(f"run() returned {type(pending).__name__}, not an awaitable"))
        result = await pending
    except ScriptFailure as exc:
        return exc.outcome
    except Exception as exc:
        logger.opt(exception=exc).debug("Boots script {} raised", script.name)
        return Outcome.failed(script.name, exc)

    if not isinstance(result, Outcome):
        return Outcome.failed(script.name, TypeError(f"run() resolved to {type(result).__name__}, not an Outcome"))
    return result
