"""Script unit contract.

A boots script is any object exposing a non-empty ``name`` and a zero-argument
async ``run()`` returning an ``Outcome``.  Script modules expose their unit as
a module attribute (``script`` by default)::

    from boots import Outcome, boots_script

    @boots_script("seed-users")
    async def script() -> Outcome:
        await insert_users()
        return Outcome.ok("seed-users")

Authors may also implement ``BootsScript`` directly on a class.  To reject
with a specific failure outcome, raise ``ScriptFailure``.

``run`` must be declared async: an ``async def`` method or function, or an
object whose ``__call__`` is ``async def``.  A plain function that returns an
awaitable is rejected by ``check_script`` even though calling it would work.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from boots.models.outcome import Outcome

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class ScriptFailure(Exception):  # noqa: N818
    """Raised from ``run()`` to reject with a failure ``Outcome``."""

    def __init__(self, outcome: Outcome) -> None:
        if outcome.success:
            msg = "ScriptFailure requires a failed outcome"
            raise ValueError(msg)
        super().__init__(f"Script {outcome.script_name} failed: {outcome.error}")
        self.outcome = outcome


class ScriptShapeError(TypeError):
    """A loaded value does not satisfy the ``BootsScript`` contract."""


@runtime_checkable
class BootsScript(Protocol):
    """Capability every bootstrap script implements.

    ``run`` takes no arguments and must itself be a coroutine function (or an
    object with an async ``__call__``).  ``check_script`` inspects this without
    calling ``run``, so a synchronous ``run`` that returns a coroutine does not
    qualify.
    """

    name: str

    async def run(self) -> Outcome:
        """Do the work and report an ``Outcome``."""
        ...


class FunctionScript:
    """Adapt a zero-argument coroutine function to ``BootsScript``.

    If the function returns ``None`` a successful outcome is reported on its
    behalf.
    """

    def __init__(self, name: str, func: Callable[[], Awaitable[Outcome | None]]) -> None:
        self.name = name
        self._func = func

    async def run(self) -> Outcome:
        result = await self._func()
        if result is None:
            return Outcome.ok(self.name)
        return result

    def __repr__(self) -> str:
        return f"FunctionScript(name={self.name!r})"


def boots_script(name: str) -> Callable[[Callable[[], Awaitable[Outcome | None]]], FunctionScript]:
    """Decorator turning an async function into a ``FunctionScript``."""

    def decorator(func: Callable[[], Awaitable[Outcome | None]]) -> FunctionScript:
        if not inspect.iscoroutinefunction(func):
            msg = f"@boots_script({name!r}) must decorate an async function"
            raise TypeError(msg)
        return FunctionScript(name, func)

    return decorator


# ---------------------------------------------------------------------------
# Shape check
# ---------------------------------------------------------------------------


def check_script(value: object) -> BootsScript:
    """Return *value* typed as ``BootsScript`` or raise ``ScriptShapeError``."""
    if not isinstance(value, BootsScript):
        missing = [attr for attr in ("name", "run") if not hasattr(value, attr)]
        if missing:
            msg = f"missing {', '.join(repr(m) for m in missing)}"
        else:
            msg = f"{type(value).__name__} does not implement BootsScript"
        raise ScriptShapeError(msg)

    name = value.name
    if not isinstance(name, str) or not name:
        msg = f"'name' must be a non-empty string, got {name!r}"
        raise ScriptShapeError(msg)

    run = value.run
    if not callable(run):
        msg = f"'run' is not callable ({type(run).__name__})"
        raise ScriptShapeError(msg)

    try:
        inspect.signature(run).bind()
    except TypeError:
        msg = "'run' must take no arguments"
        raise ScriptShapeError(msg) from None
    except ValueError:
        # No introspectable signature (some builtins); the call decides.
        pass

    if not _is_async_callable(run):
        msg = "'run' must be an async callable"
        raise ScriptShapeError(msg)

    return value


def is_boots_script(value: object) -> bool:
    try:
        check_script(value)
    except ScriptShapeError:
        return False
    return True


def _is_async_callable(func: object) -> bool:
    if inspect.iscoroutinefunction(func):
        return True
    call = getattr(func, "__call__", None)  # noqa: B004
    return call is not None and inspect.iscoroutinefunction(call)
