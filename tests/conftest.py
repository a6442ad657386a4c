"""Shared test fixtures.

Script modules are written into ``tmp_path`` so the real loader can be
exercised end to end.  Sequencing tests use ``tests.fakes.FakeScript``
objects served by an in-memory loader instead, which lets them count side
effects directly.
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from loguru import logger

from boots.settings import get_settings


@pytest.fixture(autouse=True)
def _isolate_logging_and_settings() -> Iterator[None]:
    """Undo ``setup_logging`` and cached settings between tests."""
    get_settings.cache_clear()
    yield
    logger.remove()
    logger.disable("boots")
    get_settings.cache_clear()


@pytest.fixture
def journal() -> list[str]:
    return []


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a script module into ``tmp_path`` and return its path."""

    def _write(relative: str, source: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def ok_script_source() -> Callable[[str], str]:
    """Source of a script module that succeeds and touches a marker file."""

    def _source(name: str) -> str:
        return f"""
        from pathlib import Path

        from boots import Outcome, boots_script


        @boots_script({name!r})
        async def script():
            Path(__file__).with_suffix(".ran").touch()
            return Outcome.ok({name!r})
        """

    return _source


@pytest.fixture
def failing_script_source() -> Callable[[str, str], str]:
    """Source of a script module that rejects with a failure outcome."""

    def _source(name: str, error: str) -> str:
        return f"""
        from pathlib import Path

        from boots import Outcome, ScriptFailure, boots_script


        @boots_script({name!r})
        async def script():
            Path(__file__).with_suffix(".ran").touch()
            raise ScriptFailure(Outcome.failed({name!r}, {error!r}))
        """

    return _source
