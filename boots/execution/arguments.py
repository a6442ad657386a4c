"""Identifier source: scan process arguments for a flag."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_FLAG = "--boots"


def scan_flag_arguments(argv: Sequence[str], flag: str = DEFAULT_FLAG) -> list[str]:
    """Collect the tokens following each occurrence of *flag*.

    Collection stops at the next token starting with ``-`` or at the end of
    *argv*.  The flag may appear several times; results keep argument order.

    >>> scan_flag_arguments(["app", "--boots", "a", "b", "--debug", "--boots", "c"])
    ['a', 'b', 'c']
    """
    identifiers: list[str] = []
    for index, token in enumerate(argv):
        if token != flag:
            continue
        for candidate in argv[index + 1 :]:
            if candidate.startswith("-"):
                break
            identifiers.append(candidate)
    return identifiers
