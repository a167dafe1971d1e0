"""
Process arguments to console statements.

Each dashed argument starts a new statement; plain arguments extend the
statement that is open. Plain arguments given before any dashed one are
"stray" and are appended to the default command instead:

    app -video.width 1280 -video.fullscreen 1 save.cfg
        -> video.width 1280
        -> video.fullscreen 1
        -> <default_command> save.cfg

A bare "--" (or "-") closes the open statement and makes every later
argument stray, dashed or not.

Call this after loading saved settings so that arguments override them.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

from cvarcon.statements import Statement, tokenize

if TYPE_CHECKING:
    from cvarcon.console import Console


def split_args(argv: Sequence[str], default_command: str = "") -> List[Statement]:
    """
    Group arguments into statements without executing them.

    Args:
        argv: Process arguments, program name excluded
        default_command: Console line that stray arguments are appended to

    Returns:
        Statements in execution order; the stray statement, if it gained
        any arguments, comes last
    """
    statements: List[Statement] = []
    default = Statement.of(tokenize(default_command or ""))
    stray = default
    current = Statement()
    post_dash = False

    for arg in argv:
        dashed = False
        if not post_dash and arg.startswith("-"):
            dashed = True
            arg = arg.lstrip("-")

        if arg:
            if dashed:
                if current:
                    statements.append(current)
                current = Statement((arg,))
            elif current:
                current = current.extended(arg)
            else:
                stray = stray.extended(arg)
        elif dashed:
            if current:
                statements.append(current)
            current = Statement()
            post_dash = True

    if current:
        statements.append(current)
    if stray.argc > default.argc:
        statements.append(stray)
    return statements


def parse_args(console: Console, argv: Sequence[str], default_command: str = "") -> List[Statement]:
    """Execute the statements formed from `argv`; returns them in order."""
    statements = split_args(argv, default_command)
    for statement in statements:
        console.execute_statement(statement)
    return statements


__all__ = ["split_args", "parse_args"]
