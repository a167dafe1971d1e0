"""
Describe, save and load.

Save files are UTF-8 text with one console statement per line:

    video.width 1280
    video.fullscreen 1
    player.name "Jo \\"JJ\\" Smith"

Only modified variables are written, so an untouched console saves an
empty file. Loading executes each line as if typed at the console, which
makes save followed by load reproduce every saved value.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

from cvarcon.errors import ConsoleIOError
from cvarcon.model import Command, ConsoleObject, Namespace, Variable

if TYPE_CHECKING:
    from cvarcon.console import Console


logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


def format_description(namespace: Namespace, obj: ConsoleObject) -> str:
    qualified = f"{namespace.name}.{obj.name}"
    if isinstance(obj, Command):
        return f"{qualified} {obj.description}\n"
    if isinstance(obj, Variable):
        return (
            f"{qualified}: {obj.kind.type_name}\n"
            f"Default: {obj.default.display()}\n"
            f"Current: {obj.current.display()}\n"
            f"{obj.description}\n"
        )
    raise TypeError(f"Unsupported console object: {type(obj)}")


def describe(console: Console, namespace: Namespace, obj: ConsoleObject) -> None:
    console.write(format_description(namespace, obj))


def saved_lines(console: Console) -> List[str]:
    """Statements for every modified variable, namespace then declaration order."""
    lines = []
    for namespace in console.namespaces:
        for var in namespace.variables:
            if var.is_modified():
                lines.append(f"{namespace.name}.{var.name} {var.current.literal()}")
    return lines


def dumps(console: Console) -> str:
    return "".join(line + "\n" for line in saved_lines(console))


def save(console: Console, path: str) -> int:
    """
    Write modified variables to `path`.

    Returns:
        Number of statements written

    Raises:
        ConsoleIOError: If the file cannot be opened or written
    """
    lines = saved_lines(console)
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            for line in lines:
                f.write(line + "\n")
    except OSError as e:
        raise ConsoleIOError(path, "Failed to open file for writing") from e
    logger.debug("saved %d variable(s) to %s", len(lines), path)
    return len(lines)


def loads(console: Console, text: str) -> int:
    """Execute each non-blank, non-comment line of `text`; returns lines executed."""
    count = 0
    # Only "\n" ends a statement; other line-break characters may sit inside quotes
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue
        console.execute(stripped)
        count += 1
    return count


def load(console: Console, *paths: str) -> int:
    """
    Execute the statements stored in each file.

    A file that cannot be opened is reported to the console and skipped;
    the remaining files are still processed.

    Returns:
        Number of files read
    """
    loaded = 0
    for path in paths:
        try:
            with open(path, "r", encoding="utf-8", newline="\n") as f:
                text = f.read()
        except OSError as e:
            logger.debug("cannot read %s: %s", path, e)
            console.write(f"{ConsoleIOError(path, 'Failed to open file for reading')}\n")
            continue
        executed = loads(console, text)
        logger.debug("loaded %d statement(s) from %s", executed, path)
        loaded += 1
    return loaded


__all__ = [
    "describe",
    "format_description",
    "saved_lines",
    "dumps",
    "save",
    "loads",
    "load",
]
