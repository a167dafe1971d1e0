"""
The built-in `console` namespace.

Every Console starts with this namespace, its handler set to the Console
itself:

    console.help [names...]   describe commands, variables or namespaces
    console.load <files...>   execute statements stored in files
    console.save <file>       write modified variables to a file
    console.save_path         directory that load/save file names are
                              relative to (empty means the working directory)
"""
from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from cvarcon.errors import ConsoleError, ConsoleIOError
from cvarcon.model import CommandDecl, VariableDecl
from cvarcon.persistence import describe
from cvarcon.statements import Statement
from cvarcon.values import ValueKind

if TYPE_CHECKING:
    from cvarcon.console import Console


NAMESPACE = "console"
SAVE_PATH = "save_path"


def save_file_path(console: Console, filename: str) -> str:
    directory = console.get_str(f"{NAMESPACE}.{SAVE_PATH}")
    if not directory:
        return filename
    return os.path.join(directory, filename)


def cmd_help(handler: Any, console: Console, stat: Statement) -> bool:
    if stat.argc <= 1:
        names = " ".join(ns.name for ns in console.namespaces)
        console.write(f"Available namespaces: {names}\n")
        return True
    for token in stat.args:
        try:
            resolution = console.resolve(token)
        except ConsoleError as e:
            console.write(f"{e}\n")
            continue
        if not resolution.listed:
            describe(console, resolution.namespace, resolution.obj)
    return True


def cmd_load(handler: Any, console: Console, stat: Statement) -> bool:
    if stat.argc <= 1:
        return False
    console.load(*(save_file_path(console, name) for name in stat.args))
    return True


def cmd_save(handler: Any, console: Console, stat: Statement) -> bool:
    if stat.argc != 2:
        return False
    filename = stat.argv[1]
    try:
        console.save(save_file_path(console, filename))
    except ConsoleIOError:
        console.write(f"{filename}: Failed to open file for writing\n")
    return True


COMMANDS = (
    CommandDecl(
        "help",
        cmd_help,
        "<cmd-or-cvar...>\n"
        "Display description of a given command, variable or namespace.\n"
        "With no arguments, display list of all available namespaces.",
    ),
    CommandDecl(
        "load",
        cmd_load,
        "<filenames...>\n"
        "Open a file and parse each line as a console statement.",
    ),
    CommandDecl(
        "save",
        cmd_save,
        "<filename>\n"
        "Write console statements of all modified variables to a file.",
    ),
)

VARIABLES = (
    VariableDecl(
        SAVE_PATH,
        ValueKind.STRING,
        "",
        description="Defines the application's main directory for storing settings",
    ),
)


def install(console: Console) -> None:
    namespace = console.create_namespace(NAMESPACE, COMMANDS, VARIABLES)
    namespace.set_handler(console)


__all__ = ["NAMESPACE", "SAVE_PATH", "COMMANDS", "VARIABLES", "install", "save_file_path"]
