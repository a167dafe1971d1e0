"""
Embeddable Console Variables and Commands (cvarcon) Package

A runtime registry of named, typed configuration variables ("cvars") and
invocable commands, grouped into namespaces, with:
    - Name resolution across namespaces (ns.name or bare name)
    - Change notification through a per-namespace handler
    - A command-line grammar turning process arguments into statements
    - Save/load of modified variables as console statements

This package writes text to an output sink only. It knows nothing of GUIs,
networks or platform settings directories; the host supplies those.

Not thread-safe: the host serializes access to each Console.
"""

import logging

from cvarcon.config import ConsoleConfig, load_config
from cvarcon.console import Console
from cvarcon.errors import (
    AmbiguousNameError,
    CapacityExceededError,
    ConsoleError,
    ConsoleIOError,
    DeclarationError,
    NoSuchNamespaceError,
    NoSuchObjectError,
    NotFoundError,
    TooManyArgumentsError,
    TypeMismatchError,
)
from cvarcon.model import Command, CommandDecl, ConsoleObject, Namespace, Variable, VariableDecl
from cvarcon.statements import Statement
from cvarcon.values import Value, ValueKind

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Console",
    "ConsoleConfig",
    "load_config",
    "Namespace",
    "ConsoleObject",
    "Command",
    "CommandDecl",
    "Variable",
    "VariableDecl",
    "Statement",
    "Value",
    "ValueKind",
    "ConsoleError",
    "NotFoundError",
    "NoSuchNamespaceError",
    "NoSuchObjectError",
    "AmbiguousNameError",
    "TypeMismatchError",
    "TooManyArgumentsError",
    "ConsoleIOError",
    "CapacityExceededError",
    "DeclarationError",
]
