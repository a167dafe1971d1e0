"""
Name resolution.

Turns a typed token into the object it names:

    ns.name   -> that namespace's object, or NoSuchNamespace / NoSuchObject
    ns        -> namespace listing, written to the console sink
    name      -> the single object with that name across all namespaces,
                 or NotFound / Ambiguous

A namespace name always wins over an object of the same name.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from cvarcon.errors import AmbiguousNameError, NoSuchNamespaceError, NoSuchObjectError, NotFoundError
from cvarcon.model import Command, ConsoleObject, Namespace, Variable

if TYPE_CHECKING:
    from cvarcon.console import Console


SEPARATOR = "."


@dataclass(frozen=True)
class Resolution:
    """
    Result of resolving a token.

    Properties:
        namespace: The namespace that matched
        obj: The matched object, or None for a namespace listing
    """

    namespace: Namespace
    obj: Optional[ConsoleObject] = None

    @property
    def listed(self) -> bool:
        return self.obj is None


def split_name(token: str) -> Tuple[Optional[str], str]:
    """Split 'ns.name' into ('ns', 'name'); bare names give (None, name)."""
    if SEPARATOR in token:
        ns_name, _, obj_name = token.partition(SEPARATOR)
        return ns_name, obj_name
    return None, token


def format_listing(namespace: Namespace) -> str:
    sections = (("Commands", list(namespace.commands)), ("Variables", list(namespace.variables)))
    lines = [f"{namespace.name}: namespace"]
    for label, members in sections:
        names = " ".join(obj.name for obj in members) if members else "(none)"
        lines.append(f"\t{label}: {names}")
    return "\n".join(lines) + "\n"


def lookup(console: Console, token: str) -> Tuple[Namespace, ConsoleObject]:
    """
    Find the object a token names, never producing a listing.

    Raises:
        NoSuchNamespaceError: Dotted token with an unknown namespace
        NoSuchObjectError: Dotted token whose namespace lacks the object
        NotFoundError: Bare token matching nothing
        AmbiguousNameError: Bare token matching objects in several namespaces
    """
    ns_name, obj_name = split_name(token)
    if ns_name is not None:
        namespace = console.find_namespace(ns_name)
        if namespace is None:
            raise NoSuchNamespaceError(ns_name)
        obj = namespace.find_object(obj_name)
        if obj is None:
            raise NoSuchObjectError(ns_name, obj_name)
        return namespace, obj

    matches: List[Tuple[Namespace, ConsoleObject]] = []
    for namespace in console.namespaces:
        obj = namespace.find_object(token)
        if obj is not None:
            matches.append((namespace, obj))

    if not matches:
        raise NotFoundError(token)
    if len(matches) > 1:
        raise AmbiguousNameError(token, [ns.name for ns, _ in matches])
    return matches[0]


def resolve(console: Console, token: str) -> Resolution:
    """
    Resolve a token typed at the console.

    A bare token equal to a namespace name writes that namespace's listing
    to the console and returns a Resolution with obj=None; callers must not
    look further.
    """
    if SEPARATOR not in token:
        namespace = console.find_namespace(token)
        if namespace is not None:
            console.write(format_listing(namespace))
            return Resolution(namespace)
    namespace, obj = lookup(console, token)
    return Resolution(namespace, obj)


def find_variable(console: Console, token: str) -> Variable:
    """Look up a token that must name a variable."""
    _, obj = lookup(console, token)
    if not isinstance(obj, Variable):
        raise NotFoundError(token, f"{obj.qualified_name}: Not a variable")
    return obj


def find_command(console: Console, token: str) -> Command:
    """Look up a token that must name a command."""
    _, obj = lookup(console, token)
    if not isinstance(obj, Command):
        raise NotFoundError(token, f"{obj.qualified_name}: Not a command")
    return obj


__all__ = [
    "Resolution",
    "resolve",
    "lookup",
    "find_variable",
    "find_command",
    "format_listing",
    "split_name",
]
