"""
Core Console Model Objects

Defines the registry data structures:
    - Declarations (CommandDecl, VariableDecl) supplied by the host
    - Console objects (Command, Variable) materialized from declarations
    - Namespaces (named, fixed groups of objects with a handler slot)

ARCHITECTURAL RULE:
    These objects hold state only.
    Dispatch, resolution and persistence live in the console layer,
    which owns every Namespace and reaches them through these types.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Deque, Iterator, Optional, Tuple, Union

from cvarcon.statements import Statement
from cvarcon.values import Value, ValueKind

if TYPE_CHECKING:
    from cvarcon.console import Console


DEFAULT_DESCRIPTION = "No help available"

# func(handler, console, statement) -> handled
CommandFunc = Callable[[Any, "Console", Statement], bool]
# on_change(handler, console, current)
ChangeFunc = Callable[[Any, "Console", Value], None]


@dataclass(frozen=True)
class CommandDecl:
    """
    Declares a command.

    Properties:
        name: Identifier, unique within its namespace
        func: Callable run on execution; None makes the command inert
        description: Usage and help text
    """

    name: str
    func: Optional[CommandFunc] = None
    description: str = DEFAULT_DESCRIPTION


@dataclass(frozen=True)
class VariableDecl:
    """
    Declares a cvar.

    Properties:
        name: Identifier, unique within its namespace
        kind: ValueKind the variable holds for its whole lifetime
        default: Default payload (bool/int/str or Value); None means the
                 kind's zero value
        on_change: Called as on_change(handler, console, current) after a
                   change, once a handler is attached
        description: Help text
    """

    name: str
    kind: ValueKind
    default: Union[bool, int, str, Value, None] = None
    on_change: Optional[ChangeFunc] = None
    description: Optional[str] = None

    def default_value(self) -> Value:
        if self.default is None:
            return Value.zero(self.kind)
        if isinstance(self.default, Value):
            value = self.default
        else:
            value = Value.of(self.default)
        if value.kind is not self.kind:
            raise TypeError(
                f"{self.name}: default is {value.kind.type_name}, "
                f"declared {self.kind.type_name}"
            )
        return value


@dataclass(eq=False)
class ConsoleObject:
    """
    Base class for everything a namespace holds.

    Properties:
        name: Identifier (unique within the namespace)
        description: Human text, never None
        namespace: Owning Namespace, used to reach its handler
    """

    name: str
    description: str
    namespace: Optional[Namespace] = field(default=None, repr=False)

    @property
    def qualified_name(self) -> str:
        if self.namespace is None:
            return self.name
        return f"{self.namespace.name}.{self.name}"


@dataclass(eq=False)
class Command(ConsoleObject):
    """An invocable command. Holds no persisted state."""

    func: Optional[CommandFunc] = None


@dataclass(eq=False)
class Variable(ConsoleObject):
    """
    A typed configuration variable.

    default and current always hold `kind`. A variable is modified
    exactly when current != default.
    """

    kind: ValueKind = ValueKind.STRING
    default: Value = field(default_factory=lambda: Value.zero(ValueKind.STRING))
    current: Value = field(default_factory=lambda: Value.zero(ValueKind.STRING))
    on_change: Optional[ChangeFunc] = None

    def is_modified(self) -> bool:
        return self.current != self.default

    @property
    def data(self) -> Union[bool, int, str]:
        return self.current.data


@dataclass(eq=False)
class Namespace:
    """
    A named, fixed group of commands and variables.

    The object tuple is built once from declarations and never grows or
    shrinks. While `handler` is None, command executions and variable change
    notifications are queued in `pending` (at most `max_pending`) and
    replayed when a handler is attached.
    """

    name: str
    objects: Tuple[ConsoleObject, ...] = ()
    max_pending: int = 8
    handler: Any = None
    pending: Deque[Statement] = field(default_factory=deque, repr=False)
    console: Optional[Console] = field(default=None, repr=False)

    def find_object(self, name: str) -> Optional[ConsoleObject]:
        for obj in self.objects:
            if obj.name == name:
                return obj
        return None

    @property
    def commands(self) -> Iterator[Command]:
        return (obj for obj in self.objects if isinstance(obj, Command))

    @property
    def variables(self) -> Iterator[Variable]:
        return (obj for obj in self.objects if isinstance(obj, Variable))

    @property
    def attached(self) -> bool:
        return self.handler is not None

    def buffer(self, statement: Statement) -> bool:
        """Queue a statement; returns False if the queue is full."""
        if len(self.pending) >= self.max_pending:
            return False
        self.pending.append(statement)
        return True

    def set_handler(self, handler: Any) -> None:
        """Attach (or, with None, detach) the callback handler."""
        if self.console is None:
            self.handler = handler
            return
        self.console.set_handler(self, handler)
