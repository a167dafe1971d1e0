"""
The Console: namespace table, statement executor and cvar state machine.

A Console owns every Namespace and writes all user-facing text to its
output sink (any object with a write(str) method). Library calls raise
ConsoleError subclasses; execute() is the one place that turns those errors
into console text and carries on with the next statement.

Variables move between two states:

    unmodified (current == default)  <->  modified (current != default)

Transitions happen only through set(). Setting a variable to the value it
already holds does nothing. While the owning namespace has no handler, the
change is stored but its notification is queued, together with any command
executions, until a handler is attached.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import replace
from typing import IO, Any, Iterable, List, Optional, Sequence, Tuple, Union

from cvarcon import builtins, persistence
from cvarcon.args import parse_args
from cvarcon.config import ConsoleConfig
from cvarcon.errors import (
    CapacityExceededError,
    ConsoleError,
    DeclarationError,
    TooManyArgumentsError,
    TypeMismatchError,
)
from cvarcon.model import (
    DEFAULT_DESCRIPTION,
    Command,
    CommandDecl,
    ConsoleObject,
    Namespace,
    Variable,
    VariableDecl,
)
from cvarcon.resolver import SEPARATOR, Resolution, find_variable, lookup, resolve
from cvarcon.statements import Statement
from cvarcon.values import Value, ValueKind, parse_value


logger = logging.getLogger(__name__)

VariableRef = Union[Variable, str]
Payload = Union[Value, bool, int, str]


class Console:
    """
    Runtime registry of namespaced commands and variables.

    Args:
        app_name: Overrides config.app_name when given
        output: Text sink; defaults to sys.stdout
        config: Capacities; defaults to ConsoleConfig()
        install_builtins: Create the `console` namespace (help/load/save)
    """

    def __init__(
        self,
        app_name: Optional[str] = None,
        output: Optional[IO[str]] = None,
        config: Optional[ConsoleConfig] = None,
        install_builtins: bool = True,
    ):
        config = config or ConsoleConfig()
        if app_name:
            config = replace(config, app_name=app_name)
        self.config = config
        self.output = output if output is not None else sys.stdout
        self._namespaces: List[Namespace] = []
        if install_builtins:
            builtins.install(self)

    @property
    def app_name(self) -> str:
        return self.config.app_name

    @property
    def namespaces(self) -> Tuple[Namespace, ...]:
        return tuple(self._namespaces)

    def write(self, text: str) -> None:
        self.output.write(text)

    # ------------------------------------------------------------------
    # Namespace table
    # ------------------------------------------------------------------

    def find_namespace(self, name: str) -> Optional[Namespace]:
        for namespace in self._namespaces:
            if namespace.name == name:
                return namespace
        return None

    def create_namespace(
        self,
        name: str,
        commands: Iterable[CommandDecl] = (),
        variables: Iterable[VariableDecl] = (),
    ) -> Namespace:
        """
        Create a namespace from bulk declarations.

        Variables are materialized before commands.

        Raises:
            DeclarationError: Empty, dotted or already registered name,
                              duplicate object names, or a default that
                              does not match its kind
            CapacityExceededError: The namespace table is full
        """
        if not name or SEPARATOR in name:
            raise DeclarationError(f"Invalid namespace name: {name!r}")

        if self.find_namespace(name) is not None:
            raise DeclarationError(f"{name}: Namespace already exists")

        if len(self._namespaces) >= self.config.max_namespaces:
            raise CapacityExceededError(
                f"{name}: Namespace table is full ({self.config.max_namespaces})"
            )

        commands = list(commands)
        variables = list(variables)
        names = [decl.name for decl in variables] + [decl.name for decl in commands]
        for obj_name in names:
            if not obj_name or SEPARATOR in obj_name:
                raise DeclarationError(f"{name}: Invalid object name: {obj_name!r}")
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise DeclarationError(f"{name}: Duplicate names: {', '.join(duplicates)}")

        objects: List[ConsoleObject] = []
        for decl in variables:
            try:
                default = decl.default_value()
            except TypeError as e:
                raise DeclarationError(f"{name}.{e}") from e
            objects.append(Variable(
                name=decl.name,
                description=decl.description or DEFAULT_DESCRIPTION,
                kind=decl.kind,
                default=default,
                current=default,
                on_change=decl.on_change,
            ))
        for decl in commands:
            objects.append(Command(
                name=decl.name,
                description=decl.description or DEFAULT_DESCRIPTION,
                func=decl.func,
            ))

        namespace = Namespace(
            name=name,
            objects=tuple(objects),
            max_pending=self.config.max_pending,
            console=self,
        )
        for obj in objects:
            obj.namespace = namespace
        self._namespaces.append(namespace)
        logger.debug(
            "created namespace %s (%d variable(s), %d command(s))",
            name, len(variables), len(commands),
        )
        return namespace

    def set_handler(self, namespace: Namespace, handler: Any) -> None:
        """
        Attach or detach a namespace's handler.

        Attaching a handler to a detached namespace replays its pending
        statements in order, each once, then leaves the queue empty.
        """
        previous = namespace.handler
        namespace.handler = handler
        if handler is None:
            if previous is not None:
                logger.debug("detached handler from %s", namespace.name)
            return
        if previous is None:
            logger.debug(
                "attached handler to %s, replaying %d statement(s)",
                namespace.name, len(namespace.pending),
            )
            self._flush(namespace)

    def teardown(self) -> None:
        """Detach every handler, drop pending statements and empty the table."""
        for namespace in self._namespaces:
            namespace.handler = None
            namespace.pending.clear()
            namespace.console = None
        self._namespaces.clear()
        logger.debug("console %s torn down", self.app_name)

    # ------------------------------------------------------------------
    # Resolution and execution
    # ------------------------------------------------------------------

    def resolve(self, token: str) -> Resolution:
        return resolve(self, token)

    def variable(self, token: str) -> Variable:
        return find_variable(self, token)

    def execute(self, line: str) -> bool:
        """Tokenize and execute one console line."""
        return self.execute_statement(Statement.parse(line))

    def execute_statement(self, statement: Statement) -> bool:
        """
        Execute one statement.

        Errors are written to the output and abandon only this statement.

        Returns:
            True if the statement ran, was queued, or produced a listing
        """
        if not statement:
            return False
        try:
            resolution = self.resolve(statement.name)
            if resolution.listed:
                return True
            return self._dispatch(resolution.namespace, resolution.obj, statement)
        except ConsoleError as e:
            self.write(f"{e}\n")
            return False

    def parse_args(self, argv: Sequence[str], default_command: str = "") -> List[Statement]:
        return parse_args(self, argv, default_command)

    def _dispatch(self, namespace: Namespace, obj: ConsoleObject, statement: Statement) -> bool:
        if isinstance(obj, Command):
            if namespace.handler is None:
                self._defer(namespace, obj, statement)
                return True
            return self._run_command(namespace, obj, statement)

        if statement.argc == 1:
            persistence.describe(self, namespace, obj)
            return True
        if statement.argc > 2:
            raise TooManyArgumentsError(f"{obj.qualified_name}: Too many arguments")
        value = self._parse_token(obj, statement.argv[1])
        self._assign(obj, value, statement)
        return True

    def _run_command(self, namespace: Namespace, command: Command, statement: Statement) -> bool:
        if command.func is None:
            return True
        if command.func(namespace.handler, self, statement):
            return True
        self.write(f"Usage: {command.qualified_name} {command.description}\n")
        return False

    def _parse_token(self, var: Variable, token: str) -> Value:
        try:
            return parse_value(var.kind, token)
        except ValueError:
            raise TypeMismatchError(
                f'{var.qualified_name}: Expected {var.kind.type_name}, got "{token}"'
            ) from None

    # ------------------------------------------------------------------
    # Pending statements
    # ------------------------------------------------------------------

    def _defer(self, namespace: Namespace, obj: ConsoleObject, statement: Statement) -> None:
        # Queue under the qualified name so later namespaces cannot make it ambiguous
        queued = Statement((obj.qualified_name,) + statement.args)
        if namespace.buffer(queued):
            logger.debug("queued '%s' until %s has a handler", queued, namespace.name)
        else:
            logger.debug("pending queue of %s is full, dropped '%s'", namespace.name, queued)

    def _flush(self, namespace: Namespace) -> None:
        while namespace.pending and namespace.handler is not None:
            statement = namespace.pending.popleft()
            try:
                self._replay(namespace, statement)
            except ConsoleError as e:
                self.write(f"{e}\n")

    def _replay(self, namespace: Namespace, statement: Statement) -> None:
        _, obj = lookup(self, statement.name)
        if isinstance(obj, Command):
            self._run_command(namespace, obj, statement)
            return
        # The value was stored when the statement ran; only the notification was held back.
        if obj.on_change is not None:
            value = self._parse_token(obj, statement.argv[1])
            obj.on_change(namespace.handler, self, value)

    # ------------------------------------------------------------------
    # Variable access
    # ------------------------------------------------------------------

    def _variable(self, target: VariableRef) -> Variable:
        if isinstance(target, Variable):
            return target
        return self.variable(target)

    def _assign(self, var: Variable, value: Value, statement: Optional[Statement] = None) -> bool:
        if value.kind is not var.kind:
            raise TypeMismatchError(
                f"{var.qualified_name}: Expected {var.kind.type_name}, got {value.kind.type_name}"
            )
        if value == var.current:
            return False
        var.current = value

        namespace = var.namespace
        if namespace.handler is None:
            if statement is None:
                statement = Statement((var.qualified_name, value.token()))
            self._defer(namespace, var, statement)
        elif var.on_change is not None:
            var.on_change(namespace.handler, self, var.current)
        return True

    def set(self, target: VariableRef, value: Payload) -> bool:
        """
        Set a variable.

        Args:
            target: Variable or its (dotted or bare) name
            value: Value, or a bool/int/str payload

        Returns:
            True if the value changed

        Raises:
            TypeMismatchError: The value's kind differs from the variable's
        """
        var = self._variable(target)
        if not isinstance(value, Value):
            try:
                value = Value.of(value)
            except TypeError as e:
                raise TypeMismatchError(f"{var.qualified_name}: {e}") from None
        return self._assign(var, value)

    def reset(self, target: VariableRef) -> bool:
        var = self._variable(target)
        return self._assign(var, var.default)

    def get(self, target: VariableRef) -> Value:
        return self._variable(target).current

    def _typed(self, target: VariableRef, kind: ValueKind) -> Variable:
        var = self._variable(target)
        if var.kind is not kind:
            raise TypeMismatchError(
                f"{var.qualified_name}: Expected {var.kind.type_name}, got {kind.type_name}"
            )
        return var

    def get_bool(self, target: VariableRef) -> bool:
        return self._typed(target, ValueKind.BOOL).current.data

    def get_int(self, target: VariableRef) -> int:
        return self._typed(target, ValueKind.INT).current.data

    def get_str(self, target: VariableRef) -> str:
        return self._typed(target, ValueKind.STRING).current.data

    def set_bool(self, target: VariableRef, value: bool) -> bool:
        return self.set(self._typed(target, ValueKind.BOOL), value)

    def set_int(self, target: VariableRef, value: int) -> bool:
        return self.set(self._typed(target, ValueKind.INT), value)

    def set_str(self, target: VariableRef, value: str) -> bool:
        return self.set(self._typed(target, ValueKind.STRING), value)

    def toggle(self, target: VariableRef) -> bool:
        """Flip a boolean variable and return its new value."""
        var = self._typed(target, ValueKind.BOOL)
        self._assign(var, Value(ValueKind.BOOL, not var.current.data))
        return var.current.data

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def describe(self, token: str) -> None:
        namespace, obj = lookup(self, token)
        persistence.describe(self, namespace, obj)

    def set_save_path(self, path: str) -> None:
        self.set_str(f"{builtins.NAMESPACE}.{builtins.SAVE_PATH}", path)

    def save(self, path: str) -> int:
        return persistence.save(self, path)

    def load(self, *paths: str) -> int:
        return persistence.load(self, *paths)

    def dumps(self) -> str:
        return persistence.dumps(self)

    def loads(self, text: str) -> int:
        return persistence.loads(self, text)


__all__ = ["Console"]
