"""
Exception hierarchy for cvarcon.

Resolution and parsing errors are raised by the library and converted to
console text by the statement executor. Declaration errors propagate to the
caller, since they indicate a static configuration mistake.
"""

from typing import List, Optional, Sequence


class ConsoleError(Exception):
    """Base class for all console errors."""
    pass


class NotFoundError(ConsoleError):
    """Raised when no command or variable matches a name."""

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"{name}: No such command or variable")


class NoSuchNamespaceError(NotFoundError):
    """Raised when a dotted name refers to an unknown namespace."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(namespace, f"{namespace}: No such namespace")


class NoSuchObjectError(NotFoundError):
    """Raised when a namespace lacks the requested object."""

    def __init__(self, namespace: str, name: str):
        self.namespace = namespace
        super().__init__(
            name,
            f'{name}: No such command or variable in namespace "{namespace}"',
        )


class AmbiguousNameError(ConsoleError):
    """Raised when a bare name matches objects in several namespaces."""

    def __init__(self, name: str, namespaces: Sequence[str]):
        self.name = name
        self.namespaces: List[str] = list(namespaces)
        lines = [f"{name}: Name is ambiguous for {len(self.namespaces)} namespaces:"]
        lines.extend(f"\t{ns}.{name}" for ns in self.namespaces)
        super().__init__("\n".join(lines))


class TypeMismatchError(ConsoleError):
    """Raised when a value's kind disagrees with a variable's kind."""
    pass


class TooManyArgumentsError(ConsoleError):
    """Raised when a statement supplies more values than its target accepts."""
    pass


class ConsoleIOError(ConsoleError):
    """Raised when a save or load file cannot be opened."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class CapacityExceededError(ConsoleError):
    """Raised when the namespace table is full."""
    pass


class DeclarationError(ConsoleError):
    """Raised when a namespace declaration is malformed."""
    pass


__all__ = [
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
