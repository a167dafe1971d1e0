"""
Console Analyzer — read-only inventory and diagnostics of a Console.

Reports:
    - Namespace, command and variable counts
    - Modified variables
    - Bare names that resolve as ambiguous
    - Object names hidden by a namespace of the same name
    - Namespaces still waiting for a handler, and their queued statements

IMPORTANT: This module never changes the console. It only produces reports.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List

from cvarcon.model import Command, Variable

if TYPE_CHECKING:
    from cvarcon.console import Console


@dataclass
class ConsoleReport:
    """Analysis report for a console."""

    app_name: str
    total_namespaces: int = 0
    total_commands: int = 0
    total_variables: int = 0

    # Variable state
    modified_variables: List[str] = field(default_factory=list)

    # Name resolution hazards
    shadowed_names: Dict[str, List[str]] = field(default_factory=dict)
    namespace_collisions: Dict[str, List[str]] = field(default_factory=dict)

    # Handler state
    detached_namespaces: List[str] = field(default_factory=list)
    pending_statements: Dict[str, int] = field(default_factory=dict)

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_console(console: Console) -> ConsoleReport:
    """
    Inventory a console and flag names users cannot reach unambiguously.

    Returns a ConsoleReport with counts, hazards and warnings.
    """
    report = ConsoleReport(app_name=console.app_name)
    namespace_names = {ns.name for ns in console.namespaces}
    owners: Dict[str, List[str]] = defaultdict(list)

    for namespace in console.namespaces:
        report.total_namespaces += 1
        for obj in namespace.objects:
            owners[obj.name].append(namespace.name)
            if isinstance(obj, Command):
                report.total_commands += 1
            elif isinstance(obj, Variable):
                report.total_variables += 1
                if obj.is_modified():
                    report.modified_variables.append(obj.qualified_name)

        if not namespace.attached:
            report.detached_namespaces.append(namespace.name)
        if namespace.pending:
            report.pending_statements[namespace.name] = len(namespace.pending)

    for name, namespaces in owners.items():
        if len(namespaces) > 1:
            report.shadowed_names[name] = namespaces
        if name in namespace_names:
            report.namespace_collisions[name] = namespaces

    for name, namespaces in report.shadowed_names.items():
        report.add_warning(
            f"Ambiguous name '{name}': use one of "
            + ", ".join(f"{ns}.{name}" for ns in namespaces)
        )
    for name, namespaces in report.namespace_collisions.items():
        report.add_warning(
            f"'{name}' lists the namespace; use "
            + ", ".join(f"{ns}.{name}" for ns in namespaces)
        )
    for name, count in report.pending_statements.items():
        report.add_warning(f"Namespace '{name}' has {count} pending statement(s) awaiting a handler")
        if count >= console.config.max_pending:
            report.add_warning(f"Pending queue of '{name}' is full; further statements are dropped")

    return report


__all__ = ["ConsoleReport", "analyze_console"]
