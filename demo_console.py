#!/usr/bin/env python3
"""
Demo: run the example console from the command line.

    python demo_console.py -demo.dummy 5 -video.width 1280 video
    python demo_console.py -- -video.width       (stray args go to help)

Arguments become console statements. They run before the handlers are
attached, so callbacks fire only once attach_handlers() replays them.
Afterwards, lines typed on stdin are executed until EOF.
"""

import logging
import os
import sys

from cvarcon.analyzer import analyze_console
from cvarcon.examples import attach_handlers, build_example_console


def print_report(report):
    """Pretty-print a ConsoleReport."""
    print()
    print("=" * 70)
    print(f"CONSOLE REPORT: {report.app_name}")
    print("=" * 70)
    print(f"  Namespaces:          {report.total_namespaces}")
    print(f"  Commands:            {report.total_commands}")
    print(f"  Variables:           {report.total_variables}")
    print(f"  Modified:            {', '.join(report.modified_variables) or 'None'}")
    print(f"  Detached namespaces: {', '.join(report.detached_namespaces) or 'None'}")
    if report.warnings:
        print()
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
    print()


def main(argv):
    debug = "CVARCON_DEBUG" in os.environ
    logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING)

    console = build_example_console()
    console.parse_args(argv, default_command="console.help")
    attach_handlers(console)

    print_report(analyze_console(console))

    if sys.stdin.isatty():
        print("Type statements, Ctrl-D to quit.")
    for line in sys.stdin:
        if line.strip():
            console.execute(line)

    print()
    print("Modified variables:")
    sys.stdout.write(console.dumps() or "(none)\n")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
