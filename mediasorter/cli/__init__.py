"""
CLI package for Media Sorter.

Provides the command-line interface for scanning folders and moving
reviewed files to the system trash.

Public API:
- main: Entry point for CLI execution
- CLIOrchestrator: CLI workflow orchestration class
- print_scan_report / print_trash_report: Result display
"""

from __future__ import annotations

from typing import Optional

from .orchestrator import CLIOrchestrator, setup_logging
from .arg_parser import create_parser, parse_arguments
from .reporting import print_scan_report, print_trash_report
from .interactive import prompt_for_roots, confirm_action


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    orchestrator = CLIOrchestrator(argv)
    return orchestrator.run()


__all__ = [
    'main',
    'CLIOrchestrator',
    'setup_logging',
    'create_parser',
    'parse_arguments',
    'print_scan_report',
    'print_trash_report',
    'prompt_for_roots',
    'confirm_action',
]
