"""
CLI workflow orchestration for Media Sorter.

Provides the CLIOrchestrator class that coordinates the 'scan' and 'trash'
commands from argument parsing through final reporting.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from ..api.orchestrator import scan, scan_selection, trash
from ..models import ScanResult
from ..scanner import find_exact_duplicates, find_similar_groups
from ..scanner.dependencies import HAS_TQDM, _tqdm_class
from ..user_config import get_user_config
from ..utils import validators
from .arg_parser import parse_arguments
from .interactive import prompt_for_roots, confirm_action
from .reporting import print_scan_report, print_trash_report


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI workflow.

    Returns process exit codes instead of raising so main() stays trivial.
    """

    def __init__(self, argv: Optional[list[str]] = None):
        self.argv = argv
        self.logger = None
        self.args = None

    def run(self) -> int:
        """
        Execute the selected command.

        Returns:
            Exit code (0 for success, 1 for error)
        """
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)

        if self.args.command == 'scan':
            return self._scan_command()
        return self._trash_command()

    # -- scan -----------------------------------------------------------------

    def _scan_command(self) -> int:
        config = get_user_config()
        threshold = self.args.threshold if self.args.threshold is not None else config.default_threshold
        workers = self.args.workers or config.default_workers

        roots = [str(root.expanduser().resolve()) for root in self.args.roots]
        is_valid, error = validators.validate_scan_params(roots, threshold=threshold, workers=workers)
        if not is_valid:
            self.logger.error(error)
            return 1

        show_progress = not self.args.no_progress
        if roots:
            result = scan(roots, max_workers=workers, show_progress=show_progress)
        else:
            result = scan_selection(prompt_for_roots, max_workers=workers, show_progress=show_progress)
            if not result.roots:
                self.logger.info("No folders selected. Nothing to do.")
                return 0

        exact_groups = find_exact_duplicates(result.items)
        similar_groups = find_similar_groups(result.items, threshold=threshold)
        print_scan_report(result, exact_groups, similar_groups)

        if self.args.json_path:
            return self._export_json(result, exact_groups, similar_groups)
        return 0

    def _export_json(self, result: ScanResult, exact_groups, similar_groups) -> int:
        payload = result.to_dict()
        payload['exactGroups'] = [g.to_dict() for g in exact_groups]
        payload['similarGroups'] = [g.to_dict() for g in similar_groups]
        try:
            with open(self.args.json_path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except (OSError, UnicodeError) as e:
            self.logger.error(f"Cannot write {self.args.json_path}: {e}")
            return 1
        self.logger.info(f"Results exported to: {self.args.json_path}")
        return 0

    # -- trash ----------------------------------------------------------------

    def _trash_command(self) -> int:
        paths = [str(path.expanduser().absolute()) for path in self.args.paths]

        if not self.args.yes and not confirm_action('move to trash', len(paths)):
            self.logger.info("Aborted.")
            return 0

        pbar = None
        if HAS_TQDM and _tqdm_class is not None:
            pbar = _tqdm_class(total=len(paths), desc="Moving to trash", unit="file", ncols=80)

        def on_progress(progress):
            if pbar is not None and progress.processed > 0:
                pbar.update(1)

        try:
            result = trash(paths, progress_callback=on_progress)
        finally:
            if pbar is not None:
                pbar.close()

        print_trash_report(result)
        return 1 if result.failed_paths else 0


__all__ = ['CLIOrchestrator', 'setup_logging']
