"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
media sorter command-line interface.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ..config import DEFAULT_THRESHOLD, DEFAULT_WORKERS


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance with 'scan' and 'trash' commands
    """
    parser = argparse.ArgumentParser(
        description='Find duplicate and similar media, then trash what you reviewed',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s scan ~/Pictures ~/Videos
      Scan two folders and report exact and similar groups

  %(prog)s scan ~/Pictures --threshold 5 --json results.json
      Strict matching, save all items and groups as JSON

  %(prog)s scan
      Prompt for the folders to scan

  %(prog)s trash ~/Pictures/IMG_1.jpg ~/Pictures/IMG_1_copy.jpg
      Move reviewed files to the system trash (asks for confirmation)
        """
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    scan_parser = subparsers.add_parser('scan', help='Scan folders for media files')
    scan_parser.add_argument(
        'roots',
        type=Path,
        nargs='*',
        help='Folders to scan (prompted for if omitted)'
    )
    scan_parser.add_argument(
        '-t', '--threshold',
        type=int,
        default=None,
        help=f'Similarity threshold (0-64, lower=stricter). Default: {DEFAULT_THRESHOLD}'
    )
    scan_parser.add_argument(
        '-w', '--workers',
        type=int,
        default=None,
        help=f'Number of concurrent hashing workers. Default: {DEFAULT_WORKERS}'
    )
    scan_parser.add_argument(
        '--json',
        type=Path,
        dest='json_path',
        help='Write items and groups to a JSON file'
    )
    scan_parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    trash_parser = subparsers.add_parser('trash', help='Move reviewed files to the system trash')
    trash_parser.add_argument(
        'paths',
        type=Path,
        nargs='+',
        help='Files to move to trash, processed in the given order'
    )
    trash_parser.add_argument(
        '-y', '--yes',
        action='store_true',
        help='Do not ask for confirmation'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Examples:
        >>> args = parse_arguments(['scan', '/path/to/photos', '--threshold', '5'])
        >>> args.threshold
        5
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
