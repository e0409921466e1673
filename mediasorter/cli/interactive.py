"""
Interactive prompts for the CLI interface.

Provides the terminal folder-selection surface and action confirmation.
"""

from __future__ import annotations

from pathlib import Path

from ..exceptions import SelectionCancelled


def prompt_for_roots() -> list[str]:
    """
    Interactively prompt the user for folders to scan.

    One folder per line; an empty line finishes the list. Finishing without
    any folder cancels the selection.

    Returns:
        List of absolute directory paths

    Raises:
        SelectionCancelled: If no folder was entered or input was closed
    """
    print("\n" + "=" * 50)
    print("  MEDIA SORTER")
    print("=" * 50)
    print("Enter folders to scan, one per line. Empty line to finish.")

    roots: list[str] = []
    while True:
        try:
            dir_input = input(f"\nFolder {len(roots) + 1}: ").strip()
        except EOFError:
            break
        if not dir_input:
            break

        # Handle quotes around path (common when copy-pasting)
        directory = Path(dir_input.strip('"\'')).expanduser()

        if directory.is_dir():
            roots.append(str(directory.resolve()))
        else:
            print(f"Directory not found: {directory}")

    if not roots:
        raise SelectionCancelled("No folder selected")
    return roots


def confirm_action(action: str, count: int) -> bool:
    """
    Prompt user to confirm a file action.

    Args:
        action: The action to be performed (e.g., 'move to trash')
        count: Number of files that will be affected

    Returns:
        True if user confirms (types 'y'), False otherwise
    """
    confirm = input(f"\nThis will {action} {count:,} files. Continue? [y/N]: ")
    return confirm.lower() == 'y'


__all__ = [
    'prompt_for_roots',
    'confirm_action',
]
