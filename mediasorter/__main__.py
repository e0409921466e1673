"""
Allow running the package with: python -m mediasorter

By default, launches the API server. Use 'cli' subcommand for command-line interface.

Examples:
    python -m mediasorter                          # Launch API server
    python -m mediasorter gui                      # Launch API server (explicit)
    python -m mediasorter cli scan ~/Pictures      # Scan from the command line
    python -m mediasorter cli trash a.jpg b.jpg    # Move reviewed files to trash
    python -m mediasorter config --init            # Create example config file
"""

import sys


def main():
    if len(sys.argv) > 1 and sys.argv[1] == 'cli':
        # Remove 'cli' from argv so argparse doesn't see it
        sys.argv.pop(1)
        from .cli import main as cli_main
        sys.exit(cli_main())
    elif len(sys.argv) > 1 and sys.argv[1] == 'gui':
        sys.argv.pop(1)
        from .app import main as gui_main
        gui_main()
    elif len(sys.argv) > 1 and sys.argv[1] == 'config':
        sys.argv.pop(1)
        from .user_config import get_user_config

        config = get_user_config()

        if '--init' in sys.argv or '-i' in sys.argv:
            if config.create_example_config():
                print("Created example configuration file at:")
                print(f"  {config.config_file_path}")
            else:
                print("Failed to create configuration file.")
                sys.exit(1)
        else:
            print(f"Configuration file: {config.config_file_path}")
            if config.config_file_path.exists():
                print("Status: found")
            else:
                print("Status: not found (using defaults)")
                print("\nRun 'python -m mediasorter config --init' to create one.")

            print("\nCurrent settings:")
            for name, value in config.as_dict().items():
                print(f"  {name}: {value}")
    else:
        from .app import main as gui_main
        gui_main()


if __name__ == '__main__':
    main()
