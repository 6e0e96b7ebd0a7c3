"""Subcommand dispatcher for framecompose.

Usage:
    framecompose frame     --manifest frame.yaml --output out.jpg photo.jpg
    framecompose validate  --manifest frame.yaml
"""

import argparse
import sys


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="framecompose",
        description="Manifest-driven photo framing.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands. Each delegates to the frame CLI's main().
    subparsers.add_parser("frame", help="Frame photos using a YAML manifest")
    subparsers.add_parser("validate", help="Check a manifest, its font and logo")

    # Parse only the subcommand name, pass the rest to the subcommand's parser.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    from .cli import main as frame_main

    if parsed.command == "frame":
        frame_main(remaining)
    elif parsed.command == "validate":
        frame_main([*remaining, "--validate"])


if __name__ == "__main__":
    main()
