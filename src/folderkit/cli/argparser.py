"""Command-line argument parsing for folderkit.

This module defines the folderkit command-line interface, handling argument parsing,
validation and the translation of exclusion options into an exclusion policy.
"""

import argparse
import os
from typing import List, Optional

from folderkit import __version__
from folderkit.exclusion_rules import (
    BaseExclusionRules,
    CompositeExclusionRules,
    GitIgnoreExclusionRules,
    HiddenExclusionRules,
    NameExclusionRules,
)
from folderkit.file_system_tree.tree_result import TreeKind


def octal_mode(value: str) -> int:
    """Parse a permission mode written in octal, e.g. ``755`` or ``0o755``.

    Raises:
        argparse.ArgumentTypeError: If the value is not an octal number.

    Example:
        >>> octal_mode("755") == 0o755
        True
        >>> octal_mode("0o640") == 0o640
        True
    """
    text = value.lower()
    if text.startswith("0o"):
        text = text[2:]
    try:
        return int(text, 8)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid octal mode: {value!r}")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser with one subcommand per folder operation.
    """
    description = """
    folderkit: enumerate, create, re-permission and delete directory trees.

    Every operation takes a path that is normalized first: separators are unified, '.'
    and '..' segments are resolved, and relative paths are resolved against the root
    directory given with -r/--root (the current directory by default).

    Bulk operations report one outcome per entry. Failures are printed as warnings;
    use -v to see every success as well.
    """

    epilog = """
    Examples:
      # Show a directory tree, skipping hidden entries and anything named node_modules
      folderkit tree -H -x node_modules web

      # List only the files of a tree, one path per line
      folderkit tree --list -k files web

      # Skip entries matching gitignore-style patterns
      folderkit tree -i "*.log" -i "cache/" web
      folderkit tree -g web/.gitignore web

      # Create nested directories with mode 750
      folderkit create -m 750 uploads/2024/06

      # Recursively set mode 755 on everything except files named .htaccess
      folderkit chmod -R -x .htaccess web 755

      # Delete a directory tree, children first, stopping at the first failed directory
      folderkit delete build

      # Save a file listing instead of printing it
      folderkit -o files.txt tree --list -k files web
    """

    parser = argparse.ArgumentParser(
        prog="folderkit",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"folderkit {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "-r",
        "--root",
        metavar="DIR",
        default=os.getcwd(),
        help="Absolute directory that relative paths are resolved against (default: current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every successful operation, not only failures.",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    tree_parser = subparsers.add_parser("tree", help="Enumerate a directory tree.")
    tree_parser.add_argument("path", help="Root of the tree.")
    tree_parser.add_argument(
        "-H",
        "--skip-hidden",
        action="store_true",
        help="Skip entries whose name starts with a dot.",
    )
    tree_parser.add_argument(
        "-x",
        "--exclude-name",
        metavar="NAME",
        action="append",
        default=[],
        help="Skip entries with this basename at any depth (can be specified multiple times).",
    )
    tree_parser.add_argument(
        "-i",
        "--ignore",
        metavar="PATTERN",
        action="append",
        default=[],
        help="Skip entries matching a gitignore-style pattern (can be specified multiple times).",
    )
    tree_parser.add_argument(
        "-g",
        "--ignore-file",
        metavar="FILE",
        action="append",
        default=[],
        help="Skip entries matching the patterns of a .gitignore-style file (can be specified multiple times).",
    )
    tree_parser.add_argument(
        "-k",
        "--kind",
        choices=[kind.value for kind in TreeKind],
        default=TreeKind.ALL.value,
        help="Which entries to report with --list (default: all).",
    )
    tree_parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="Print one path per line in walk order instead of a drawn tree.",
    )

    create_parser_ = subparsers.add_parser("create", help="Create a directory.")
    create_parser_.add_argument("path", help="Directory to create.")
    create_parser_.add_argument(
        "-m", "--mode", type=octal_mode, default=None, help="Octal mode of new directories (default: 755)."
    )
    create_parser_.add_argument(
        "--no-parents",
        action="store_true",
        help="Fail instead of creating missing parent directories.",
    )

    chmod_parser = subparsers.add_parser("chmod", help="Change permission modes.")
    chmod_parser.add_argument("path", help="Path to change.")
    chmod_parser.add_argument("mode", type=octal_mode, help="Octal mode, e.g. 755.")
    chmod_parser.add_argument(
        "-R",
        "--recursive",
        action="store_true",
        help="Change every entry below the path as well.",
    )
    chmod_parser.add_argument(
        "-x",
        "--exclude-name",
        metavar="NAME",
        action="append",
        default=[],
        help="Leave entries with this basename untouched (can be specified multiple times).",
    )

    delete_parser = subparsers.add_parser("delete", help="Delete a directory tree.")
    delete_parser.add_argument("path", help="Directory to delete.")

    return parser


def build_exclusion_rules(args: argparse.Namespace) -> Optional[BaseExclusionRules]:
    """Translate the tree command's exclusion options into one policy.

    Returns:
        None when no exclusion option was given, the single policy when one was, and a
        CompositeExclusionRules otherwise.
    """
    rules: List[BaseExclusionRules] = []
    if args.skip_hidden:
        rules.append(HiddenExclusionRules())
    if args.exclude_name:
        rules.append(NameExclusionRules(args.exclude_name))
    if args.ignore or args.ignore_file:
        rules.append(GitIgnoreExclusionRules(rules_files=args.ignore_file or None, patterns=args.ignore))

    if not rules:
        return None
    if len(rules) == 1:
        return rules[0]
    return CompositeExclusionRules(rules)


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments beyond what argparse checks.

    Raises:
        ValueError: If any argument fails validation.
    """
    if not os.path.isabs(args.root):
        raise ValueError(f"--root must be an absolute directory, got {args.root!r}")
    if not os.path.isdir(args.root):
        raise ValueError(f"--root is not a directory: {args.root}")
