"""Command-line interface for folderkit.

This module provides the folderkit command, which exposes the Folder operations: drawing
or listing a directory tree, creating directories, changing permission modes and
deleting directory trees.

Signal Handling Notes:
    - SIGINT: cancels the running operation between two entries; the outcome so far is
      still reported
    - SIGPIPE: handled when the output pipe is closed (e.g., when piping to `head`) on
      Unix-like systems

Exit Codes:
    0: Successful completion
    1: The operation failed or reported failures
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    $ folderkit tree -H /path/to/dir
    $ folderkit -r /srv/www chmod -R uploads 750
    $ folderkit delete /tmp/build
    $ folderkit -o dirs.txt tree --list -k dirs /srv/www
"""

import argparse
import logging
import sys
from typing import Callable, Dict, List, Optional

from folderkit.cli.argparser import build_exclusion_rules, create_parser, validate_args
from folderkit.cli.safe_writer import SafeWriter
from folderkit.cli.signal_handler import setup_signal_handling, signal_handler
from folderkit.config import FolderConfig
from folderkit.file_system_tree.file_system_tree import FileSystemTree
from folderkit.file_system_tree.tree_result import TreeKind
from folderkit.folder import Folder

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; successes are only shown when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def run_tree(folder: Folder, args: argparse.Namespace, writer: SafeWriter) -> int:
    exclusion_rules = build_exclusion_rules(args)

    if args.list:
        # folder.tree records its own failure, which the log handler prints
        result = folder.tree(args.path, exclusion_rules, TreeKind(args.kind))
        writer.write_lines(result.paths)
    else:
        fs_tree = FileSystemTree(folder.normalize(args.path), exclusion_rules, cancel_event=folder.cancel_event)
        result = fs_tree.get_result()
        if result.found:
            writer.write_lines(fs_tree.stream_tree_representation())
            writer.write(f"\n{fs_tree.get_directory_count()} directories, {fs_tree.get_file_count()} files\n")
        if not result.ok:
            logger.error("%s (%s)", result.error, result.status.value)

    return 0 if result.ok else 1


def run_create(folder: Folder, args: argparse.Namespace, writer: SafeWriter) -> int:
    return 0 if folder.create(args.path, args.mode, recursive=not args.no_parents) else 1


def run_chmod(folder: Folder, args: argparse.Namespace, writer: SafeWriter) -> int:
    succeeded = folder.set_chmod(args.path, args.mode, recursive=args.recursive, exceptions=args.exclude_name)
    return 0 if succeeded else 1


def run_delete(folder: Folder, args: argparse.Namespace, writer: SafeWriter) -> int:
    result = folder.delete(args.path)
    summary = f"{len(result.removed)} entries removed"
    if not result:
        summary += f", {len(result.remaining)} remaining"
    writer.write(summary + "\n")
    return 0 if result else 1


COMMANDS: Dict[str, Callable[[Folder, argparse.Namespace, SafeWriter], int]] = {
    "tree": run_tree,
    "create": run_create,
    "chmod": run_chmod,
    "delete": run_delete,
}


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the folderkit command-line interface.

    Args:
        argv: Arguments to parse instead of ``sys.argv[1:]``.
    """
    setup_signal_handling()
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    exit_code = 0
    try:
        validate_args(args)
        folder = Folder(FolderConfig(args.root), cancel_event=signal_handler.cancel_event)
        output_file = args.output if args.output else sys.stdout.fileno()
        with SafeWriter(output_file) as safe_writer:
            try:
                exit_code = COMMANDS[args.command](folder, args, safe_writer)
            except BrokenPipeError:
                pass  # SafeWriter will automatically close in the context manager
    except ValueError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(2)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    # Handle exit codes based on received signals
    if signal_handler.sigpipe_received.is_set():
        sys.exit(141)
    elif signal_handler.sigint_received.is_set():
        sys.exit(130)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
