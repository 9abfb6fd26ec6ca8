# cli.py -- Command line interface for gitnotes
# Copyright (C) 2026 The gitnotes authors
#
# SPDX-License-Identifier: Apache-2.0 OR GPL-2.0-or-later
# gitnotes is dual-licensed under the Apache License, Version 2.0 and the GNU
# General Public License as published by the Free Software Foundation; version 2.0
# or (at your option) any later version. You can redistribute it and/or
# modify it under the terms of either of these two licenses.
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# You should have received a copy of the licenses; if not, see
# <http://www.gnu.org/licenses/> for a copy of the GNU General Public License
# and <http://www.apache.org/licenses/LICENSE-2.0> for a copy of the Apache
# License, Version 2.0.
#

"""Simple command-line interface to gitnotes.

Each command names its target with one of --object, --commit, --file or
--folder; --file and --folder also need --at to say which commit to look in.
"""

import argparse
import signal
import sys
from collections.abc import Sequence

from . import log_utils
from .backend import AppendFailed
from .handle import notes_append, notes_remove, notes_show, resolve
from .locators import CommitMessage, FileAt, FolderAt, Hash, Locator
from .resolve import NotFound

logger = log_utils.getLogger(__name__)

EXIT_NOT_FOUND = 1
EXIT_APPEND_FAILED = 3
EXIT_READ_FAILED = 4


def signal_int(signal: int, frame) -> None:
    """Handle interrupt signal by exiting."""
    sys.exit(1)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo", default=".", help="Path to the repository (default: .)"
    )
    parser.add_argument(
        "--ref", help="Notes ref (default: core.notesRef or refs/notes/commits)"
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--object", help="Object id, abbreviated id or ref name")
    target.add_argument("--commit", help="Substring of a commit message")
    target.add_argument("--file", help="Path of a file, see --at")
    target.add_argument("--folder", help="Path of a folder, see --at")
    parser.add_argument(
        "--at", help="Commit for --file and --folder: an object id or a message"
    )


def _parse_locator(
    parser: argparse.ArgumentParser, parsed_args: argparse.Namespace
) -> Locator:
    if parsed_args.object is not None:
        return Hash(parsed_args.object)
    if parsed_args.commit is not None:
        return CommitMessage(parsed_args.commit)
    if parsed_args.at is None:
        parser.error("--file and --folder require --at")
    if parsed_args.file is not None:
        return FileAt(parsed_args.file, parsed_args.at)
    return FolderAt(parsed_args.folder, parsed_args.at)


class Command:
    """A gitnotes subcommand."""

    def run(self, args: Sequence[str]) -> int | None:
        """Run the command."""
        raise NotImplementedError(self.run)


class cmd_append(Command):
    """Append a note to an object."""

    def run(self, args: Sequence[str]) -> int | None:
        """Execute the append command.

        Args:
            args: Command line arguments
        """
        parser = argparse.ArgumentParser(prog="gitnotes append")
        _add_common_arguments(parser)
        message = parser.add_mutually_exclusive_group(required=True)
        message.add_argument("-m", "--message", help="Note message")
        message.add_argument(
            "-F", "--file-message", metavar="FILE", help="Read the note from FILE"
        )
        parser.add_argument(
            "--no-stripspace",
            action="store_true",
            help="Do not clean up whitespace in the note",
        )
        parsed_args = parser.parse_args(args)
        locator = _parse_locator(parser, parsed_args)

        if parsed_args.message is not None:
            content: str | bytes = parsed_args.message
        elif parsed_args.file_message == "-":
            content = sys.stdin.buffer.read()
        else:
            try:
                with open(parsed_args.file_message, "rb") as f:
                    content = f.read()
            except OSError as e:
                logger.error(
                    "Unable to read note from %s: %s", parsed_args.file_message, e
                )
                return EXIT_READ_FAILED

        commit_id = notes_append(
            parsed_args.repo,
            locator,
            content,
            ref=parsed_args.ref,
            cleanup=not parsed_args.no_stripspace,
        )
        if commit_id is None:
            logger.info("Empty note, nothing appended")
        return 0


class cmd_show(Command):
    """Show the note attached to an object."""

    def run(self, args: Sequence[str]) -> int | None:
        """Execute the show command.

        Args:
            args: Command line arguments
        """
        parser = argparse.ArgumentParser(prog="gitnotes show")
        _add_common_arguments(parser)
        parsed_args = parser.parse_args(args)
        locator = _parse_locator(parser, parsed_args)

        note = notes_show(parsed_args.repo, locator, ref=parsed_args.ref)
        if note is None:
            logger.info("No notes found for %s", locator)
            return EXIT_NOT_FOUND
        sys.stdout.buffer.write(note)
        return 0


class cmd_remove(Command):
    """Remove the note attached to an object."""

    def run(self, args: Sequence[str]) -> int | None:
        """Execute the remove command.

        Args:
            args: Command line arguments
        """
        parser = argparse.ArgumentParser(prog="gitnotes remove")
        _add_common_arguments(parser)
        parsed_args = parser.parse_args(args)
        locator = _parse_locator(parser, parsed_args)

        if notes_remove(parsed_args.repo, locator, ref=parsed_args.ref):
            logger.info("Removed notes for %s", locator)
        else:
            logger.info("No notes found for %s", locator)
        return 0


class cmd_resolve(Command):
    """Print the object id a locator names."""

    def run(self, args: Sequence[str]) -> int | None:
        """Execute the resolve command.

        Args:
            args: Command line arguments
        """
        parser = argparse.ArgumentParser(prog="gitnotes resolve")
        _add_common_arguments(parser)
        parsed_args = parser.parse_args(args)
        locator = _parse_locator(parser, parsed_args)

        object_id = resolve(parsed_args.repo, locator)
        sys.stdout.buffer.write(object_id + b"\n")
        return 0


commands: dict[str, type[Command]] = {
    "append": cmd_append,
    "remove": cmd_remove,
    "resolve": cmd_resolve,
    "show": cmd_show,
}


def main(argv: Sequence[str] | None = None) -> int | None:
    """Main entry point for the gitnotes CLI.

    Args:
      argv: Command line arguments (defaults to sys.argv[1:])
    Returns: Exit code
    """
    if argv is None:
        argv = sys.argv[1:]

    if not argv or argv[0] in ("-h", "--help"):
        parser = argparse.ArgumentParser(
            prog="gitnotes", description="Append git notes to located objects"
        )
        parser.add_argument(
            "command",
            nargs="?",
            help=f"Command to run. Available: {', '.join(sorted(commands.keys()))}",
        )
        parser.print_help()
        return 1

    log_utils.default_logging_config()

    cmd = argv[0]
    try:
        cmd_kls = commands[cmd]
    except KeyError:
        logger.fatal("No such subcommand: %s", cmd)
        return 1
    try:
        return cmd_kls().run(argv[1:])
    except NotFound as e:
        logger.error("%s", e)
        return EXIT_NOT_FOUND
    except AppendFailed as e:
        logger.error("%s", e)
        return EXIT_APPEND_FAILED


def _main() -> None:
    signal.signal(signal.SIGINT, signal_int)
    sys.exit(main())


if __name__ == "__main__":
    _main()
