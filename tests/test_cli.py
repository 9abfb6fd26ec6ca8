# test_cli.py -- tests for gitnotes.cli
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

"""Tests for gitnotes.cli."""

import io
import logging
import os
import shutil
import sys
import tempfile
from unittest.mock import patch

from dulwich.repo import Repo

from gitnotes import cli
from gitnotes.log_utils import _GITNOTES_LOGGER, _NULL_HANDLER

from . import TestCase
from .utils import SOME_NOTES, build_history

NOTES_REF = b"refs/notes/test/append"


class GitNotesCliTestCase(TestCase):
    """Base class for CLI tests."""

    def setUp(self) -> None:
        super().setUp()
        # main() configures logging for the whole process.
        self.addCleanup(
            setattr, _GITNOTES_LOGGER, "handlers", list(_GITNOTES_LOGGER.handlers)
        )
        root_logger = logging.getLogger()
        self.addCleanup(setattr, root_logger, "handlers", list(root_logger.handlers))
        self.addCleanup(root_logger.setLevel, root_logger.level)
        self.test_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.test_dir)
        self.repo_path = os.path.join(self.test_dir, "repo")
        os.mkdir(self.repo_path)
        self.repo = Repo.init(self.repo_path)
        self.addCleanup(self.repo.close)
        self.initial, self.another_folder, self.head = build_history(self.repo)

    def _run_cli(self, *args):
        """Run CLI command and capture output."""

        class MockStream:
            def __init__(self):
                self._buffer = io.BytesIO()
                self.buffer = self._buffer

            def write(self, data):
                if isinstance(data, bytes):
                    self._buffer.write(data)
                else:
                    self._buffer.write(data.encode("utf-8"))

            def getvalue(self):
                value = self._buffer.getvalue()
                try:
                    return value.decode("utf-8")
                except UnicodeDecodeError:
                    return value

            def __getattr__(self, name):
                return getattr(self._buffer, name)

        old_stdout = sys.stdout
        old_stderr = sys.stderr
        old_cwd = os.getcwd()

        try:
            sys.stdout = MockStream()
            sys.stderr = MockStream()
            os.chdir(self.repo_path)
            result = cli.main(list(args))
            return result, sys.stdout.getvalue(), sys.stderr.getvalue()
        finally:
            sys.stdout = old_stdout
            sys.stderr = old_stderr
            os.chdir(old_cwd)

    def read_note(self, object_id, ref=NOTES_REF):
        return self.repo.notes.get_note(object_id, ref)

    def file_id(self, commit, path):
        return self.repo[commit.tree].lookup_path(
            self.repo.object_store.__getitem__, path
        )[1]


class HelpTest(GitNotesCliTestCase):
    def test_no_arguments(self):
        result, stdout, _stderr = self._run_cli()
        self.assertEqual(1, result)
        self.assertIn("append", stdout)

    def test_unknown_command(self):
        result, _stdout, _stderr = self._run_cli("frobnicate")
        self.assertEqual(1, result)


class AppendCommandTest(GitNotesCliTestCase):
    def test_object(self):
        result, _stdout, _stderr = self._run_cli(
            "append",
            "--ref",
            "test/append",
            "--object",
            self.initial.id[:7].decode("ascii"),
            "-m",
            "Reviewed",
        )
        self.assertEqual(0, result)
        self.assertEqual(b"Reviewed\n", self.read_note(self.initial.id))

    def test_commit(self):
        result, _stdout, _stderr = self._run_cli(
            "append", "--ref", "test/append", "--commit", "Initial commit", "-m", "one"
        )
        self.assertEqual(0, result)
        self._run_cli(
            "append", "--ref", "test/append", "--commit", "Initial commit", "-m", "two"
        )
        self.assertEqual(b"one\n\ntwo\n", self.read_note(self.initial.id))

    def test_file(self):
        result, _stdout, _stderr = self._run_cli(
            "append",
            "--ref",
            "test/append",
            "--file",
            "LICENSE",
            "--at",
            "Initial commit",
            "-m",
            "licence",
        )
        self.assertEqual(0, result)
        self.assertEqual(
            b"licence\n", self.read_note(self.file_id(self.initial, b"LICENSE"))
        )

    def test_folder(self):
        result, _stdout, _stderr = self._run_cli(
            "append",
            "--ref",
            "test/append",
            "--folder",
            ".github",
            "--at",
            "another folder",
            "-m",
            "workflows",
        )
        self.assertEqual(0, result)
        self.assertEqual(
            b"workflows\n",
            self.read_note(self.file_id(self.another_folder, b".github")),
        )

    def test_message_from_file(self):
        path = os.path.join(self.test_dir, "note.txt")
        with open(path, "wb") as f:
            f.write(SOME_NOTES.encode("utf-8"))
        result, _stdout, _stderr = self._run_cli(
            "append", "--ref", "test/append", "--object", "HEAD", "-F", path
        )
        self.assertEqual(0, result)
        self.assertEqual(SOME_NOTES.encode("utf-8"), self.read_note(self.head.id))

    def test_message_file_missing(self):
        result, _stdout, _stderr = self._run_cli(
            "append",
            "--ref",
            "test/append",
            "--object",
            "HEAD",
            "-F",
            os.path.join(self.test_dir, "missing.txt"),
        )
        self.assertEqual(cli.EXIT_READ_FAILED, result)
        self.assertNotIn(NOTES_REF, self.repo.refs.allkeys())

    def test_message_from_stdin(self):
        stdin = io.TextIOWrapper(io.BytesIO(b"from stdin\n"))
        with patch.object(sys, "stdin", stdin):
            result, _stdout, _stderr = self._run_cli(
                "append", "--ref", "test/append", "--object", "HEAD", "-F", "-"
            )
        self.assertEqual(0, result)
        self.assertEqual(b"from stdin\n", self.read_note(self.head.id))

    def test_no_stripspace(self):
        self._run_cli(
            "append",
            "--ref",
            "test/append",
            "--object",
            "HEAD",
            "-m",
            "spaced   ",
            "--no-stripspace",
        )
        self.assertEqual(b"spaced   ", self.read_note(self.head.id))

    def test_default_ref(self):
        result, _stdout, _stderr = self._run_cli(
            "append", "--object", "HEAD", "-m", "default"
        )
        self.assertEqual(0, result)
        self.assertEqual(
            b"default\n", self.read_note(self.head.id, b"refs/notes/commits")
        )

    def test_missing_object(self):
        result, _stdout, _stderr = self._run_cli(
            "append", "--ref", "test/append", "--object", "fffffff", "-m", "nope"
        )
        self.assertEqual(cli.EXIT_NOT_FOUND, result)
        self.assertNotIn(NOTES_REF, self.repo.refs.allkeys())

    def test_missing_commit(self):
        result, _stdout, _stderr = self._run_cli(
            "append", "--ref", "test/append", "--commit", "( ͡° ͜ʖ ͡°)", "-m", "nope"
        )
        self.assertEqual(cli.EXIT_NOT_FOUND, result)
        self.assertNotIn(NOTES_REF, self.repo.refs.allkeys())

    def test_folder_as_file(self):
        result, _stdout, _stderr = self._run_cli(
            "append",
            "--ref",
            "test/append",
            "--file",
            ".github",
            "--at",
            "HEAD",
            "-m",
            "nope",
        )
        self.assertEqual(cli.EXIT_NOT_FOUND, result)

    def test_invalid_ref(self):
        result, _stdout, _stderr = self._run_cli(
            "append", "--ref", "bad..name", "--object", "HEAD", "-m", "nope"
        )
        self.assertEqual(cli.EXIT_APPEND_FAILED, result)

    def test_file_without_at(self):
        with self.assertRaises(SystemExit) as cm:
            self._run_cli(
                "append", "--ref", "test/append", "--file", "LICENSE", "-m", "nope"
            )
        self.assertEqual(2, cm.exception.code)

    def test_no_message(self):
        with self.assertRaises(SystemExit) as cm:
            self._run_cli("append", "--object", "HEAD")
        self.assertEqual(2, cm.exception.code)


class ShowCommandTest(GitNotesCliTestCase):
    def test_show(self):
        self._run_cli(
            "append", "--ref", "test/append", "--object", "HEAD", "-m", "shown"
        )
        result, stdout, _stderr = self._run_cli(
            "show", "--ref", "test/append", "--commit", "README"
        )
        self.assertEqual(0, result)
        self.assertEqual("shown\n", stdout)

    def test_show_without_note(self):
        result, stdout, _stderr = self._run_cli(
            "show", "--ref", "test/append", "--object", "HEAD"
        )
        self.assertEqual(cli.EXIT_NOT_FOUND, result)
        self.assertEqual("", stdout)


class RemoveCommandTest(GitNotesCliTestCase):
    def test_remove(self):
        self._run_cli(
            "append", "--ref", "test/append", "--object", "HEAD", "-m", "gone"
        )
        result, _stdout, _stderr = self._run_cli(
            "remove", "--ref", "test/append", "--object", "HEAD"
        )
        self.assertEqual(0, result)
        self.assertIsNone(self.read_note(self.head.id))

    def test_remove_without_note(self):
        result, _stdout, _stderr = self._run_cli(
            "remove", "--ref", "test/append", "--object", "HEAD"
        )
        self.assertEqual(0, result)


class LoggingTest(GitNotesCliTestCase):
    def test_logging_restored(self):
        before = list(_GITNOTES_LOGGER.handlers)
        self._run_cli("resolve", "--object", "HEAD")
        self.assertNotIn(_NULL_HANDLER, _GITNOTES_LOGGER.handlers)
        self.doCleanups()
        self.assertEqual(before, _GITNOTES_LOGGER.handlers)


class ResolveCommandTest(GitNotesCliTestCase):
    def test_object(self):
        result, stdout, _stderr = self._run_cli(
            "resolve", "--object", self.initial.id[:7].decode("ascii")
        )
        self.assertEqual(0, result)
        self.assertEqual(self.initial.id.decode("ascii") + "\n", stdout)

    def test_folder(self):
        result, stdout, _stderr = self._run_cli(
            "resolve", "--folder", ".github", "--at", "HEAD"
        )
        self.assertEqual(0, result)
        self.assertEqual(
            self.file_id(self.head, b".github").decode("ascii") + "\n", stdout
        )

    def test_missing(self):
        result, stdout, _stderr = self._run_cli("resolve", "--object", "fffffff")
        self.assertEqual(cli.EXIT_NOT_FOUND, result)
        self.assertEqual("", stdout)
