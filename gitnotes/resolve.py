# resolve.py -- Resolve locators to object ids
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

"""Resolve locators to object ids."""

__all__ = [
    "AmbiguousIdentifier",
    "NotFound",
    "Resolver",
]

import stat

from dulwich.objects import S_ISGITLINK
from dulwich.objectspec import AmbiguousShortId

from . import log_utils
from .backend import RepoBackend
from .errors import GitNotesError
from .locators import (
    CommitLocator,
    CommitMessage,
    FileAt,
    FolderAt,
    Hash,
    Locator,
    to_bytes,
)

logger = log_utils.getLogger(__name__)


class NotFound(GitNotesError, KeyError):
    """A locator did not resolve to an object."""

    def __init__(self, locator: Locator, reason: str | None = None) -> None:
        """Initialize a NotFound exception.

        Args:
          locator: The locator that failed to resolve
          reason: Optional detail on why it failed
        """
        self.locator = locator
        message = f"No object found for {locator}"
        if reason is not None:
            message += f": {reason}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class AmbiguousIdentifier(NotFound):
    """An abbreviated object id matches more than one object."""

    def __init__(self, locator: Hash, candidates: list[bytes]) -> None:
        self.candidates = candidates
        super().__init__(
            locator,
            "ambiguous, candidates are "
            + ", ".join(c.decode("ascii") for c in candidates),
        )


class Resolver:
    """Map locators to object ids.

    All lookups are read-only.
    """

    def __init__(self, backend: RepoBackend) -> None:
        self.backend = backend

    def resolve(self, locator: Locator) -> bytes:
        """Resolve any kind of locator.

        Args:
          locator: A Hash, CommitMessage, FileAt or FolderAt
        Returns: Full hex id of the object
        Raises:
          NotFound: if the locator does not name an object
        """
        if isinstance(locator, Hash):
            return self.resolve_hash(locator.identifier)
        elif isinstance(locator, CommitMessage):
            return self.resolve_commit(locator.substring)
        elif isinstance(locator, FileAt):
            return self.resolve_file(locator.path, locator.commit)
        elif isinstance(locator, FolderAt):
            return self.resolve_folder(locator.path, locator.commit)
        raise TypeError(f"Not a locator: {locator!r}")

    def resolve_hash(self, identifier: str | bytes) -> bytes:
        """Resolve an object id, abbreviated object id or ref name.

        Raises:
          NotFound: if no such object exists
          AmbiguousIdentifier: if an abbreviation matches several objects
        """
        locator = Hash(identifier)
        if not identifier:
            raise NotFound(locator, "empty object id")
        try:
            object_id = self.backend.lookup_object(to_bytes(identifier))
        except AmbiguousShortId as e:
            raise AmbiguousIdentifier(locator, [o.id for o in e.options]) from e
        if object_id is None:
            raise NotFound(locator)
        logger.debug("Resolved %s to %s", locator, object_id.decode("ascii"))
        return object_id

    def resolve_commit(self, message: str | bytes) -> bytes:
        """Find the most recent commit whose message contains a substring.

        History is walked from HEAD newest first, so when several commits
        match the one with the latest commit date wins.

        Raises:
          NotFound: if the substring is empty or no commit message contains it
        """
        locator = CommitMessage(message)
        if not message:
            raise NotFound(locator, "empty commit message")
        needle = to_bytes(message)
        for commit_id in self.backend.search_commits(
            lambda commit: needle in commit.message
        ):
            logger.debug("Resolved %s to %s", locator, commit_id.decode("ascii"))
            return commit_id
        raise NotFound(locator)

    def resolve_file(self, path: str | bytes, commit: CommitLocator) -> bytes:
        """Find the blob at a path in a commit.

        Raises:
          NotFound: if the commit does not resolve, or the path is missing
            or is not a file
        """
        locator = FileAt(path, commit)
        mode, object_id = self._read_entry(locator)
        if stat.S_ISDIR(mode) or S_ISGITLINK(mode):
            raise NotFound(locator, "not a file")
        return object_id

    def resolve_folder(self, path: str | bytes, commit: CommitLocator) -> bytes:
        """Find the tree at a path in a commit.

        An empty path names the root tree of the commit.

        Raises:
          NotFound: if the commit does not resolve, or the path is missing
            or is not a folder
        """
        locator = FolderAt(path, commit)
        mode, object_id = self._read_entry(locator)
        if not stat.S_ISDIR(mode):
            raise NotFound(locator, "not a folder")
        return object_id

    def _read_entry(self, locator: FileAt | FolderAt) -> tuple[int, bytes]:
        try:
            commit_id = self._resolve_commitish(locator.commit)
        except NotFound as e:
            raise NotFound(locator, str(e)) from e
        entry = self.backend.read_tree_entry(commit_id, to_bytes(locator.path))
        if entry is None:
            raise NotFound(locator)
        logger.debug("Resolved %s to %s", locator, entry[1].decode("ascii"))
        return entry

    def _resolve_commitish(self, commit: CommitLocator) -> bytes:
        """Resolve the commit part of a file or folder locator.

        Plain strings are tried as an object id first and as a commit
        message second.
        """
        if isinstance(commit, (Hash, CommitMessage)):
            return self.resolve(commit)
        try:
            return self.resolve_hash(commit)
        except AmbiguousIdentifier:
            raise
        except NotFound:
            return self.resolve_commit(commit)
