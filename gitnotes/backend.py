# backend.py -- Repository primitives used by gitnotes
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

"""Repository primitives.

RepoBackend is the only place that talks to the object store. It offers
object lookup, commit search, tree entry lookup and note read/append/remove
on top of a dulwich repository.
"""

__all__ = [
    "AppendFailed",
    "RepoBackend",
]

import os
import stat
from collections.abc import Callable, Iterator, Sequence
from typing import TYPE_CHECKING

from dulwich.errors import NotTreeError
from dulwich.object_store import tree_lookup_path
from dulwich.objects import Commit, Tag, Tree
from dulwich.objectspec import AmbiguousShortId, parse_ref
from dulwich.repo import BaseRepo, Repo

from . import log_utils
from .errors import GitNotesError
from .namespace import check_notes_ref

if TYPE_CHECKING:
    from dulwich.config import StackedConfig

logger = log_utils.getLogger(__name__)

APPEND_MESSAGE = b"Notes added by 'git notes append'"
REMOVE_MESSAGE = b"Notes removed by 'git notes remove'"

# Shortest abbreviation git accepts for an object id.
MIN_ABBREV = 4

# Hex lengths of SHA-1 and SHA-256 object ids.
HEXSHA_LENGTHS = (40, 64)


class AppendFailed(GitNotesError):
    """The store rejected a note write."""

    def __init__(self, ref: bytes, reason: str) -> None:
        """Initialize an AppendFailed exception.

        Args:
            ref: The notes ref that was being written
            reason: Why the write failed
        """
        self.ref = ref
        self.reason = reason
        super().__init__(
            f"Unable to append note to {ref.decode('utf-8', 'replace')}: {reason}"
        )


def _is_hex(identifier: bytes) -> bool:
    return all(c in b"0123456789abcdefABCDEF" for c in identifier)


class RepoBackend:
    """Object store primitives on top of a dulwich repository."""

    def __init__(self, repo: BaseRepo, owned: bool = False) -> None:
        """Initialize a RepoBackend.

        Args:
          repo: Repository to operate on
          owned: Whether close() should also close the repository
        """
        self.repo = repo
        self._owned = owned

    @classmethod
    def from_path(cls, path: str | os.PathLike) -> "RepoBackend":
        """Open the repository at path; the backend owns it."""
        return cls(Repo(os.fspath(path)), owned=True)

    def close(self) -> None:
        """Close the repository if this backend opened it."""
        if self._owned:
            self.repo.close()

    def __enter__(self) -> "RepoBackend":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def get_config(self) -> "StackedConfig":
        """Return the configuration stack of the repository."""
        return self.repo.get_config_stack()

    def lookup_object(self, identifier: bytes) -> bytes | None:
        """Expand an object id, abbreviation or ref name to a full object id.

        Args:
          identifier: Full or abbreviated hex object id, or a ref name
        Returns: The full hex object id, or None if nothing matches
        Raises:
          AmbiguousShortId: if an abbreviation matches more than one object
        """
        object_store = self.repo.object_store
        if _is_hex(identifier) and len(identifier) >= MIN_ABBREV:
            hexsha = identifier.lower()
            if len(hexsha) in HEXSHA_LENGTHS and hexsha in object_store:
                return hexsha
            matches = sorted(object_store.iter_prefix(hexsha))
            if len(matches) == 1:
                return matches[0]
            if len(matches) > 1:
                raise AmbiguousShortId(hexsha, [object_store[m] for m in matches])
        try:
            ref = parse_ref(self.repo.refs, identifier)
        except (KeyError, ValueError):
            return None
        try:
            return self.repo.refs[ref]
        except KeyError:
            return None

    def search_commits(
        self,
        predicate: Callable[[Commit], bool],
        include: Sequence[bytes] | None = None,
    ) -> Iterator[bytes]:
        """Find commits matching a predicate.

        Args:
          predicate: Called with each commit; matching commits are yielded
          include: Commits to start walking from (defaults to HEAD)
        Returns: Iterator over matching commit ids, most recent first
        """
        if include is None:
            try:
                include = [self.repo.head()]
            except KeyError:
                # Unborn HEAD, so there is no history to search.
                return
        for entry in self.repo.get_walker(include=include):
            if predicate(entry.commit):
                yield entry.commit.id

    def read_tree_entry(
        self, commit_id: bytes, path: bytes
    ) -> tuple[int, bytes] | None:
        """Look up the entry at a path in a commit's tree.

        Args:
          commit_id: Id of a commit, a tag pointing at one, or a tree
          path: Slash-separated path; empty for the root tree
        Returns: Tuple of (mode, object id), or None if there is no such entry
        """
        object_store = self.repo.object_store
        try:
            obj = object_store[commit_id]
            while isinstance(obj, Tag):
                _obj_type, obj_sha = obj.object
                obj = object_store[obj_sha]
        except KeyError:
            return None
        if isinstance(obj, Commit):
            tree_id = obj.tree
        elif isinstance(obj, Tree):
            tree_id = obj.id
        else:
            return None

        path = path.strip(b"/")
        if not path:
            return (stat.S_IFDIR, tree_id)
        try:
            return tree_lookup_path(object_store.__getitem__, tree_id, path)
        except (KeyError, NotTreeError):
            return None

    def read_note(self, object_id: bytes, ref: bytes) -> bytes | None:
        """Read the note attached to an object, or None if there is none."""
        return self.repo.notes.get_note(object_id, ref)

    def append_note(
        self,
        object_id: bytes,
        ref: bytes,
        content: bytes,
        message: bytes | None = None,
        separator: bytes = b"\n",
    ) -> bytes:
        """Append to the note attached to an object.

        An existing note is kept and the new content is added after it,
        separated by a blank line. Without an existing note this creates one.

        Args:
          object_id: Full hex id of the object to annotate
          ref: Full notes ref name
          content: Text to append
          message: Message for the notes commit
          separator: Inserted between the existing note and the new content
        Returns: Id of the new notes commit
        Raises:
          AppendFailed: if the ref name is invalid or the write fails
        """
        if not check_notes_ref(ref):
            raise AppendFailed(ref, "invalid notes ref name")
        if message is None:
            message = APPEND_MESSAGE

        notes = self.repo.notes
        try:
            existing = notes.get_note(object_id, ref)
        except (KeyError, ValueError) as e:
            raise AppendFailed(ref, f"unable to read existing note: {e}") from e
        if existing:
            if not existing.endswith(b"\n"):
                existing += b"\n"
            content = existing + separator + content

        try:
            commit_id = notes.set_note(
                object_id,
                content,
                ref,
                message=message,
                config=self.get_config(),
            )
        except (OSError, KeyError, ValueError) as e:
            raise AppendFailed(ref, str(e)) from e
        logger.info(
            "Appended note to %s in %s",
            object_id.decode("ascii"),
            ref.decode("utf-8", "replace"),
        )
        return commit_id

    def remove_note(self, object_id: bytes, ref: bytes) -> bytes | None:
        """Remove the note attached to an object.

        Returns: Id of the new notes commit, or None if there was no note
        """
        commit_id = self.repo.notes.remove_note(
            object_id, ref, message=REMOVE_MESSAGE, config=self.get_config()
        )
        if commit_id is not None:
            logger.info(
                "Removed note from %s in %s",
                object_id.decode("ascii"),
                ref.decode("utf-8", "replace"),
            )
        return commit_id
