# handle.py -- Append notes to located objects
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

"""Append notes to located objects.

There are three kinds of handle, depending on what is known up front:

 * ObjectNotes is bound to the object to annotate; call append() with the
   note text.
 * TextNotes is bound to the note text; call one of the append_at*() methods
   with the object to annotate.
 * ManualNotes is bound to nothing; call one of the at*() methods to get an
   ObjectNotes and then append() to that.

    notes(repo, target="af23339", ref="test/append").append("Reviewed")
    notes(repo, text="Reviewed").append_at_file("LICENSE", "Initial commit")
    notes(repo).at_commit("Initial commit").append("Reviewed")

All of them resolve the target fully before writing anything, so a target
that can not be found leaves the notes untouched.
"""

__all__ = [
    "ManualNotes",
    "ObjectNotes",
    "TextNotes",
    "append_to",
    "notes",
    "notes_append",
    "notes_remove",
    "notes_show",
    "resolve",
]

import os
from collections.abc import Iterator
from contextlib import contextmanager

from dulwich.repo import BaseRepo
from dulwich.stripspace import stripspace

from . import log_utils
from .backend import RepoBackend
from .locators import (
    CommitLocator,
    CommitMessage,
    FileAt,
    FolderAt,
    Hash,
    Locator,
    to_bytes,
)
from .namespace import default_notes_ref, make_notes_ref
from .resolve import Resolver

logger = log_utils.getLogger(__name__)

RepoLike = BaseRepo | RepoBackend | str | os.PathLike


def _open_backend(repo: RepoLike) -> RepoBackend:
    if isinstance(repo, RepoBackend):
        return repo
    if isinstance(repo, BaseRepo):
        return RepoBackend(repo)
    return RepoBackend.from_path(repo)


@contextmanager
def open_backend_closing(repo: RepoLike) -> Iterator[RepoBackend]:
    """Open a backend, closing it afterwards only if it was opened here."""
    backend = _open_backend(repo)
    try:
        yield backend
    finally:
        if backend is not repo:
            backend.close()


def _prepare_content(content: str | bytes, cleanup: bool) -> bytes:
    content = to_bytes(content)
    if cleanup:
        content = stripspace(content)
    return content


def append_to(
    repo: RepoLike,
    object_id: bytes,
    content: str | bytes,
    ref: str | bytes | None = None,
    cleanup: bool = True,
) -> bytes | None:
    """Append a note to an already resolved object.

    Args:
      repo: Repository, backend or path to a repository
      object_id: Full hex id of the object to annotate
      content: Note text
      ref: Notes namespace (defaults to the configured one)
      cleanup: Whether to clean up whitespace like git stripspace
    Returns: Id of the new notes commit, or None if content was empty
    """
    with open_backend_closing(repo) as backend:
        notes_ref = _notes_ref(backend, ref)
        data = _prepare_content(content, cleanup)
        if not data:
            logger.debug(
                "Empty note for %s, nothing to append", object_id.decode("ascii")
            )
            return None
        return backend.append_note(object_id, notes_ref, data)


def resolve(repo: RepoLike, locator: Locator) -> bytes:
    """Resolve a locator to a full hex object id.

    Raises:
      NotFound: if the locator does not name an object
    """
    with open_backend_closing(repo) as backend:
        return Resolver(backend).resolve(locator)


def notes_append(
    repo: RepoLike,
    locator: Locator,
    content: str | bytes,
    ref: str | bytes | None = None,
    cleanup: bool = True,
) -> bytes | None:
    """Resolve a locator and append a note to the object it names.

    Returns: Id of the new notes commit, or None if content was empty
    Raises:
      NotFound: if the locator does not name an object
      AppendFailed: if the note could not be written
    """
    with open_backend_closing(repo) as backend:
        object_id = Resolver(backend).resolve(locator)
        return append_to(backend, object_id, content, ref=ref, cleanup=cleanup)


def notes_show(
    repo: RepoLike, locator: Locator, ref: str | bytes | None = None
) -> bytes | None:
    """Show the note attached to the object a locator names.

    Returns: Note content, or None if the object has no note
    """
    with open_backend_closing(repo) as backend:
        object_id = Resolver(backend).resolve(locator)
        return backend.read_note(object_id, _notes_ref(backend, ref))


def notes_remove(
    repo: RepoLike, locator: Locator, ref: str | bytes | None = None
) -> bytes | None:
    """Remove the note attached to the object a locator names.

    Returns: Id of the new notes commit, or None if there was no note
    """
    with open_backend_closing(repo) as backend:
        object_id = Resolver(backend).resolve(locator)
        return backend.remove_note(object_id, _notes_ref(backend, ref))


def _notes_ref(backend: RepoBackend, ref: str | bytes | None) -> bytes:
    if ref is None:
        return default_notes_ref(backend.get_config())
    return make_notes_ref(ref)


class _Notes:
    """Shared state of the notes handles."""

    def __init__(self, repo: RepoLike, ref: str | bytes | None = None) -> None:
        self._backend = _open_backend(repo)
        self._owns_backend = self._backend is not repo
        self._resolver = Resolver(self._backend)
        self.ref = _notes_ref(self._backend, ref)

    def close(self) -> None:
        if self._owns_backend:
            self._backend.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ref={self.ref!r})"


class ObjectNotes(_Notes):
    """Notes handle bound to the object to annotate."""

    def __init__(
        self,
        repo: RepoLike,
        target: str | bytes | Locator,
        ref: str | bytes | None = None,
    ) -> None:
        """Create a handle for one object.

        Args:
          repo: Repository, backend or path to a repository
          target: Object id or ref name; other locators are accepted too,
            but a plain string is never taken for a commit message or path
          ref: Notes namespace (defaults to the configured one)
        """
        super().__init__(repo, ref)
        if isinstance(target, (str, bytes)):
            target = Hash(target)
        self.target = target
        self._object_id: bytes | None = None

    @property
    def object_id(self) -> bytes:
        """Full hex id of the target, resolved on first use."""
        if self._object_id is None:
            self._object_id = self._resolver.resolve(self.target)
        return self._object_id

    def append(self, content: str | bytes, cleanup: bool = True) -> bytes | None:
        """Append a note to the target.

        Returns: Id of the new notes commit, or None if content was empty
        Raises:
          NotFound: if the target does not exist
          AppendFailed: if the note could not be written
        """
        return append_to(
            self._backend, self.object_id, content, ref=self.ref, cleanup=cleanup
        )

    def show(self) -> bytes | None:
        """Return the note attached to the target, if any."""
        return self._backend.read_note(self.object_id, self.ref)

    def remove(self) -> bytes | None:
        """Remove the note attached to the target, if any."""
        return self._backend.remove_note(self.object_id, self.ref)


class TextNotes(_Notes):
    """Notes handle bound to the note text."""

    def __init__(
        self,
        repo: RepoLike,
        content: str | bytes,
        ref: str | bytes | None = None,
        cleanup: bool = True,
    ) -> None:
        super().__init__(repo, ref)
        self.content = content
        self.cleanup = cleanup

    def append_to(self, locator: Locator) -> bytes | None:
        """Append the text to the object a locator names."""
        object_id = self._resolver.resolve(locator)
        return append_to(
            self._backend, object_id, self.content, ref=self.ref, cleanup=self.cleanup
        )

    def append_at(self, identifier: str | bytes) -> bytes | None:
        return self.append_to(Hash(identifier))

    def append_at_commit(self, message: str | bytes) -> bytes | None:
        return self.append_to(CommitMessage(message))

    def append_at_file(self, path: str | bytes, commit: CommitLocator) -> bytes | None:
        return self.append_to(FileAt(path, commit))

    def append_at_folder(
        self, path: str | bytes, commit: CommitLocator
    ) -> bytes | None:
        return self.append_to(FolderAt(path, commit))


class ManualNotes(_Notes):
    """Notes handle with nothing bound yet."""

    def at_locator(self, locator: Locator) -> ObjectNotes:
        """Resolve a locator and return a handle bound to the result.

        Raises:
          NotFound: if the locator does not name an object
        """
        object_id = self._resolver.resolve(locator)
        return ObjectNotes(self._backend, object_id, ref=self.ref)

    def at(self, identifier: str | bytes) -> ObjectNotes:
        return self.at_locator(Hash(identifier))

    def at_commit(self, message: str | bytes) -> ObjectNotes:
        return self.at_locator(CommitMessage(message))

    def at_file(self, path: str | bytes, commit: CommitLocator) -> ObjectNotes:
        return self.at_locator(FileAt(path, commit))

    def at_folder(self, path: str | bytes, commit: CommitLocator) -> ObjectNotes:
        return self.at_locator(FolderAt(path, commit))


def notes(
    repo: RepoLike,
    *,
    target: str | bytes | Locator | None = None,
    text: str | bytes | None = None,
    ref: str | bytes | None = None,
) -> ObjectNotes | TextNotes | ManualNotes:
    """Create a notes handle.

    Args:
      repo: Repository, backend or path to a repository
      target: Object to annotate; gives an ObjectNotes
      text: Note text; gives a TextNotes
      ref: Notes namespace (defaults to the configured one)
    Returns: ManualNotes if neither target nor text is given
    Raises:
      ValueError: if both target and text are given
    """
    if target is not None and text is not None:
        raise ValueError("Specify at most one of target and text")
    if target is not None:
        return ObjectNotes(repo, target, ref=ref)
    if text is not None:
        return TextNotes(repo, text, ref=ref)
    return ManualNotes(repo, ref=ref)
