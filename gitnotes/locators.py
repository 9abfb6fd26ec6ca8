# locators.py -- Ways of naming the object a note is attached to
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

"""Locators.

A locator names a git object indirectly. It is one of:

 * Hash: an object id, abbreviated or full, or a ref name
 * CommitMessage: a substring of a commit message
 * FileAt: the blob at a path in a commit
 * FolderAt: the tree at a path in a commit

The commit of FileAt and FolderAt is a Hash, a CommitMessage, or a plain
string which is tried as an object id first and as a commit message second.
"""

__all__ = [
    "CommitLocator",
    "CommitMessage",
    "FileAt",
    "FolderAt",
    "Hash",
    "Locator",
    "to_bytes",
]

from dataclasses import dataclass

DEFAULT_ENCODING = "utf-8"


def to_bytes(text: str | bytes) -> bytes:
    """Convert text to bytes.

    Args:
      text: Text to convert (str or bytes)
    Returns: Bytes representation of text
    """
    if isinstance(text, str):
        return text.encode(DEFAULT_ENCODING)
    return text


@dataclass(frozen=True)
class Hash:
    """An object id (full or abbreviated) or a ref name."""

    identifier: str | bytes

    def __str__(self) -> str:
        return _to_str(self.identifier)


@dataclass(frozen=True)
class CommitMessage:
    """The most recent commit whose message contains a substring."""

    substring: str | bytes

    def __str__(self) -> str:
        return f"commit message {_to_str(self.substring)!r}"


CommitLocator = Hash | CommitMessage | str | bytes


@dataclass(frozen=True)
class FileAt:
    """A file at a path in a commit."""

    path: str | bytes
    commit: CommitLocator

    def __str__(self) -> str:
        return f"file {_to_str(self.path)!r} at {_commit_str(self.commit)}"


@dataclass(frozen=True)
class FolderAt:
    """A folder at a path in a commit."""

    path: str | bytes
    commit: CommitLocator

    def __str__(self) -> str:
        return f"folder {_to_str(self.path)!r} at {_commit_str(self.commit)}"


Locator = Hash | CommitMessage | FileAt | FolderAt


def _to_str(value: str | bytes) -> str:
    if isinstance(value, bytes):
        return value.decode(DEFAULT_ENCODING, "replace")
    return value


def _commit_str(commit: CommitLocator) -> str:
    if isinstance(commit, (Hash, CommitMessage)):
        return str(commit)
    return _to_str(commit)
