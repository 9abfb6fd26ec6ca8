# utils.py -- Test utilities for gitnotes
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

"""Utility functions common to gitnotes tests."""

from dulwich.index import commit_tree
from dulwich.objects import Blob, Commit

# Plain old file mode
F = 0o100644

SOME_NOTES = """headline of the notes
# 😋 Lorem Ipsum
* Lorem ipsum dolor sit amet, consectetuer adipiscing elit.
* Aliquam tincidunt mauris eu risus.
* Vestibulum auctor dapibus neque.
"""

# The history every repository in the tests starts from, oldest first.
# Each entry is (message, {path: content}).
DEFAULT_HISTORY = [
    (
        b"Initial commit",
        {
            b"LICENSE": b"MIT License\n",
            b"README.md": b"# project\n",
        },
    ),
    (
        b"Add workflow in another folder",
        {
            b"LICENSE": b"MIT License\n",
            b"README.md": b"# project\n",
            b".github/workflows/ci.yml": b"on: push\n",
        },
    ),
    (
        b"Expand README",
        {
            b"LICENSE": b"MIT License\n",
            b"README.md": b"# project\n\nNotes on objects.\n",
            b".github/workflows/ci.yml": b"on: push\n",
        },
    ),
]


def make_commit(object_store, message, files, parents=(), commit_time=0):
    """Create a commit with the given files and add it to an object store.

    :param object_store: Object store to add blobs, trees and the commit to
    :param message: Commit message
    :param files: Dict of path -> content, or iterable of
        (path, content, mode) entries
    :param parents: Ids of the parent commits
    :param commit_time: Commit and author time
    :return: The commit object
    """
    if isinstance(files, dict):
        files = [(path, data, F) for path, data in files.items()]
    blobs = []
    for path, data, mode in files:
        blob = Blob.from_string(data)
        object_store.add_object(blob)
        blobs.append((path, blob.id, mode))
    tree_id = commit_tree(object_store, blobs)

    commit = Commit()
    commit.tree = tree_id
    commit.parents = list(parents)
    commit.author = commit.committer = b"Test User <test@example.com>"
    commit.commit_time = commit.author_time = commit_time
    commit.commit_timezone = commit.author_timezone = 0
    commit.encoding = b"UTF-8"
    commit.message = message
    object_store.add_object(commit)
    return commit


def build_history(repo, history=None, branch=b"refs/heads/master"):
    """Build a linear history on a branch and point HEAD at it.

    Commit times increase by 100 seconds per commit, so the last entry is
    the most recent commit.

    :param repo: Repository to build the history in
    :param history: List of (message, files) tuples, oldest first; defaults
        to DEFAULT_HISTORY
    :param branch: Branch to update
    :return: The list of commit objects created, oldest first
    """
    if history is None:
        history = DEFAULT_HISTORY
    commits = []
    parents = []
    commit_time = 1000
    for message, files in history:
        commit = make_commit(
            repo.object_store,
            message,
            files,
            parents=parents,
            commit_time=commit_time,
        )
        commits.append(commit)
        parents = [commit.id]
        commit_time += 100
    repo.refs.set_symbolic_ref(b"HEAD", branch)
    repo.refs[branch] = commits[-1].id
    return commits
