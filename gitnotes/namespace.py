# namespace.py -- Notes namespaces (refs under refs/notes/)
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

"""Notes namespaces.

A namespace is a ref under ``refs/notes/`` whose commits hold a notes tree.
Short names are expanded the same way ``git notes --ref`` expands them.
"""

__all__ = [
    "DEFAULT_NOTES_REF",
    "NOTES_REF_PREFIX",
    "check_notes_ref",
    "default_notes_ref",
    "make_notes_ref",
]

import os
from collections.abc import Mapping
from typing import TYPE_CHECKING

from dulwich.refs import check_ref_format

if TYPE_CHECKING:
    from dulwich.config import Config

NOTES_REF_PREFIX = b"refs/notes/"
DEFAULT_NOTES_REF = NOTES_REF_PREFIX + b"commits"

DEFAULT_ENCODING = "utf-8"


def make_notes_ref(name: str | bytes) -> bytes:
    """Expand a notes namespace name to a full ref name.

    Args:
      name: ``foo``, ``notes/foo`` or ``refs/notes/foo``
    Returns: The full ref name, e.g. ``refs/notes/foo``
    """
    if isinstance(name, str):
        name = name.encode(DEFAULT_ENCODING)
    if name.startswith(NOTES_REF_PREFIX):
        return name
    if name.startswith(b"notes/"):
        return b"refs/" + name
    return NOTES_REF_PREFIX + name


def check_notes_ref(ref: bytes) -> bool:
    """Check whether a full ref name is usable as a notes namespace."""
    if not ref.startswith(NOTES_REF_PREFIX) or ref == NOTES_REF_PREFIX:
        return False
    return check_ref_format(ref)


def default_notes_ref(
    config: "Config | None" = None,
    environ: Mapping[str, str] | None = None,
) -> bytes:
    """Determine the namespace to use when the caller names none.

    GIT_NOTES_REF takes precedence over core.notesRef, which takes precedence
    over refs/notes/commits.

    Args:
      config: Configuration to read core.notesRef from
      environ: Environment to read GIT_NOTES_REF from (defaults to os.environ)
    Returns: A full notes ref name
    """
    if environ is None:
        environ = os.environ
    env_ref = environ.get("GIT_NOTES_REF")
    if env_ref:
        return make_notes_ref(env_ref)
    if config is not None:
        try:
            value = config.get((b"core",), b"notesRef")
        except KeyError:
            pass
        else:
            if value:
                return make_notes_ref(value)
    return DEFAULT_NOTES_REF
