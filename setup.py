#!/usr/bin/python3
# Setup file for gitnotes
# Copyright (C) 2026 The gitnotes authors
# SPDX-License-Identifier: Apache-2.0 OR GPL-2.0-or-later

from setuptools import setup

tests_require = ["pytest"]


setup(
    name="gitnotes",
    version="0.1.0",
    description="Append git notes to objects found by hash, commit message or path",
    license="Apache-2.0 OR GPL-2.0-or-later",
    packages=["gitnotes"],
    package_data={"": ["py.typed"]},
    python_requires=">=3.10",
    install_requires=["dulwich>=0.25.0"],
    extras_require={"test": tests_require},
    entry_points={"console_scripts": ["gitnotes=gitnotes.cli:_main"]},
)
