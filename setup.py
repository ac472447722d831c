#!/usr/bin/env python

# Copyright New York University and the TUF contributors
# SPDX-License-Identifier: MIT OR Apache-2.0

"""
<Program Name>
  setup.py

<Purpose>
  BUILD SOURCE DISTRIBUTION

  The following shell command generates a trustroot-assembler source archive
  that can be distributed to other users.  The packaged source is saved to
  the 'dist' folder in the current directory.

  $ python -m build --sdist


  INSTALLATION OPTIONS

  pip - installing and managing Python packages (recommended):

  # From the root directory of the source tree.
  $ pip install .

  # Editable install with the test requirements.
  $ pip install -e .[test]

  Installing provides the 'trustroot-assemble' command, which prints a
  Sigstore TrustRoot resource for a TUF mirror:

  $ trustroot-assemble --mirror https://tuf-repo-cdn.sigstore.dev
"""

from setuptools import find_packages, setup

with open("README.md") as file_object:
    long_description = file_object.read()


setup(
    name="trustroot-assembler",
    version="0.1.0",  # If updating version, also update it in trustroot_assembler/__init__.py
    description="Assemble a Sigstore TrustRoot resource from a TUF mirror",
    long_description=long_description,
    long_description_content_type="text/markdown",
    keywords="tuf sigstore trustroot policy-controller update framework",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "License :: OSI Approved :: Apache Software License",
        "Natural Language :: English",
        "Operating System :: POSIX",
        "Operating System :: POSIX :: Linux",
        "Operating System :: MacOS :: MacOS X",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Security",
        "Topic :: Software Development",
    ],
    python_requires=">=3.9",
    install_requires=[
        "tuf>=6.0",
        "requests>=2.19.1",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "securesystemslib[crypto]>=1.0",
            "pytest",
        ],
    },
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            "trustroot-assemble=trustroot_assembler.scripts.assemble:main",
        ],
    },
)
