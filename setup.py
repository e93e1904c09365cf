"""
libhtpasswd setup script
"""
#=============================================================================
# init script env -- ensure cwd = root of source dir
#=============================================================================
import os
root_dir = os.path.abspath(os.path.join(__file__, ".."))
os.chdir(root_dir)

#=============================================================================
# imports
#=============================================================================
import re

from setuptools import setup, find_packages

#=============================================================================
# version string
#=============================================================================

# read version string without importing the package
with open(os.path.join(root_dir, "libhtpasswd", "__init__.py")) as fh:
    version = re.search(r'^__version__ = "([^"]+)"', fh.read(), re.M).group(1)

#=============================================================================
# static text
#=============================================================================
SUMMARY = "read & write Apache htpasswd files, with an htpasswd compatible cli"

DESCRIPTION = """\
libhtpasswd manages flat-file credential stores in the Apache ``htpasswd``
format: one ``username:hash`` record per line. It can add, update, delete and
verify users, hashing passwords as plaintext, unsalted MD5 / SHA-1 digests,
or bcrypt.

It also ships a small command line tool mirroring the flags of Apache's
``htpasswd`` utility.
"""

KEYWORDS = """\
password secret hash security
apache htpasswd bcrypt
"""

CLASSIFIERS = """\
Intended Audience :: Developers
Intended Audience :: System Administrators
License :: OSI Approved :: BSD License
Natural Language :: English
Operating System :: OS Independent
Programming Language :: Python :: 3
Programming Language :: Python :: Implementation :: CPython
Topic :: Security :: Cryptography
Topic :: Software Development :: Libraries
""".splitlines()

if '.dev' in version:
    CLASSIFIERS.append("Development Status :: 3 - Alpha")
else:
    CLASSIFIERS.append("Development Status :: 5 - Production/Stable")

#=============================================================================
# run setup
#=============================================================================
setup(
    # package info
    packages=find_packages(root_dir, include=["libhtpasswd", "libhtpasswd.*"]),
    zip_safe=True,
    python_requires=">=3.9",

    # metadata
    name="libhtpasswd",
    version=version,
    license="BSD",

    description=SUMMARY,
    long_description=DESCRIPTION,
    keywords=KEYWORDS,
    classifiers=CLASSIFIERS,

    install_requires=[
        "bcrypt>=4.0",
        "typing_extensions>=4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-archon>=0.0.6",
        ],
    },
    entry_points={
        "console_scripts": [
            "libhtpasswd = libhtpasswd.cli:main",
        ],
    },
)

#=============================================================================
# eof
#=============================================================================
