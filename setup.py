import os
from setuptools import setup, find_packages
from typing import Dict, Final, List

__lib_name__: Final[str] = "rawstr"

entry_points: Final[Dict[str, List[str]]] = {
    "console_scripts": [
        "rawstr_split=cli.split:main",
        "rawstr_wc=cli.wc:main",
    ],
}

extras_require: Final[Dict[str, List[str]]] = {
    "test": ["pytest", "numpy"],
    "bench": ["fire"],
}

this_directory = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(this_directory, "VERSION"), "r") as f:
    __version__ = f.read().strip()

with open(os.path.join(this_directory, "README.md"), "r", encoding="utf-8") as f:
    long_description = f.read()


setup(
    name=__lib_name__,
    version=__version__,
    description="Search, match, and split platform strings that are mostly, but not always, valid UTF-8",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Natural Language :: English",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
        "Operating System :: OS Independent",
        "Topic :: Software Development :: Libraries",
        "Topic :: System :: Filesystems",
        "Topic :: Text Processing :: General",
    ],
    python_requires=">=3.8",
    install_requires=[],
    extras_require=extras_require,
    packages=find_packages(include=["rawstr", "rawstr.*", "cli", "cli.*"]),
    entry_points=entry_points,
)
