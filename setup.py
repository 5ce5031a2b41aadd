#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FILE: setup.py
FILE THEME: Setup file for virtual_plotter package.
PROJECT: virtual_plotter
"""

from pathlib import Path
from setuptools import setup, find_packages


def get_version():
    """Get the package version."""
    here = Path(__file__).resolve().parent
    version_file = here / "src" / "virtual_plotter" / "__init__.py"
    with open(version_file, mode="r") as f:
        file_lines = f.readlines()
    for line in file_lines:
        if line.startswith("__version__"):
            delim = '"' if '"' in line else "'"
            return line.split(delim)[1]
    raise RuntimeError("Unable to find version string.")


extra_deps = {
    "dev": [
        "pytest>=7.0",
        "pytest-cov",
        "black",
        "isort",
        "mypy",
        "ruff",
    ],
}

setup(
    name="virtual_plotter",
    version=get_version(),
    description="Virtual pen plotter: G-code parser and timed motion simulator",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.11",
    install_requires=["numpy", "pandas"],
    extras_require=extra_deps,
    entry_points={
        "console_scripts": [
            "virtual-plotter=virtual_plotter.__main__:main",
        ],
    },
)
