#!/usr/bin/env python3
"""
filekv Setup Script
===================
Allows installation of the filekv package.

Usage:
    pip install -e .           # Development install
    pip install -e .[test]     # Development install with test tools
    pip install .              # Regular install
"""

from setuptools import setup, find_packages

setup(
    name="filekv",
    version="1.0.0",
    packages=find_packages(include=["filekv", "filekv.*"]),
    python_requires=">=3.8",
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "filekv=filekv.server:main",
        ],
    },
)
