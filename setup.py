#!/usr/bin/env python3
"""Setup script for Game Version Resolver."""

from setuptools import setup, find_packages
from pathlib import Path

# Read version from package
version = {}
with open("game_version_resolver/__init__.py") as f:
    exec(f.read(), version)

# Read long description from README
readme = Path("README.md").read_text(encoding="utf-8")

# Read requirements
requirements = Path("game_version_resolver/requirements.txt").read_text().strip().split("\n")

setup(
    name="game-version-resolver",
    version=version["__version__"],
    description="Normalize Minecraft version ids and resolve version ranges over the Mojang manifest",
    long_description=readme,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"game_version_resolver": ["requirements.txt"]},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "game-version-resolver=game_version_resolver.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Games/Entertainment",
        "Topic :: Software Development :: Libraries",
    ],
    keywords="minecraft versions semver version-range mojang",
)
