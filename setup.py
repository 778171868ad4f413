#!/usr/bin/env python3
"""
Setup configuration for playmate
Move the currently playing Spotify track into a playlist
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "spotipy>=2.23.0",
    "click>=8.1.7",
    "rich-click>=1.7.0",
    "requests>=2.31.0",
    "python-dotenv>=1.0.0",
    "tomli-w>=1.0.0",
]

setup(
    name="playmate",
    version="0.1.0",
    author="playmate contributors",
    description="Move the currently playing Spotify track to the end of a playlist",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["playmate", "playmate.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
    ],
    python_requires=">=3.11",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "playmate=playmate.cli:main",
        ],
    },
    keywords="spotify playlist currently-playing cli",
)
