"""Packaging for Tomatodo.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup

APP = ["main.py"]
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "Tomatodo",
        "CFBundleDisplayName": "Tomatodo",
        "CFBundleIdentifier": "com.tomatodo.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
        "LSUIElement": True,  # tray-only, no Dock icon
    },
}

extra = {}
if "py2app" in sys.argv:
    extra = {
        "app": APP,
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }

setup(
    name="Tomatodo",
    version="0.1.0",
    description="Pomodoro timer with to-do tracking and synced preferences",
    packages=[
        "tomatodo",
        "tomatodo.api",
        "tomatodo.audio",
        "tomatodo.database",
        "tomatodo.storage",
        "tomatodo.timer",
        "tomatodo.todos",
    ],
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.5",
        "SQLAlchemy>=2.0",
        "numpy>=1.24",
        "httpx>=0.25",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": ["tomatodo=tomatodo.__main__:main"],
    },
    **extra,
)
