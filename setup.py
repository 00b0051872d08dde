"""Setup for Holdfast.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup, find_packages

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,  # Replace with .icns path when a proper icon exists
    "plist": {
        "CFBundleName": "Holdfast",
        "CFBundleDisplayName": "Holdfast",
        "CFBundleIdentifier": "com.holdfast.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

bundle_args = {}
if "py2app" in sys.argv:
    bundle_args = {
        "app": APP,
        "data_files": DATA_FILES,
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }

setup(
    name="Holdfast",
    version="0.1.0",
    packages=find_packages(include=["holdfast", "holdfast.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.6",
        "numpy",
        "loguru",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["holdfast=holdfast.__main__:main"],
    },
    **bundle_args,
)
