"""
Command-line interface for the makeitrun package.

This module provides the main CLI entry point for the application.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
