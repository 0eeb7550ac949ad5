"""
Command-line interface for the sagemonitor package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
