"""
Persistence package.
"""

from .db import Database

__all__ = ["Database"]
