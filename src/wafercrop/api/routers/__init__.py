"""
API routers.
"""

from . import crop, system

__all__ = ["crop", "system"]
