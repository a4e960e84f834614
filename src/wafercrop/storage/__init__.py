"""
Relational storage helper used as a plain request/response boundary.
"""

from .sql_helper import SqlHelper, log_rows

__all__ = ["SqlHelper", "log_rows"]
