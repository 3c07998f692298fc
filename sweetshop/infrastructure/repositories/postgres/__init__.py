"""
PostgreSQL Repository Implementations.

Production implementations over psycopg 3 + psycopg_pool.
"""

from .sweet import PostgresSweetRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresSweetRepository",
    "PostgresUserRepository",
]
