"""
CRUD backends for users and posts on PostgreSQL
"""

__version__ = "1.0.0"
