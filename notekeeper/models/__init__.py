"""
Database Models.

SQLAlchemy models used by the SQLite durable medium.
"""
