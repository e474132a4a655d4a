"""
Repositories.

In-memory ownership of the committed note collection.
"""
