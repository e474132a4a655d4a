"""
Services.

Selection and draft handling, search and ordering, and the workspace
facade used by presentation layers.
"""
