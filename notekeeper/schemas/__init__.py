"""
Schemas.

Pydantic models for notes, drafts and presentation view models.
"""
