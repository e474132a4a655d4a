"""
Core.

Configuration, logging, exceptions and shared utilities.
"""
