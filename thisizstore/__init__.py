"""
Top level package for the thisizstore game account marketplace.

This file marks the directory as a Python package. The Django project is
split into the ``accounts`` app (profiles and login) and the
``marketplace`` app (games, listings, moderation and the listing store).
"""

__all__ = []
