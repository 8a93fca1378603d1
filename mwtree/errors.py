"""
mwtree/errors.py
Exceptions raised by mwtree.
"""


class InvalidConfiguration(ValueError):
    """A tree was requested with an unusable degree or variant."""
