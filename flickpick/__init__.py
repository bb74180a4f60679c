"""
flickpick: pick up to three genres and a count, get a shuffled set of matching movies from OMDb.
"""

__version__ = "1.0.0"
