"""
Value vs reference semantics on a small task model.
"""

__version__ = "1.0.0"
