"""
Language-specific code generators.

This module contains generators for the supported target languages.
"""

from . import go

__all__ = ["go"]
