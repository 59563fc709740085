"""
Diagnostic modules for the insertion finder.
"""

from .performance import *

__all__ = [
    'ResourceSnapshot',
    'ResourceTracker',
]
