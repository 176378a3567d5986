"""
Cost-center reference lookup and location standardization.
"""

from .resolver import ReferenceResolver, ReferenceTableUnavailable

__all__ = [
    "ReferenceResolver",
    "ReferenceTableUnavailable",
]
