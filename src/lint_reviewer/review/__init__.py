"""
Review Storage

This module keeps completed file reviews.
"""

from .store import InMemoryReviewStore

__all__ = ['InMemoryReviewStore']
