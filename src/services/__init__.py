"""
Service layer for the learner roster client.

This module holds the learner collection and the helpers that wire it up.
"""

from .dependencies import create_learner_collection
from .learner_collection import LearnerCollection

__all__ = [
    "LearnerCollection",
    "create_learner_collection",
]
