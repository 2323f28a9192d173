"""
In-memory relational store.

EntityStore is a leaf: it depends on nothing but the models.
"""

from .entity_store import EntityStore
from .housing_store import HousingStore
from .locking import LockManager, person_key, project_key

__all__ = ["EntityStore", "HousingStore", "LockManager", "person_key", "project_key"]
