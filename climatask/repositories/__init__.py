# Repositories package init
"""
ClimaTask Backend — Persistence Client
========================================

What:  One repository per entity over a shared generic base; the only code
       that builds SQL statements.

Inventory:
    - base.py:      Repository[ModelT] (find/create/update/delete + error mapping)
    - users.py:     UserRepository (find_by_email, list_all)
    - locations.py: LocationRepository (owner joins, list_by_user)
    - tasks.py:     TaskRepository (newest-first lists)
"""

from climatask.repositories.base import Repository
from climatask.repositories.locations import LocationRepository
from climatask.repositories.tasks import TaskRepository
from climatask.repositories.users import UserRepository

__all__ = ["Repository", "UserRepository", "LocationRepository", "TaskRepository"]
