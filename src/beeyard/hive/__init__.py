"""
Hive

Data access and operations for hives and their derived recordings.
"""

from beeyard.hive.repository import HiveRepository
from beeyard.hive.service import HiveService

__all__ = ["HiveRepository", "HiveService"]
