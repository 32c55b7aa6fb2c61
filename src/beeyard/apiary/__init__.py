"""
Apiary

Data access and operations for apiaries, the top of the ownership tree.
"""

from beeyard.apiary.repository import ApiaryRepository
from beeyard.apiary.service import ApiaryService

__all__ = ["ApiaryRepository", "ApiaryService"]
