"""
Record

Data access and operations for timestamped sensor records.
"""

from beeyard.record.repository import RecordRepository
from beeyard.record.service import RecordService

__all__ = ["RecordRepository", "RecordService"]
