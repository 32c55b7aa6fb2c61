"""
Recording

Per-day groupings of a hive's records. Recordings are derived on demand and
never stored.
"""

from beeyard.recording.aggregator import aggregate
from beeyard.recording.service import RecordingService

__all__ = ["aggregate", "RecordingService"]
