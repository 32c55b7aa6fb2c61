from beeyard.services.data_service import DataService

__all__ = ["DataService"]
