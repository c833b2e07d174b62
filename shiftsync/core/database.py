# shiftsync/core/database.py
from shiftsync.core.storage import MemStorage

# Global storage instance
storage = MemStorage()


async def get_storage() -> MemStorage:
    """Storage dependency for FastAPI dependency injection."""
    return storage
