from app.storage.base import (
    ExerciseNotFoundError,
    IStorage,
    StorageError,
    StorageNotConnectedError,
)
from app.storage.factory import create_storage
from app.storage.memory import MemoryStorage

__all__ = [
    "IStorage", "MemoryStorage", "create_storage",
    "StorageError", "ExerciseNotFoundError", "StorageNotConnectedError"
]
