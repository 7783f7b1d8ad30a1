from core.config import StorageConfig
from memory.backends import Backend, MemoryBackend, SQLiteBackend
from memory.log import InteractionLog


def create_log(config: StorageConfig) -> InteractionLog:
    """Create the interaction log over the backend named in config."""
    backend: Backend
    if config.backend == "memory":
        backend = MemoryBackend()
    else:
        backend = SQLiteBackend(config.db_path)
    return InteractionLog(backend, key=config.key, max_entries=config.max_entries)
