from .config import Configuration, DEFAULT_CONFIGURATION
from .gateway import InMemoryPersistence, PersistenceGateway, SessionRecord
from .json_store import JsonFilePersistence, read_json, write_json

__all__ = [
    "Configuration", "DEFAULT_CONFIGURATION",
    "InMemoryPersistence", "PersistenceGateway", "SessionRecord",
    "JsonFilePersistence", "read_json", "write_json",
]
