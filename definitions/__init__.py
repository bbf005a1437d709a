"""Condition definitions stores."""
from definitions.store import DefinitionsStore, InMemoryDefinitions
from definitions.sqlite import SQLiteDefinitions


def create_definitions(config):
    """Build the store named by ``config['definitions']['backend']``."""
    defs_config = config.get("definitions", {})
    backend = defs_config.get("backend", "memory")
    if backend == "sqlite":
        return SQLiteDefinitions(defs_config.get("path", "data/definitions.db")).connect()
    if backend == "memory":
        return InMemoryDefinitions()
    raise ValueError(f"Unknown definitions backend: {backend}")
