"""
Client modules for external service communication
"""

from .assistant import AssistantClient
from .persistence import DocumentStore, MemoryStore, PersistenceClient

__all__ = ["AssistantClient", "DocumentStore", "MemoryStore", "PersistenceClient"]
