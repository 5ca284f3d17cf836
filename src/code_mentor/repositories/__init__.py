"""Repository layer for data access.

This layer hides external dependencies (process memory, the Gemini REST API)
behind protocol-based interfaces. The repositories are protocol-based
(structural typing), not inheritance-based.
"""

from code_mentor.protocols import ModelGateway, ResponseStore

from .gemini_gateway import GeminiGateway
from .memory_response_store import MemoryResponseStore

__all__ = [
    "ModelGateway",
    "ResponseStore",
    "GeminiGateway",
    "MemoryResponseStore",
]
