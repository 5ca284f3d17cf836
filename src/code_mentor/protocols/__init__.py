"""Protocol interfaces for swappable implementations.

Protocols enable:
- Swapping the in-memory store or the model provider without touching services
- Unit testing with fake implementations (fake clock, recording gateway)
"""

from .model_gateway import ModelGateway
from .response_store import ResponseStore

__all__ = [
    "ModelGateway",
    "ResponseStore",
]
