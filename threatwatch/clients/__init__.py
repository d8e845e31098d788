"""ThreatWatch clients package.

HTTP API clients only. No business logic in this layer.
Each client handles connection management and response parsing.
"""

from threatwatch.clients.valyu_client import ValyuClient

__all__ = [
    "ValyuClient",
]
