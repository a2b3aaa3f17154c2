"""
Domain services.

- credentials: registration, authentication and token resolution
- tokens: JWT issuing and decoding
- query: visibility-aware content listings
- moderation: submission and review lifecycle
- relationships: favorite and like toggles
"""

from .credentials import CredentialService
from .moderation import ModerationService
from .query import QueryComposer
from .relationships import RelationshipToggleEngine
from .tokens import TokenIssuer

__all__ = [
    "CredentialService",
    "ModerationService",
    "QueryComposer",
    "RelationshipToggleEngine",
    "TokenIssuer",
]
