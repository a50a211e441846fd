"""
Public surface for community_auth.
Importing this module does **not** touch a database; call
`Host.init(...)` only if you want the persistent reference host.
"""

from .core.errors import CommunityError, ErrorKind, Outcome
from .core.notifications import CommunityCreated, CouncilChanged, Notification
from .core.record import CommunityRecord
from .core.state import RegistryState
from .core.transitions import is_authorized
from .events import on
from .registry import CommunityRegistry
from .runtime import Host

__all__ = [
    "CommunityError",
    "CommunityCreated",
    "CommunityRecord",
    "CommunityRegistry",
    "CouncilChanged",
    "ErrorKind",
    "Host",
    "Notification",
    "Outcome",
    "RegistryState",
    "is_authorized",
    "on",
]
