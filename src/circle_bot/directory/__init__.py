"""
Circle directory package.

Modules
=======

``models``
    Defines :class:`~circle_bot.directory.models.Circle`, the immutable record
    shared by every layer, and the id parsing helper.
``errors``
    The :class:`CircleError` hierarchy (``NotFound``, ``InvalidFormat``,
    ``ValidationFailure``, ``UpstreamFailure``).
``cache``
    :class:`DirectoryCache`, the in-process id -> circle map behind a
    reader/writer lock.
``gateway``
    :class:`PersistenceGateway`, the async CRUD contract for stored circles.
``sqlite_store``
    :class:`SqliteCircleStore`, the SQLite implementation of the gateway.
``service``
    :class:`DirectoryService`, which applies store-then-cache mutations and
    recaches from the store.
``protocol``
    Encodes and decodes ``circle/<action>/<id>`` button ids and builds the
    card payload link.
``toggle``
    :class:`MembershipToggle`, the join/leave state machine over role
    assignments, and button routing.
``roles``
    discord.py implementations of the role gateway and channel notifier.
``emoji``
    Single-pictograph validation for new circles.
``cards`` / ``repost``
    Card rendering and the join-channel repost workflow.
``creation``
    Role + channel + record creation for new circles.
``scheduler``
    Periodic background recache.

Only the configuration-free core is re-exported here; the Discord-facing
modules import :mod:`circle_bot.config` and are imported explicitly.
"""

from .cache import DirectoryCache
from .errors import (
    CircleError,
    InvalidFormat,
    NotFound,
    UpstreamFailure,
    ValidationFailure,
)
from .gateway import PersistenceGateway
from .models import Circle
from .service import DirectoryService
from .toggle import MembershipState, MembershipToggle, ToggleOutcome

__all__ = [
    "Circle",
    "CircleError",
    "DirectoryCache",
    "DirectoryService",
    "InvalidFormat",
    "MembershipState",
    "MembershipToggle",
    "NotFound",
    "PersistenceGateway",
    "ToggleOutcome",
    "UpstreamFailure",
    "ValidationFailure",
]
