"""
Join/leave toggling driven by circle buttons.

Membership is never stored by the bot. A user is a member of a circle exactly
when they hold the role whose id equals ``circle.id``, so every toggle reads
the role set first and flips it. Concurrent toggles for the same user and
circle are not serialized; Discord decides which one lands last.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from .errors import CircleError, UpstreamFailure
from .models import Circle
from .protocol import Action, decode

if TYPE_CHECKING:
    from .service import DirectoryService

logger = logging.getLogger(__name__)

UNRECOGNIZED_ACTION_MESSAGE = "Unable to get action"


class RoleGateway(Protocol):
    async def has_role(self, user_id: int, role_id: str) -> bool: ...

    async def grant_role(self, user_id: int, role_id: str) -> None: ...

    async def revoke_role(self, user_id: int, role_id: str) -> None: ...


class ChannelNotifier(Protocol):
    async def send(self, channel_id: str, content: str) -> None: ...


class MembershipState(enum.Enum):
    NOT_MEMBER = "not_member"
    MEMBER = "member"


@dataclass(frozen=True)
class ToggleOutcome:
    """Result of a completed toggle: the state the user ended in and the reply."""

    state: MembershipState
    message: str


class MembershipToggle:
    """Flip a user's membership of a circle via its backing role."""

    def __init__(self, roles: RoleGateway, notifier: ChannelNotifier) -> None:
        self.roles = roles
        self.notifier = notifier

    async def _role_call(self, what: str, fn, user_id: int, role_id: str):
        try:
            return await fn(user_id, role_id)
        except CircleError:
            raise
        except Exception as exc:
            raise UpstreamFailure(f"Unable to {what}: {exc}") from exc

    async def state_of(self, user_id: int, circle: Circle) -> MembershipState:
        held = await self._role_call("read member roles", self.roles.has_role, user_id, circle.id)
        return MembershipState.MEMBER if held else MembershipState.NOT_MEMBER

    async def toggle(self, user_id: int, circle: Circle) -> ToggleOutcome:
        """
        Leave ``circle`` if ``user_id`` holds its role, join it otherwise.

        A join also posts a welcome notice to the circle's channel. Nothing is
        sent unless the role change committed.

        :raises UpstreamFailure: if reading or changing the role fails.
        """
        state = await self.state_of(user_id, circle)

        if state is MembershipState.MEMBER:
            await self._role_call("remove role", self.roles.revoke_role, user_id, circle.id)
            logger.info("User %s left circle %s", user_id, circle.id)
            return ToggleOutcome(
                MembershipState.NOT_MEMBER,
                f"You have left the {circle.name} circle. Thank you for using circles",
            )

        await self._role_call("add role", self.roles.grant_role, user_id, circle.id)
        logger.info("User %s joined circle %s", user_id, circle.id)

        # The role is already granted; a failed welcome must not report the join as failed.
        try:
            await self.notifier.send(
                circle.channel, f"Welcome to the {circle.name} circle <@{user_id}>!"
            )
        except Exception:
            logger.exception(
                "Failed to post welcome for user %s in circle %s", user_id, circle.id
            )

        return ToggleOutcome(
            MembershipState.MEMBER,
            f"You have joined the {circle.name} circle. Thank you for using circles",
        )

    async def handle_button(
        self, user_id: int, custom_id: str, directory: "DirectoryService"
    ) -> str:
        """
        Route a circle button press and return the reply text.

        :raises InvalidFormat: if ``custom_id`` is not a circle id.
        :raises NotFound: if the circle is not cached.
        :raises UpstreamFailure: if the role change fails.
        """
        button = decode(custom_id)
        logger.info("Action: %s Circle: %s", button.action, button.circle_id)

        circle = await directory.resolve(button.circle_id)

        if button.kind is Action.JOIN:
            outcome = await self.toggle(user_id, circle)
            return outcome.message
        # ``about`` and unknown actions have no handler yet.
        return UNRECOGNIZED_ACTION_MESSAGE
