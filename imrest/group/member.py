"""Group member entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class MsgFlag(str, Enum):
    """How a member receives group messages."""

    ACCEPT_AND_NOTIFY = "AcceptAndNotify"
    ACCEPT_NOT_NOTIFY = "AcceptNotNotify"
    DISCARD = "Discard"


@dataclass
class Member:
    """A member of a group.

    ``join_time`` and ``last_send_msg_time`` are UNIX timestamps in seconds.
    ``shut_up_until`` is the mute duration in seconds, ``0`` to lift a mute,
    ``None`` to leave it unchanged.
    """

    user_id: str = ""
    role: str = ""
    join_time: int = 0
    name_card: str = ""
    msg_seq: int = 0
    msg_flag: MsgFlag | str = ""
    last_send_msg_time: int = 0
    shut_up_until: int | None = None
    unread_msg_num: int = 0
    custom_data: dict[str, Any] = field(default_factory=dict)

    @property
    def joined_at(self) -> datetime:
        return datetime.fromtimestamp(self.join_time, tz=timezone.utc)

    def set_custom_data(self, name: str, value: Any) -> None:
        self.custom_data[name] = value

    def get_custom_data(self, name: str) -> Any:
        """Return the custom value stored under ``name``, or None."""
        return self.custom_data.get(name)

    def check(self) -> None:
        """Raise ValueError if the member cannot be sent to the service."""
        if not self.user_id:
            raise ValueError("member's userid is not set")