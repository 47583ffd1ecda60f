"""Group entity and its argument checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from ..core import INVALID_PARAMS_CODE, ImError
from .member import Member

MAX_NAME_BYTES = 30
MAX_INTRODUCTION_BYTES = 240
MAX_NOTIFICATION_BYTES = 300


class GroupType(str, Enum):
    """Kind of group."""

    PUBLIC = "Public"
    PRIVATE = "Private"
    CHAT_ROOM = "ChatRoom"
    LIVE_ROOM = "AVChatRoom"


class ApplyJoinOption(str, Enum):
    """How applications to join are handled."""

    FREE_ACCESS = "FreeAccess"
    NEED_PERMISSION = "NeedPermission"
    DISABLE_APPLY = "DisableApply"


class ShutUpStatus(str, Enum):
    """Whether all members are muted."""

    ON = "On"
    OFF = "Off"


_GROUP_TYPES = frozenset(t.value for t in GroupType)


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _value(item: str | Enum) -> str:
    return item.value if isinstance(item, Enum) else str(item)


@dataclass
class Group:
    """A group with its profile, members and custom data.

    Timestamps are UNIX seconds. ``error`` holds the service's error for a
    group that could not be fetched.
    """

    id: str = ""
    name: str = ""
    group_type: GroupType | str = ""
    owner: str = ""
    introduction: str = ""
    notification: str = ""
    avatar: str = ""
    member_num: int = 0
    max_member_num: int = 0
    apply_join_option: ApplyJoinOption | str = ""
    members: list[Member] = field(default_factory=list)
    custom_data: dict[str, Any] = field(default_factory=dict)
    create_time: int = 0
    last_info_time: int = 0
    last_msg_time: int = 0
    next_msg_seq: int = 0
    shut_up_status: ShutUpStatus | str = ""
    error: ImError | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.create_time, tz=timezone.utc)

    @property
    def last_info_at(self) -> datetime:
        return datetime.fromtimestamp(self.last_info_time, tz=timezone.utc)

    @property
    def last_msg_at(self) -> datetime:
        return datetime.fromtimestamp(self.last_msg_time, tz=timezone.utc)

    def add_members(self, *members: Member) -> None:
        self.members.extend(members)

    def set_members(self, *members: Member) -> None:
        self.members = list(members)

    def set_custom_data(self, name: str, value: Any) -> None:
        self.custom_data[name] = value

    def get_custom_data(self, name: str) -> Any:
        """Return the custom value stored under ``name``, or None."""
        return self.custom_data.get(name)

    def check_create(self) -> None:
        """Raise ImError if the group cannot be created."""
        self._check_type()
        self._check_texts()

    def check_import(self) -> None:
        """Raise ImError if the group cannot be imported."""
        self._check_type()
        self._check_texts()

    def check_update(self) -> None:
        """Raise ImError if the group cannot be updated."""
        self._check_texts()

    def _check_type(self) -> None:
        if not self.group_type:
            raise ImError(INVALID_PARAMS_CODE, "group type is not set")
        if _value(self.group_type) not in _GROUP_TYPES:
            raise ImError(INVALID_PARAMS_CODE, "invalid group type")

    def _check_texts(self) -> None:
        if not self.name:
            raise ImError(INVALID_PARAMS_CODE, "group name is not set")
        if _byte_len(self.name) > MAX_NAME_BYTES:
            raise ImError(INVALID_PARAMS_CODE, "group name is too long")
        if _byte_len(self.introduction) > MAX_INTRODUCTION_BYTES:
            raise ImError(INVALID_PARAMS_CODE, "group introduction is too long")
        if _byte_len(self.notification) > MAX_NOTIFICATION_BYTES:
            raise ImError(INVALID_PARAMS_CODE, "group notification is too long")