"""Response filters selecting which group and member fields are returned."""

from __future__ import annotations

from enum import Enum


class BaseInfoField(str, Enum):
    """Fields of a group's base information."""

    GROUP_ID = "GroupId"
    TYPE = "Type"
    NAME = "Name"
    INTRODUCTION = "Introduction"
    NOTIFICATION = "Notification"
    AVATAR = "FaceUrl"
    OWNER = "Owner_Account"
    CREATE_TIME = "CreateTime"
    INFO_SEQ = "InfoSeq"
    LAST_INFO_TIME = "LastInfoTime"
    LAST_MSG_TIME = "LastMsgTime"
    NEXT_MSG_SEQ = "NextMsgSeq"
    MEMBER_NUM = "MemberNum"
    MAX_MEMBER_NUM = "MaxMemberNum"
    APPLY_JOIN_OPTION = "ApplyJoinOption"


class MemberInfoField(str, Enum):
    """Fields of a group member's information."""

    USER_ID = "Member_Account"
    ROLE = "Role"
    JOIN_TIME = "JoinTime"
    MSG_SEQ = "MsgSeq"
    MSG_FLAG = "MsgFlag"
    LAST_SEND_MSG_TIME = "LastSendMsgTime"
    NAME_CARD = "NameCard"


def _key(value: str | Enum) -> str:
    return value.value if isinstance(value, Enum) else str(value)


class Filter:
    """A set of field, role and custom-data filters for group queries.

    Each category keeps its entries in insertion order without duplicates.
    """

    def __init__(self) -> None:
        self._base_info: dict[str, None] = {}
        self._member_info: dict[str, None] = {}
        self._member_roles: dict[str, None] = {}
        self._group_custom_data: dict[str, None] = {}
        self._member_custom_data: dict[str, None] = {}

    def add_base_info_filter(self, field: BaseInfoField | str) -> None:
        self._base_info[_key(field)] = None

    def remove_base_info_filter(self, field: BaseInfoField | str) -> None:
        self._base_info.pop(_key(field), None)

    def base_info_fields(self) -> list[str]:
        return list(self._base_info)

    def add_member_info_filter(self, field: MemberInfoField | str) -> None:
        self._member_info[_key(field)] = None

    def remove_member_info_filter(self, field: MemberInfoField | str) -> None:
        self._member_info.pop(_key(field), None)

    def member_info_fields(self) -> list[str]:
        return list(self._member_info)

    def add_member_role_filter(self, role: str) -> None:
        self._member_roles[_key(role)] = None

    def remove_member_role_filter(self, role: str) -> None:
        self._member_roles.pop(_key(role), None)

    def member_roles(self) -> list[str]:
        return list(self._member_roles)

    def add_group_custom_data_filter(self, field: str) -> None:
        self._group_custom_data[field] = None

    def remove_group_custom_data_filter(self, field: str) -> None:
        self._group_custom_data.pop(field, None)

    def group_custom_data_fields(self) -> list[str]:
        return list(self._group_custom_data)

    def add_member_custom_data_filter(self, field: str) -> None:
        self._member_custom_data[field] = None

    def remove_member_custom_data_filter(self, field: str) -> None:
        self._member_custom_data.pop(field, None)

    def member_custom_data_fields(self) -> list[str]:
        return list(self._member_custom_data)