"""Result and argument types for group queries, and decoding of service items."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from ..core import SUCCESS_CODE, ImError
from .filter import Filter
from .group import ApplyJoinOption, Group, GroupType, ShutUpStatus
from .member import Member, MsgFlag

_E = TypeVar("_E", bound=Enum)


def _int(value: Any) -> int:
    return int(value or 0)


def _enum_or_str(kind: type[_E], value: Any) -> _E | str:
    text = str(value or "")
    try:
        return kind(text)
    except ValueError:
        return text


def _items(value: Any) -> list[Mapping[str, Any]]:
    return list(value or [])


def custom_data_items(data: Mapping[str, Any] | None) -> list[dict[str, Any]]:
    """Encode custom data as the service's list of ``{"Key", "Value"}`` items."""
    return [{"Key": key, "Value": value} for key, value in (data or {}).items()]


def member_from_item(item: Mapping[str, Any], user_id: str | None = None) -> Member:
    """Build a Member from a service member item.

    ``user_id`` overrides the item's own member account, as needed for the
    ``SelfInfo`` item that carries no account.
    """
    member = Member(
        user_id=user_id if user_id is not None else str(item.get("Member_Account") or ""),
        role=str(item.get("Role") or ""),
        join_time=_int(item.get("JoinTime")),
        name_card=str(item.get("NameCard") or ""),
        msg_seq=_int(item.get("MsgSeq")),
        msg_flag=_enum_or_str(MsgFlag, item.get("MsgFlag")),
        last_send_msg_time=_int(item.get("LastSendMsgTime")),
    )
    for entry in _items(item.get("AppMemberDefinedData")):
        member.set_custom_data(entry.get("Key", ""), entry.get("Value"))
    return member


def group_from_info(info: Mapping[str, Any]) -> Group:
    """Build a Group from a service group item.

    A failed item yields a Group holding only its error.
    """
    code = _int(info.get("ErrorCode"))
    if code != SUCCESS_CODE:
        return Group(error=ImError(code, str(info.get("ErrorInfo") or "")))

    group = Group(
        id=str(info.get("GroupId") or ""),
        name=str(info.get("Name") or ""),
        group_type=_enum_or_str(GroupType, info.get("Type")),
        owner=str(info.get("Owner_Account") or ""),
        introduction=str(info.get("Introduction") or ""),
        notification=str(info.get("Notification") or ""),
        avatar=str(info.get("FaceUrl") or ""),
        member_num=_int(info.get("MemberNum")),
        max_member_num=_int(info.get("MaxMemberNum")),
        apply_join_option=_enum_or_str(ApplyJoinOption, info.get("ApplyJoinOption")),
        create_time=_int(info.get("CreateTime")),
        last_info_time=_int(info.get("LastInfoTime")),
        last_msg_time=_int(info.get("LastMsgTime")),
        next_msg_seq=_int(info.get("NextMsgSeq")),
        shut_up_status=_enum_or_str(ShutUpStatus, info.get("ShutUpAllMember")),
    )
    for entry in _items(info.get("AppDefinedData")):
        group.set_custom_data(entry.get("Key", ""), entry.get("Value"))
    group.add_members(*(member_from_item(m) for m in _items(info.get("MemberList"))))
    return group


@dataclass
class FetchGroupIdsRet:
    """One page of group ids in the app."""

    total: int = 0
    next: int = 0
    has_more: bool = False
    group_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> FetchGroupIdsRet:
        next_ = _int(data.get("Next"))
        return cls(
            total=_int(data.get("TotalCount")),
            next=next_,
            has_more=next_ != 0,
            group_ids=[str(item.get("GroupId") or "") for item in _items(data.get("GroupIdList"))],
        )


@dataclass
class FetchGroupsRet:
    """One page of groups in the app."""

    total: int = 0
    next: int = 0
    has_more: bool = False
    groups: list[Group] = field(default_factory=list)


@dataclass
class FetchMembersRet:
    """One page of a group's members."""

    total: int = 0
    has_more: bool = False
    members: list[Member] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any], limit: int, offset: int) -> FetchMembersRet:
        total = _int(data.get("MemberNum"))
        return cls(
            total=total,
            has_more=total > limit + offset,
            members=[member_from_item(m) for m in _items(data.get("MemberList"))],
        )


@dataclass
class FetchMemberGroupsArg:
    """Arguments for listing the groups a user has joined.

    A ``limit`` of 0 asks for all groups at once.
    """

    user_id: str
    limit: int = 0
    offset: int = 0
    group_type: GroupType | str = ""
    filter: Filter | None = None
    is_with_no_active_groups: bool = False
    is_with_live_room_groups: bool = False


@dataclass
class FetchMemberGroupsRet:
    """One page of the groups a user has joined."""

    total: int = 0
    has_more: bool = False
    groups: list[Group] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any], arg: FetchMemberGroupsArg) -> FetchMemberGroupsRet:
        total = _int(data.get("TotalCount"))
        has_more = False if arg.limit == 0 else arg.limit + arg.offset < total
        groups = []
        for info in _items(data.get("GroupIdList")):
            group = group_from_info(info)
            self_info = info.get("SelfInfo")
            if self_info is not None:
                group.add_members(member_from_item(self_info, arg.user_id))
            groups.append(group)
        return cls(total=total, has_more=has_more, groups=groups)


@dataclass(frozen=True)
class AddMembersResult:
    """Outcome of adding one member."""

    user_id: str
    result: int

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> AddMembersResult:
        return cls(user_id=str(data.get("Member_Account") or ""), result=_int(data.get("Result")))


@dataclass(frozen=True)
class ImportMemberResult:
    """Outcome of importing one member: 0 failed, 1 imported, 2 already a member."""

    user_id: str
    result: int

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> ImportMemberResult:
        return cls(user_id=str(data.get("Member_Account") or ""), result=_int(data.get("Result")))