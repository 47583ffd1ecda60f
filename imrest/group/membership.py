"""Membership commands: joined groups, roles, mutes and member changes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import replace
from enum import Enum
from typing import Any

from ..core import Client
from .member import Member
from .query import SERVICE_GROUP
from .results import (
    AddMembersResult,
    FetchMemberGroupsArg,
    FetchMemberGroupsRet,
    custom_data_items,
)

COMMAND_ADD_GROUP_MEMBERS = "add_group_member"
COMMAND_DELETE_GROUP_MEMBER = "delete_group_member"
COMMAND_MODIFY_GROUP_MEMBER_INFO = "modify_group_member_info"
COMMAND_FETCH_MEMBER_GROUPS = "get_joined_group_list"
COMMAND_GET_ROLE_IN_GROUP = "get_role_in_group"
COMMAND_FORBID_SEND_MSG = "forbid_send_msg"
COMMAND_GET_GROUP_SHUTTED_UIN = "get_group_shutted_uin"
COMMAND_GET_ONLINE_MEMBER_NUM = "get_online_member_num"


def _value(item: str | Enum | None) -> str:
    if item is None:
        return ""
    return item.value if isinstance(item, Enum) else str(item)


class MemberAPI:
    """Commands about group membership."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def fetch_member_groups(self, arg: FetchMemberGroupsArg) -> FetchMemberGroupsRet:
        """Fetch one page of the groups a user has joined."""
        payload: dict[str, Any] = {"Member_Account": arg.user_id}
        if arg.limit:
            payload["Limit"] = arg.limit
        if arg.offset:
            payload["Offset"] = arg.offset
        type_name = _value(arg.group_type)
        if type_name:
            payload["Type"] = type_name
        if arg.is_with_live_room_groups:
            payload["WithHugeGroups"] = 1
        if arg.is_with_no_active_groups:
            payload["WithNoActiveGroups"] = 1
        if arg.filter is not None:
            entries = {
                "GroupBaseInfoFilter": arg.filter.base_info_fields(),
                "SelfInfoFilter": arg.filter.member_info_fields(),
            }
            payload["ResponseFilter"] = {key: val for key, val in entries.items() if val}
        resp = self._client.post(SERVICE_GROUP, COMMAND_FETCH_MEMBER_GROUPS, payload)
        return FetchMemberGroupsRet.from_json(resp, arg)

    def pull_member_groups(self, arg: FetchMemberGroupsArg) -> Iterator[FetchMemberGroupsRet]:
        """Yield successive pages of a user's groups from the first one on."""
        page = replace(arg, offset=0)
        while True:
            ret = self.fetch_member_groups(page)
            yield ret
            if not ret.has_more:
                return
            page = replace(page, offset=page.offset + arg.limit)

    def get_roles_in_group(self, group_id: str, user_ids: Iterable[str]) -> dict[str, str]:
        """Return each user's role in the group."""
        payload = {"GroupId": group_id, "User_Account": list(user_ids)}
        resp = self._client.post(SERVICE_GROUP, COMMAND_GET_ROLE_IN_GROUP, payload)
        return {
            str(item.get("Member_Account") or ""): str(item.get("Role") or "")
            for item in resp.get("UserIdList") or []
        }

    def get_shutted_up_members(self, group_id: str) -> dict[str, int]:
        """Return the muted members and the time their mute ends."""
        resp = self._client.post(
            SERVICE_GROUP, COMMAND_GET_GROUP_SHUTTED_UIN, {"GroupId": group_id}
        )
        return {
            str(item.get("Member_Account") or ""): int(item.get("ShuttedUntil") or 0)
            for item in resp.get("ShuttedUinList") or []
        }

    def get_online_member_num(self, group_id: str) -> int:
        """Return the number of online members of a live room group."""
        resp = self._client.post(
            SERVICE_GROUP, COMMAND_GET_ONLINE_MEMBER_NUM, {"GroupId": group_id}
        )
        return int(resp.get("OnlineMemberNum") or 0)

    def add_members(
        self, group_id: str, user_ids: Iterable[str], silence: bool = False
    ) -> list[AddMembersResult]:
        """Add users to a group, optionally without notifying the group."""
        payload: dict[str, Any] = {"GroupId": group_id}
        if silence:
            payload["Silence"] = 1
        payload["MemberList"] = [{"Member_Account": uid} for uid in user_ids]
        resp = self._client.post(SERVICE_GROUP, COMMAND_ADD_GROUP_MEMBERS, payload)
        return [AddMembersResult.from_json(item) for item in resp.get("MemberList") or []]

    def delete_members(
        self,
        group_id: str,
        user_ids: Iterable[str],
        reason: str = "",
        silence: bool = False,
    ) -> None:
        """Remove users from a group."""
        payload = {
            "GroupId": group_id,
            "Silence": 1 if silence else 0,
            "Reason": reason,
            "MemberToDel_Account": list(user_ids),
        }
        self._client.post(SERVICE_GROUP, COMMAND_DELETE_GROUP_MEMBER, payload)

    def update_member(self, group_id: str, member: Member) -> None:
        """Change a member's role, name card, message flag, mute or custom data."""
        member.check()
        payload: dict[str, Any] = {"GroupId": group_id, "Member_Account": member.user_id}
        if member.role:
            payload["Role"] = member.role
        if member.name_card:
            payload["NameCard"] = member.name_card
        msg_flag = _value(member.msg_flag)
        if msg_flag:
            payload["MsgFlag"] = msg_flag
        if member.shut_up_until is not None:
            payload["ShutUpUntil"] = member.shut_up_until
        custom = custom_data_items(member.custom_data)
        if custom:
            payload["AppMemberDefinedData"] = custom
        self._client.post(SERVICE_GROUP, COMMAND_MODIFY_GROUP_MEMBER_INFO, payload)

    def forbid_send_message(
        self, group_id: str, user_ids: Iterable[str], shut_up_time: int
    ) -> None:
        """Mute users for ``shut_up_time`` seconds; 0 lifts the mute."""
        payload = {
            "GroupId": group_id,
            "Members_Account": list(user_ids),
            "ShutUpTime": shut_up_time,
        }
        self._client.post(SERVICE_GROUP, COMMAND_FORBID_SEND_MSG, payload)

    def allow_send_message(self, group_id: str, user_ids: Iterable[str]) -> None:
        """Lift the mute on users."""
        self.forbid_send_message(group_id, user_ids, 0)