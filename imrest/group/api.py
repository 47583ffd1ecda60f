"""Group management: creating, changing and importing groups and their messages."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from .group import Group
from .member import Member
from .membership import MemberAPI
from .query import SERVICE_GROUP, GroupReader
from .results import ImportMemberResult, custom_data_items
from ..core import SUCCESS_CODE, ImError

COMMAND_CREATE_GROUP = "create_group"
COMMAND_DESTROY_GROUP = "destroy_group"
COMMAND_UPDATE_GROUP = "modify_group_base_info"
COMMAND_SEND_GROUP_SYSTEM_NOTIFICATION = "send_group_system_notification"
COMMAND_CHANGE_GROUP_OWNER = "change_group_owner"
COMMAND_RECALL_GROUP_MSG = "group_msg_recall"
COMMAND_IMPORT_GROUP = "import_group"
COMMAND_IMPORT_GROUP_MEMBER = "import_group_member"
COMMAND_SET_UNREAD_MSG_NUM = "set_unread_msg_num"
COMMAND_DELETE_GROUP_MSG_BY_SENDER = "delete_group_msg_by_sender"


def _value(item: str | Enum | None) -> str:
    if item is None:
        return ""
    return item.value if isinstance(item, Enum) else str(item)


def _put(payload: dict[str, Any], key: str, value: Any) -> None:
    """Set ``key`` only when ``value`` is not empty."""
    if value:
        payload[key] = value


def _group_profile(group: Group) -> dict[str, Any]:
    """Encode the profile fields shared by group creation and import."""
    payload: dict[str, Any] = {}
    _put(payload, "Owner_Account", group.owner)
    _put(payload, "GroupId", group.id)
    payload["Type"] = _value(group.group_type)
    payload["Name"] = group.name
    _put(payload, "Introduction", group.introduction)
    _put(payload, "Notification", group.notification)
    _put(payload, "FaceUrl", group.avatar)
    _put(payload, "MaxMemberCount", group.max_member_num)
    _put(payload, "ApplyJoinOption", _value(group.apply_join_option))
    _put(payload, "AppDefinedData", custom_data_items(group.custom_data))
    return payload


def _initial_member_item(member: Member) -> dict[str, Any]:
    member.check()
    item: dict[str, Any] = {"Member_Account": member.user_id}
    _put(item, "Role", member.role)
    _put(item, "JoinTime", member.join_time)
    _put(item, "NameCard", member.name_card)
    item["ShutUpUntil"] = 0
    _put(item, "AppMemberDefinedData", custom_data_items(member.custom_data))
    return item


def _imported_member_item(member: Member) -> dict[str, Any]:
    item: dict[str, Any] = {"Member_Account": member.user_id}
    _put(item, "Role", member.role)
    _put(item, "JoinTime", member.join_time)
    item["ShutUpUntil"] = 0
    _put(item, "UnreadMsgNum", member.unread_msg_num)
    return item


class GroupAPI(GroupReader, MemberAPI):
    """The full set of group commands."""

    def create_group(self, group: Group) -> str:
        """Create a group with its initial members; return the new group's id."""
        group.check_create()
        payload = _group_profile(group)
        _put(payload, "MemberList", [_initial_member_item(m) for m in group.members])
        resp = self._client.post(SERVICE_GROUP, COMMAND_CREATE_GROUP, payload)
        return str(resp.get("GroupId") or "")

    def update_group(self, group: Group) -> None:
        """Change a group's base profile."""
        group.check_update()
        payload: dict[str, Any] = {"GroupId": group.id}
        _put(payload, "Name", group.name)
        _put(payload, "Introduction", group.introduction)
        _put(payload, "Notification", group.notification)
        _put(payload, "FaceUrl", group.avatar)
        _put(payload, "MaxMemberNum", group.max_member_num)
        _put(payload, "ApplyJoinOption", _value(group.apply_join_option))
        _put(payload, "ShutUpAllMember", _value(group.shut_up_status))
        _put(payload, "AppDefinedData", custom_data_items(group.custom_data))
        self._client.post(SERVICE_GROUP, COMMAND_UPDATE_GROUP, payload)

    def destroy_group(self, group_id: str) -> None:
        """Dissolve a group."""
        self._client.post(SERVICE_GROUP, COMMAND_DESTROY_GROUP, {"GroupId": group_id})

    def change_group_owner(self, group_id: str, user_id: str) -> None:
        """Make a member the group's owner."""
        payload = {"GroupId": group_id, "NewOwner_Account": user_id}
        self._client.post(SERVICE_GROUP, COMMAND_CHANGE_GROUP_OWNER, payload)

    def send_notification(self, group_id: str, content: str, *user_ids: str) -> None:
        """Send a system notification to the given members, or to all when none."""
        payload: dict[str, Any] = {"GroupId": group_id, "Content": content}
        _put(payload, "ToMembers_Account", list(user_ids))
        self._client.post(SERVICE_GROUP, COMMAND_SEND_GROUP_SYSTEM_NOTIFICATION, payload)

    def revoke_message(self, group_id: str, msg_seq: int) -> None:
        """Revoke one message, raising ImError if the service refused."""
        code = self.revoke_messages(group_id, msg_seq).get(msg_seq, SUCCESS_CODE)
        if code != SUCCESS_CODE:
            raise ImError(code, "message revoke failed")

    def revoke_messages(self, group_id: str, *msg_seqs: int) -> dict[int, int]:
        """Revoke messages; return each sequence number's result code."""
        payload = {
            "GroupId": group_id,
            "MsgSeqList": [{"MsgSeq": seq} for seq in msg_seqs],
        }
        resp = self._client.post(SERVICE_GROUP, COMMAND_RECALL_GROUP_MSG, payload)
        results: Mapping[int, int] = {
            int(item.get("MsgSeq") or 0): int(item.get("RetCode") or 0)
            for item in resp.get("Results") or []
        }
        return dict(results)

    def import_group(self, group: Group) -> str:
        """Import a group without callbacks or notifications; return its id."""
        group.check_import()
        payload = _group_profile(group)
        payload["CreateTime"] = group.create_time
        resp = self._client.post(SERVICE_GROUP, COMMAND_IMPORT_GROUP, payload)
        return str(resp.get("GroupId") or "")

    def import_members(self, group_id: str, *members: Member) -> list[ImportMemberResult]:
        """Import members into a group without callbacks or notifications."""
        payload = {
            "GroupId": group_id,
            "MemberList": [_imported_member_item(m) for m in members],
        }
        resp = self._client.post(SERVICE_GROUP, COMMAND_IMPORT_GROUP_MEMBER, payload)
        return [ImportMemberResult.from_json(item) for item in resp.get("MemberList") or []]

    def set_member_unread_msg_num(self, group_id: str, user_id: str, unread_msg_num: int) -> None:
        """Set a member's unread message count."""
        payload = {
            "GroupId": group_id,
            "Member_Account": user_id,
            "UnreadMsgNum": unread_msg_num,
        }
        self._client.post(SERVICE_GROUP, COMMAND_SET_UNREAD_MSG_NUM, payload)

    def revoke_member_messages(self, group_id: str, user_id: str) -> None:
        """Revoke the recent messages a member sent in a group."""
        payload = {"GroupId": group_id, "Sender_Account": user_id}
        self._client.post(SERVICE_GROUP, COMMAND_DELETE_GROUP_MSG_BY_SENDER, payload)