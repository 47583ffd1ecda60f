"""Read-only group queries: listing groups, group profiles and members."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Any

from ..core import INVALID_PARAMS_CODE, Client, ImError
from .filter import Filter
from .group import Group, GroupType
from .results import FetchGroupIdsRet, FetchGroupsRet, FetchMembersRet, group_from_info

SERVICE_GROUP = "group_open_http_svc"

COMMAND_FETCH_GROUP_IDS = "get_appid_group_list"
COMMAND_GET_GROUPS = "get_group_info"
COMMAND_FETCH_GROUP_MEMBERS = "get_group_member_info"

BATCH_GET_GROUPS_LIMIT = 50


def _value(item: str | Enum | None) -> str:
    if item is None:
        return ""
    return item.value if isinstance(item, Enum) else str(item)


def _response_filter(filter: Filter) -> dict[str, list[str]]:
    entries = {
        "GroupBaseInfoFilter": filter.base_info_fields(),
        "MemberInfoFilter": filter.member_info_fields(),
        "AppDefinedDataFilter_Group": filter.group_custom_data_fields(),
        "AppDefinedDataFilter_GroupMember": filter.member_custom_data_fields(),
    }
    return {key: fields for key, fields in entries.items() if fields}


class GroupReader:
    """Queries that read groups and their members."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def fetch_group_ids(
        self, limit: int = 0, next_: int = 0, group_type: GroupType | str | None = None
    ) -> FetchGroupIdsRet:
        """Fetch one page of the app's group ids, optionally of one type."""
        payload: dict[str, Any] = {}
        if limit:
            payload["Limit"] = limit
        if next_:
            payload["Next"] = next_
        type_name = _value(group_type)
        if type_name:
            payload["Type"] = type_name
        resp = self._client.post(SERVICE_GROUP, COMMAND_FETCH_GROUP_IDS, payload)
        return FetchGroupIdsRet.from_json(resp)

    def fetch_groups(
        self,
        limit: int = 0,
        next_: int = 0,
        group_type: GroupType | str | None = None,
        filter: Filter | None = None,
    ) -> FetchGroupsRet:
        """Fetch one page of the app's groups with their profiles."""
        if limit > BATCH_GET_GROUPS_LIMIT:
            raise ImError(
                INVALID_PARAMS_CODE,
                f"the number of groups id cannot exceed {BATCH_GET_GROUPS_LIMIT}",
            )
        ids = self.fetch_group_ids(limit, next_, group_type)
        ret = FetchGroupsRet(total=ids.total, next=ids.next, has_more=ids.has_more)
        if ids.group_ids:
            ret.groups = self.get_groups(ids.group_ids, filter)
        return ret

    def pull_groups(
        self,
        limit: int = 0,
        group_type: GroupType | str | None = None,
        filter: Filter | None = None,
    ) -> Iterator[FetchGroupsRet]:
        """Yield successive pages of the app's groups until none remain."""
        next_ = 0
        while True:
            ret = self.fetch_groups(limit, next_, group_type, filter)
            yield ret
            if not ret.has_more:
                return
            next_ = ret.next

    def get_group(self, group_id: str, filter: Filter | None = None) -> Group | None:
        """Return one group's profile, or None if it was not returned."""
        groups = self.get_groups([group_id], filter)
        if not groups:
            return None
        group = groups[0]
        if group.error is not None:
            raise group.error
        return group

    def get_groups(self, group_ids: Iterable[str], filter: Filter | None = None) -> list[Group]:
        """Return the profiles of the given groups; groups that failed are left out."""
        ids = list(group_ids)
        if not ids:
            raise ImError(INVALID_PARAMS_CODE, "the group's id is not set")
        if len(ids) > BATCH_GET_GROUPS_LIMIT:
            raise ImError(
                INVALID_PARAMS_CODE,
                f"the number of group's id cannot exceed {BATCH_GET_GROUPS_LIMIT}",
            )
        payload: dict[str, Any] = {"GroupIdList": ids}
        if filter is not None:
            response_filter = _response_filter(filter)
            if response_filter:
                payload["ResponseFilter"] = response_filter
        resp = self._client.post(SERVICE_GROUP, COMMAND_GET_GROUPS, payload)
        groups = (group_from_info(info) for info in resp.get("GroupInfo") or [])
        return [group for group in groups if group.is_valid]

    def fetch_members(
        self, group_id: str, limit: int = 0, offset: int = 0, filter: Filter | None = None
    ) -> FetchMembersRet:
        """Fetch one page of a group's members."""
        payload: dict[str, Any] = {
            "GroupId": group_id,
            "Limit": limit,
            "Offset": offset,
            "MemberInfoFilter": None,
            "MemberRoleFilter": None,
            "AppDefinedDataFilter_GroupMember": None,
        }
        if filter is not None:
            payload["MemberInfoFilter"] = filter.member_info_fields() or None
            payload["MemberRoleFilter"] = filter.member_roles() or None
            payload["AppDefinedDataFilter_GroupMember"] = (
                filter.member_custom_data_fields() or None
            )
        resp = self._client.post(SERVICE_GROUP, COMMAND_FETCH_GROUP_MEMBERS, payload)
        return FetchMembersRet.from_json(resp, limit, offset)

    def pull_members(
        self, group_id: str, limit: int = 0, filter: Filter | None = None
    ) -> Iterator[FetchMembersRet]:
        """Yield successive pages of a group's members until none remain.

        A ``limit`` of 0 asks for all members in a single page.
        """
        offset = 0
        while True:
            ret = self.fetch_members(group_id, limit, offset, filter)
            yield ret
            if not ret.has_more or limit <= 0:
                return
            offset += limit