from __future__ import annotations

from typing import Any

import pytest

from imrest.core import INVALID_PARAMS_CODE, Client, ImError
from imrest.group.filter import BaseInfoField, Filter, MemberInfoField
from imrest.group.group import GroupType
from imrest.group.query import GroupReader


class FakeTransport:
    def __init__(self, responses: dict[str, list[dict[str, Any]]]) -> None:
        self.responses = {key: list(value) for key, value in responses.items()}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def __call__(self, service: str, command: str, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((service, command, payload))
        return self.responses[command].pop(0)

    def commands(self) -> list[str]:
        return [command for _, command, _ in self.calls]


def make_reader(responses: dict[str, list[dict[str, Any]]]) -> tuple[GroupReader, FakeTransport]:
    transport = FakeTransport(responses)
    return GroupReader(Client(transport)), transport


def test_fetch_group_ids_sends_payload_and_decodes():
    reader, transport = make_reader(
        {
            "get_appid_group_list": [
                {"Next": 7, "TotalCount": 3, "GroupIdList": [{"GroupId": "g1"}, {"GroupId": "g2"}]}
            ]
        }
    )
    ret = reader.fetch_group_ids(2, 5, GroupType.PUBLIC)
    service, command, payload = transport.calls[0]
    assert service == "group_open_http_svc"
    assert command == "get_appid_group_list"
    assert payload == {"Limit": 2, "Next": 5, "Type": "Public"}
    assert ret.group_ids == ["g1", "g2"]
    assert ret.next == 7
    assert ret.total == 3
    assert ret.has_more is True


def test_fetch_group_ids_omits_unset_fields():
    reader, transport = make_reader({"get_appid_group_list": [{"Next": 0, "TotalCount": 0}]})
    ret = reader.fetch_group_ids()
    assert transport.calls[0][2] == {}
    assert ret.has_more is False
    assert ret.group_ids == []


def test_fetch_groups_rejects_large_limit_without_request():
    reader, transport = make_reader({})
    with pytest.raises(ImError) as info:
        reader.fetch_groups(51)
    assert info.value.code == INVALID_PARAMS_CODE
    assert "50" in info.value.message
    assert transport.calls == []


def test_fetch_groups_without_ids_skips_profile_request():
    reader, transport = make_reader({"get_appid_group_list": [{"Next": 0, "TotalCount": 0}]})
    ret = reader.fetch_groups(10)
    assert transport.commands() == ["get_appid_group_list"]
    assert ret.groups == []
    assert ret.has_more is False


def test_fetch_groups_loads_profiles_with_filter():
    reader, transport = make_reader(
        {
            "get_appid_group_list": [
                {"Next": 9, "TotalCount": 4, "GroupIdList": [{"GroupId": "g1"}]}
            ],
            "get_group_info": [
                {"GroupInfo": [{"GroupId": "g1", "Name": "first", "Type": "Public"}]}
            ],
        }
    )
    flt = Filter()
    flt.add_base_info_filter(BaseInfoField.NAME)
    ret = reader.fetch_groups(1, 0, GroupType.PUBLIC, flt)
    assert transport.commands() == ["get_appid_group_list", "get_group_info"]
    payload = transport.calls[1][2]
    assert payload["GroupIdList"] == ["g1"]
    assert payload["ResponseFilter"] == {"GroupBaseInfoFilter": ["Name"]}
    assert [g.id for g in ret.groups] == ["g1"]
    assert ret.groups[0].name == "first"
    assert ret.next == 9
    assert ret.has_more is True


def test_pull_groups_follows_next_until_done():
    reader, transport = make_reader(
        {
            "get_appid_group_list": [
                {"Next": 11, "TotalCount": 2, "GroupIdList": [{"GroupId": "a"}]},
                {"Next": 0, "TotalCount": 2, "GroupIdList": [{"GroupId": "b"}]},
            ],
            "get_group_info": [
                {"GroupInfo": [{"GroupId": "a"}]},
                {"GroupInfo": [{"GroupId": "b"}]},
            ],
        }
    )
    pages = list(reader.pull_groups(1))
    assert [[g.id for g in page.groups] for page in pages] == [["a"], ["b"]]
    id_calls = [p for _, c, p in transport.calls if c == "get_appid_group_list"]
    assert id_calls[0].get("Next") is None
    assert id_calls[1]["Next"] == 11


def test_get_groups_validates_count():
    reader, transport = make_reader({})
    with pytest.raises(ImError) as empty:
        reader.get_groups([])
    assert empty.value.message == "the group's id is not set"
    with pytest.raises(ImError) as many:
        reader.get_groups([f"g{i}" for i in range(51)])
    assert many.value.code == INVALID_PARAMS_CODE
    assert transport.calls == []


def test_get_groups_drops_failed_items():
    reader, _ = make_reader(
        {
            "get_group_info": [
                {
                    "GroupInfo": [
                        {"GroupId": "ok", "Name": "fine"},
                        {"GroupId": "bad", "ErrorCode": 10010, "ErrorInfo": "missing"},
                    ]
                }
            ]
        }
    )
    groups = reader.get_groups(["ok", "bad"])
    assert [g.id for g in groups] == ["ok"]
    assert all(g.is_valid for g in groups)


def test_get_group_returns_group_or_none():
    reader, _ = make_reader(
        {
            "get_group_info": [
                {"GroupInfo": [{"GroupId": "g1", "Name": "one", "MemberList": [{"Member_Account": "u1"}]}]},
                {"GroupInfo": [{"GroupId": "g2", "ErrorCode": 10010, "ErrorInfo": "missing"}]},
            ]
        }
    )
    group = reader.get_group("g1")
    assert group.id == "g1"
    assert [m.user_id for m in group.members] == ["u1"]
    assert reader.get_group("g2") is None


def test_service_error_propagates():
    reader, _ = make_reader({"get_group_info": [{"ErrorCode": 10015, "ErrorInfo": "invalid"}]})
    with pytest.raises(ImError) as info:
        reader.get_group("g1")
    assert info.value.code == 10015
    assert info.value.message == "invalid"


def test_fetch_members_payload_and_has_more():
    reader, transport = make_reader(
        {
            "get_group_member_info": [
                {"MemberNum": 5, "MemberList": [{"Member_Account": "u1", "Role": "Owner"}]}
            ]
        }
    )
    flt = Filter()
    flt.add_member_info_filter(MemberInfoField.ROLE)
    flt.add_member_role_filter("Admin")
    ret = reader.fetch_members("g1", 2, 1, flt)
    payload = transport.calls[0][2]
    assert transport.calls[0][1] == "get_group_member_info"
    assert payload["GroupId"] == "g1"
    assert payload["Limit"] == 2
    assert payload["Offset"] == 1
    assert payload["MemberInfoFilter"] == ["Role"]
    assert payload["MemberRoleFilter"] == ["Admin"]
    assert payload["AppDefinedDataFilter_GroupMember"] is None
    assert ret.total == 5
    assert ret.has_more is True
    assert ret.members[0].user_id == "u1"
    assert ret.members[0].role == "Owner"


def test_pull_members_advances_offset():
    reader, transport = make_reader(
        {
            "get_group_member_info": [
                {"MemberNum": 3, "MemberList": [{"Member_Account": "a"}, {"Member_Account": "b"}]},
                {"MemberNum": 3, "MemberList": [{"Member_Account": "c"}]},
            ]
        }
    )
    pages = list(reader.pull_members("g1", 2))
    assert [[m.user_id for m in page.members] for page in pages] == [["a", "b"], ["c"]]
    assert [p["Offset"] for _, _, p in transport.calls] == [0, 2]
    assert pages[-1].has_more is False


def test_pull_members_without_limit_yields_one_page():
    reader, transport = make_reader(
        {"get_group_member_info": [{"MemberNum": 2, "MemberList": [{"Member_Account": "a"}]}]}
    )
    pages = list(reader.pull_members("g1"))
    assert len(pages) == len(transport.calls) == 1
    assert pages[0].members[0].user_id == "a"