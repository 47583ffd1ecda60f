import pytest

from imrest.core import ImError
from imrest.group.group import ApplyJoinOption, GroupType, ShutUpStatus
from imrest.group.member import MsgFlag
from imrest.group.results import (
    AddMembersResult,
    FetchGroupIdsRet,
    FetchGroupsRet,
    FetchMemberGroupsArg,
    FetchMemberGroupsRet,
    FetchMembersRet,
    ImportMemberResult,
    custom_data_items,
    group_from_info,
    member_from_item,
)


def _member_item(user_id="alice"):
    return {
        "Member_Account": user_id,
        "Role": "Admin",
        "JoinTime": 1600000000,
        "NameCard": "card",
        "MsgSeq": 7,
        "MsgFlag": "AcceptNotNotify",
        "LastSendMsgTime": 1600000100,
        "AppMemberDefinedData": [{"Key": "level", "Value": "3"}],
    }


def test_custom_data_items_encodes_each_pair():
    items = custom_data_items({"a": 1, "b": "x"})
    assert items == [{"Key": "a", "Value": 1}, {"Key": "b", "Value": "x"}]


def test_custom_data_items_of_nothing_is_empty():
    assert custom_data_items(None) == []
    assert custom_data_items({}) == []


def test_member_from_item_reads_fields():
    member = member_from_item(_member_item())
    assert member.user_id == "alice"
    assert member.role == "Admin"
    assert member.join_time == 1600000000
    assert member.name_card == "card"
    assert member.msg_seq == 7
    assert member.msg_flag is MsgFlag.ACCEPT_NOT_NOTIFY
    assert member.last_send_msg_time == 1600000100
    assert member.get_custom_data("level") == "3"


def test_member_from_item_user_id_override():
    member = member_from_item({"Role": "Member"}, "bob")
    assert member.user_id == "bob"
    assert member.role == "Member"


def test_member_from_item_keeps_unknown_flag_as_text():
    member = member_from_item({"Member_Account": "c", "MsgFlag": "Other"})
    assert member.msg_flag == "Other"


def test_custom_data_round_trip_through_member():
    data = {"k1": "v1", "k2": 2}
    member = member_from_item({"Member_Account": "u", "AppMemberDefinedData": custom_data_items(data)})
    assert member.custom_data == data


def test_group_from_info_reads_fields_and_members():
    info = {
        "GroupId": "g1",
        "Name": "team",
        "Type": "Public",
        "Owner_Account": "alice",
        "Introduction": "intro",
        "Notification": "note",
        "FaceUrl": "https://example.com/face.png",
        "MemberNum": 2,
        "MaxMemberNum": 200,
        "ApplyJoinOption": "FreeAccess",
        "CreateTime": 1600000000,
        "LastInfoTime": 1600000001,
        "LastMsgTime": 1600000002,
        "NextMsgSeq": 5,
        "ShutUpAllMember": "Off",
        "AppDefinedData": [{"Key": "topic", "Value": "chat"}],
        "MemberList": [_member_item("alice"), _member_item("bob")],
    }
    group = group_from_info(info)
    assert group.is_valid
    assert group.id == "g1"
    assert group.name == "team"
    assert group.group_type is GroupType.PUBLIC
    assert group.owner == "alice"
    assert group.introduction == "intro"
    assert group.notification == "note"
    assert group.member_num == 2
    assert group.max_member_num == 200
    assert group.apply_join_option is ApplyJoinOption.FREE_ACCESS
    assert group.shut_up_status is ShutUpStatus.OFF
    assert group.create_time == 1600000000
    assert group.next_msg_seq == 5
    assert group.get_custom_data("topic") == "chat"
    assert [m.user_id for m in group.members] == ["alice", "bob"]


def test_group_from_info_with_error_holds_only_error():
    group = group_from_info({"GroupId": "g2", "ErrorCode": 10010, "ErrorInfo": "gone"})
    assert not group.is_valid
    assert isinstance(group.error, ImError)
    assert group.error.code == 10010
    assert group.error.message == "gone"
    assert group.id == ""


def test_fetch_group_ids_ret_has_more_follows_next():
    ret = FetchGroupIdsRet.from_json(
        {"Next": 42, "TotalCount": 3, "GroupIdList": [{"GroupId": "a"}, {"GroupId": "b"}]}
    )
    assert ret.has_more is True
    assert ret.next == 42
    assert ret.total == 3
    assert ret.group_ids == ["a", "b"]

    last = FetchGroupIdsRet.from_json({"Next": 0, "TotalCount": 3, "GroupIdList": []})
    assert last.has_more is False
    assert last.group_ids == []


def test_fetch_groups_ret_defaults_empty():
    ret = FetchGroupsRet()
    assert ret.groups == []
    assert ret.has_more is False


@pytest.mark.parametrize(
    ("total", "limit", "offset", "more"),
    [(10, 5, 0, True), (10, 5, 5, False), (10, 20, 0, False), (11, 5, 5, True)],
)
def test_fetch_members_ret_has_more(total, limit, offset, more):
    ret = FetchMembersRet.from_json({"MemberNum": total, "MemberList": []}, limit, offset)
    assert ret.has_more is more
    assert ret.total == total


def test_fetch_members_ret_decodes_members():
    ret = FetchMembersRet.from_json({"MemberNum": 1, "MemberList": [_member_item("zed")]}, 10, 0)
    assert [m.user_id for m in ret.members] == ["zed"]


def test_fetch_member_groups_ret_zero_limit_never_has_more():
    arg = FetchMemberGroupsArg(user_id="alice")
    ret = FetchMemberGroupsRet.from_json({"TotalCount": 50, "GroupIdList": []}, arg)
    assert ret.has_more is False
    assert ret.total == 50


def test_fetch_member_groups_ret_paging_and_self_info():
    arg = FetchMemberGroupsArg(user_id="alice", limit=1, offset=0)
    data = {
        "TotalCount": 2,
        "GroupIdList": [
            {"GroupId": "g1", "Name": "one", "SelfInfo": {"Role": "Owner", "MsgFlag": "Discard"}},
        ],
    }
    ret = FetchMemberGroupsRet.from_json(data, arg)
    assert ret.has_more is True
    assert [g.id for g in ret.groups] == ["g1"]
    member = ret.groups[0].members[0]
    assert member.user_id == "alice"
    assert member.role == "Owner"
    assert member.msg_flag is MsgFlag.DISCARD

    arg.offset = 1
    assert FetchMemberGroupsRet.from_json(data, arg).has_more is False


def test_add_and_import_member_results_from_json():
    added = AddMembersResult.from_json({"Member_Account": "a", "Result": 1})
    imported = ImportMemberResult.from_json({"Member_Account": "b", "Result": 2})
    assert added == AddMembersResult(user_id="a", result=1)
    assert imported == ImportMemberResult(user_id="b", result=2)