# imrest

A Python client for the administration side of an instant messaging REST
service. It covers account management (import, delete, check, kick, online
state) and group management (groups, members, response filters, muting,
system notifications, message revocation and importing groups and members).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## The client

Every API object is built on a `Client` from `imrest.core`. The client is
given a *transport*: any callable that takes `(service, command, payload)`,
sends the request however you like and returns the decoded JSON response as a
mapping. `Client.post(service, command, payload)` calls the transport and
checks the response's `ErrorCode`; a non-zero code raises `ImError`, which
carries the service's `code` and `message`.

```python
from imrest.core import Client

def transport(service, command, payload):
    # send payload to the service and return the decoded JSON reply
    ...

client = Client(transport)
```

Argument checks that the service would reject, such as an empty list of user
IDs or too many IDs in one batch, raise `ImError` (with code `-1`) before
anything is sent. A `Member` without a user ID raises `ValueError` when it is
checked.

## Accounts

```python
from imrest.account import Account, AccountAPI

accounts = AccountAPI(client)

accounts.import_account(Account(user_id="alice", nickname="Alice"))
failed = accounts.import_accounts("bob", "carol")   # ids that failed

if accounts.check_account("alice"):
    state = accounts.get_account_online_state("alice", True)
    if state is not None:
        print(state.status, [d.platform for d in state.detail])

accounts.kick_account("alice")
accounts.delete_account("alice")
```

`import_accounts`, `delete_accounts` and `check_accounts` take at most 100
user IDs per call. `delete_account`, `check_account` and
`get_account_online_state` raise `ImError` when the service reports a failure
for that one account. `check_accounts` returns `CheckResult` items whose
`status` is an `ImportedStatus`.

## Groups

`Group` and `Member` (in `imrest.group.group` and `imrest.group.member`) are
dataclasses that you fill in before you send them. `GroupAPI` in
`imrest.group.api` holds every group command; it includes the reading
commands of `GroupReader` and the membership commands of `MemberAPI`.

```python
from imrest.group.api import GroupAPI
from imrest.group.group import ApplyJoinOption, Group, GroupType
from imrest.group.member import Member

groups = GroupAPI(client)

group = Group(name="Book club", group_type=GroupType.PUBLIC)
group.apply_join_option = ApplyJoinOption.FREE_ACCESS
group.add_members(Member(user_id="alice"), Member(user_id="bob"))
group.set_custom_data("topic", "novels")

group_id = groups.create_group(group)
groups.send_notification(group_id, "Welcome!")          # to every member
groups.send_notification(group_id, "Hi Bob", "bob")     # to chosen members
groups.change_group_owner(group_id, "bob")
groups.revoke_message(group_id, 42)
groups.revoke_member_messages(group_id, "alice")
groups.destroy_group(group_id)
```

Group names must be set and may be at most 30 bytes of UTF-8, introductions
240 bytes and notifications 300 bytes; creating and importing also need a
valid group type. `Group.check_create()`, `check_import()` and
`check_update()` raise `ImError` when these rules are broken, and the matching
`GroupAPI` methods call them first.

For migrations, `import_group(group)` imports a group (with its
`create_time`), `import_members(group_id, *members)` imports members and
returns `ImportMemberResult` items, and `set_member_unread_msg_num` sets a
member's unread count.

### Reading groups and members

`GroupReader` (in `imrest.group.query`) fetches group IDs, group profiles and
member lists. The `pull_*` methods are generators that yield one page after
another until the service reports no more:

```python
from imrest.group.filter import BaseInfoField, Filter
from imrest.group.query import GroupReader

reader = GroupReader(client)

fields = Filter()
fields.add_base_info_filter(BaseInfoField.NAME)

for page in reader.pull_groups(50, None, fields):
    for group in page.groups:
        print(group.id, group.name)

for page in reader.pull_members(group_id, 100):
    for member in page.members:
        print(member.user_id, member.role)

group = reader.get_group(group_id)
```

`fetch_groups` and `get_groups` accept at most 50 groups per call.
`get_groups` leaves out groups the service could not return; `get_group`
raises that group's `ImError` instead.

### Membership

`MemberAPI` (in `imrest.group.membership`):

```python
from imrest.group.membership import MemberAPI
from imrest.group.results import FetchMemberGroupsArg

members = MemberAPI(client)

members.add_members(group_id, ["carol"], silence=False)
members.forbid_send_message(group_id, ["carol"], 3600)
print(members.get_shutted_up_members(group_id))
members.allow_send_message(group_id, ["carol"])
print(members.get_roles_in_group(group_id, ["alice", "carol"]))
members.delete_members(group_id, ["carol"], reason="spam", silence=True)

for page in members.pull_member_groups(FetchMemberGroupsArg(user_id="alice", limit=20)):
    for joined in page.groups:
        print(joined.id, joined.members[0].role)
```

`update_member(group_id, member)` sends a member's role, name card, message
flag (`MsgFlag`), mute (`shut_up_until`) and custom data.

## What this package does not do

- It has no network code of its own: you supply the transport, including the
  service address and any signing of requests. It does not generate user
  signatures.
- It does not send, fetch or import group messages, and has no commands for
  one-to-one messages, profiles, friend lists, global muting, push or recent
  contacts.
- It does not receive or dispatch the service's callback events.