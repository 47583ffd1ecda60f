"""Account management: import, delete, check, kick and online state."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .core import INVALID_PARAMS_CODE, SUCCESS_CODE, Client, ImError

SERVICE_ACCOUNT = "im_open_login_svc"
SERVICE_OPENIM = "openim"

COMMAND_IMPORT_ACCOUNT = "account_import"
COMMAND_IMPORT_ACCOUNTS = "multiaccount_import"
COMMAND_DELETE_ACCOUNTS = "account_delete"
COMMAND_CHECK_ACCOUNTS = "account_check"
COMMAND_KICK_ACCOUNT = "kick"
COMMAND_QUERY_ONLINE_STATUS = "query_online_status"

BATCH_IMPORT_ACCOUNTS_LIMIT = 100
BATCH_DELETE_ACCOUNTS_LIMIT = 100
BATCH_CHECK_ACCOUNTS_LIMIT = 100


class ImportedStatus(str, Enum):
    """Whether an account has been imported."""

    NOT_IMPORTED = "NotImported"
    IMPORTED = "Imported"


@dataclass
class Account:
    """A single account to import."""

    user_id: str
    nickname: str = ""
    face_url: str = ""

    def to_payload(self) -> dict[str, Any]:
        return {"Identifier": self.user_id, "Nick": self.nickname, "FaceUrl": self.face_url}


@dataclass(frozen=True)
class DeleteResult:
    user_id: str
    result_code: int = SUCCESS_CODE
    result_info: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> DeleteResult:
        return cls(
            user_id=data.get("UserID", ""),
            result_code=int(data.get("ResultCode") or 0),
            result_info=data.get("ResultInfo", ""),
        )


def _parse_status(value: str) -> ImportedStatus | str:
    try:
        return ImportedStatus(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class CheckResult:
    user_id: str
    status: ImportedStatus | str = ""
    result_code: int = SUCCESS_CODE
    result_info: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> CheckResult:
        return cls(
            user_id=data.get("UserID", ""),
            status=_parse_status(data.get("AccountStatus", "")),
            result_code=int(data.get("ResultCode") or 0),
            result_info=data.get("ResultInfo", ""),
        )


@dataclass(frozen=True)
class OnlineStatusPlatform:
    platform: str
    status: str

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> OnlineStatusPlatform:
        return cls(platform=data.get("Platform", ""), status=data.get("Status", ""))


@dataclass(frozen=True)
class OnlineStatusResult:
    user_id: str
    status: str
    detail: list[OnlineStatusPlatform] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> OnlineStatusResult:
        return cls(
            user_id=data.get("To_Account", ""),
            status=data.get("Status", ""),
            detail=[OnlineStatusPlatform.from_json(d) for d in data.get("Detail") or []],
        )


@dataclass(frozen=True)
class OnlineStatusError:
    user_id: str
    error_code: int

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> OnlineStatusError:
        return cls(user_id=data.get("To_Account", ""), error_code=int(data.get("ErrorCode") or 0))


@dataclass(frozen=True)
class OnlineStatusRet:
    results: list[OnlineStatusResult] = field(default_factory=list)
    errors: list[OnlineStatusError] = field(default_factory=list)


def _check_batch(user_ids: tuple[str, ...], limit: int, empty_message: str, verb: str) -> None:
    if not user_ids:
        raise ImError(INVALID_PARAMS_CODE, empty_message)
    if len(user_ids) > limit:
        raise ImError(
            INVALID_PARAMS_CODE,
            f"the number of {verb} accounts cannot exceed {limit}",
        )


class AccountAPI:
    """Account management commands."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def import_account(self, account: Account) -> None:
        self._client.post(SERVICE_ACCOUNT, COMMAND_IMPORT_ACCOUNT, account.to_payload())

    def import_accounts(self, *user_ids: str) -> list[str]:
        """Import several accounts; return the ids that failed."""
        _check_batch(user_ids, BATCH_IMPORT_ACCOUNTS_LIMIT, "the userid is not set", "imported")
        resp = self._client.post(
            SERVICE_ACCOUNT, COMMAND_IMPORT_ACCOUNTS, {"Accounts": list(user_ids)}
        )
        return list(resp.get("FailAccounts") or [])

    def delete_account(self, user_id: str) -> None:
        for result in self.delete_accounts(user_id):
            if result.user_id == user_id and result.result_code != SUCCESS_CODE:
                raise ImError(result.result_code, result.result_info)

    def delete_accounts(self, *user_ids: str) -> list[DeleteResult]:
        _check_batch(user_ids, BATCH_DELETE_ACCOUNTS_LIMIT, "the userid is not set", "deleted")
        payload = {"DeleteItem": [{"UserID": uid} for uid in user_ids]}
        resp = self._client.post(SERVICE_ACCOUNT, COMMAND_DELETE_ACCOUNTS, payload)
        return [DeleteResult.from_json(item) for item in resp.get("ResultItem") or []]

    def check_account(self, user_id: str) -> bool:
        """Return whether the account has been imported."""
        for result in self.check_accounts(user_id):
            if result.user_id == user_id:
                if result.result_code != SUCCESS_CODE:
                    raise ImError(result.result_code, result.result_info)
                return result.status == ImportedStatus.IMPORTED
        return False

    def check_accounts(self, *user_ids: str) -> list[CheckResult]:
        _check_batch(user_ids, BATCH_CHECK_ACCOUNTS_LIMIT, "the account is not set", "checked")
        payload = {"CheckItem": [{"UserID": uid} for uid in user_ids]}
        resp = self._client.post(SERVICE_ACCOUNT, COMMAND_CHECK_ACCOUNTS, payload)
        return [CheckResult.from_json(item) for item in resp.get("ResultItem") or []]

    def kick_account(self, user_id: str) -> None:
        self._client.post(SERVICE_ACCOUNT, COMMAND_KICK_ACCOUNT, {"Identifier": user_id})

    def get_account_online_state(
        self, user_id: str, is_need_detail: bool = False
    ) -> OnlineStatusResult | None:
        ret = self.get_accounts_online_state([user_id], is_need_detail)
        for err in ret.errors:
            if err.user_id == user_id and err.error_code != SUCCESS_CODE:
                raise ImError(err.error_code, "account exception")
        return next((r for r in ret.results if r.user_id == user_id), None)

    def get_accounts_online_state(
        self, user_ids: list[str], is_need_detail: bool = False
    ) -> OnlineStatusRet:
        payload = {"To_Account": list(user_ids), "IsNeedDetail": 1 if is_need_detail else 0}
        resp = self._client.post(SERVICE_OPENIM, COMMAND_QUERY_ONLINE_STATUS, payload)
        return OnlineStatusRet(
            results=[OnlineStatusResult.from_json(r) for r in resp.get("QueryResult") or []],
            errors=[OnlineStatusError.from_json(e) for e in resp.get("ErrorList") or []],
        )