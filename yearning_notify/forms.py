"""Request and listing forms exchanged with the web front end."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

QUERY_FIELD = (
    "work_id, username, text, backup, date, real_name, executor, `status`, `type`, "
    "`delay`, `source`,`id_c`,`data_base`,`table`,`execute_time`,assigned,"
    "current_step,relevant"
)

ORDER_IS_CREATE = "工单已创建!"
ORDER_IS_DUP = "工单请勿重复提交!"
ORDER_IS_EDIT = "工单已编辑！"
ORDER_IS_DELETE = "工单已删除！"
ORDER_IS_CLEAR = "工单已清除"
ORDER_IS_AGREE = "工单已同意"
ORDER_IS_REJECT = "工单已拒绝"
ORDER_IS_ALL_END = "所有工单已终止"
ORDER_IS_END = "工单已终止"
ORDER_IS_ALL_CANCEL = "所有工单已取消"
DATA_IS_DELETE = "数据已删除！"
DATA_IS_EDIT = "数据已编辑！"
DATA_IS_UPDATED = "数据已更新"


def _mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    return data


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"field {key!r} must be a boolean")
    return value


def _int(data: Mapping[str, Any], key: str, *, unsigned: bool = False) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an integer")
    if unsigned and value < 0:
        raise ValueError(f"field {key!r} must not be negative")
    return value


def _str_list(data: Mapping[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"field {key!r} must be a list of strings")
    return list(value)


@dataclass
class ExecuteStr:
    """An audit or execution request for one order."""

    work_id: str = ""
    perform: str = ""
    page: int = 0
    flag: int = 0
    text: str = ""
    tp: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> ExecuteStr:
        data = _mapping(data)
        return cls(
            work_id=_str(data, "work_id"),
            perform=_str(data, "perform"),
            page=_int(data, "page"),
            flag=_int(data, "flag"),
            text=_str(data, "text"),
            tp=_str(data, "tp"),
        )


@dataclass
class Search:
    """Filter criteria of a listing page."""

    picker: list[str] = field(default_factory=list)
    valve: bool = False
    text: str = ""
    explain: str = ""
    work_id: str = ""
    type: int = 0
    status: int = 0
    idc: str = ""
    source: str = ""
    username: str = ""
    dept: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Search:
        data = _mapping(data)
        return cls(
            picker=_str_list(data, "picker"),
            valve=_bool(data, "valve"),
            text=_str(data, "text"),
            explain=_str(data, "explain"),
            work_id=_str(data, "work_id"),
            type=_int(data, "type"),
            status=_int(data, "status"),
            idc=_str(data, "idc"),
            source=_str(data, "source"),
            username=_str(data, "username"),
            dept=_str(data, "dept"),
        )


@dataclass
class PageInfo:
    """A page request with its search criteria."""

    page: int = 0
    find: Search = field(default_factory=Search)
    tp: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> PageInfo:
        data = _mapping(data)
        find = data.get("find")
        return cls(
            page=_int(data, "page"),
            find=Search() if find is None else Search.from_dict(find),
            tp=_str(data, "tp"),
        )


@dataclass
class CommonList:
    """A page of listing results with its side data."""

    page: int = 0
    data: Any = None
    idc: list[str] = field(default_factory=list)
    source: Any = None
    query: Any = None
    auditor: Any = None
    multi: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape of the listing."""
        return {
            "page": self.page,
            "data": self.data,
            "idc": self.idc,
            "source": self.source,
            "query": self.query,
            "auditor": self.auditor,
            "multi": self.multi,
        }


@dataclass
class SQLTest:
    """A request to check SQL against a data source."""

    source: str = ""
    sql: str = ""
    database: str = ""
    is_dml: bool = False
    work_id: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> SQLTest:
        data = _mapping(data)
        return cls(
            source=_str(data, "source"),
            sql=_str(data, "sql"),
            database=_str(data, "data_base"),
            is_dml=_bool(data, "is_dml"),
            work_id=_str(data, "work_id"),
        )


@dataclass
class QueryOrder:
    """A query-permission order request."""

    idc: str = ""
    source: str = ""
    export: int = 0
    assigned: str = ""
    text: str = ""
    work_id: str = ""
    tp: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> QueryOrder:
        data = _mapping(data)
        return cls(
            idc=_str(data, "idc"),
            source=_str(data, "source"),
            export=_int(data, "export", unsigned=True),
            assigned=_str(data, "assigned"),
            text=_str(data, "text"),
            work_id=_str(data, "work_id"),
            tp=_str(data, "tp"),
        )