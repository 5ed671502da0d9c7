"""Standard API response envelope and row collection helpers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

SUCCESS_CODE = 1200


@dataclass(frozen=True)
class Resp:
    """The response body returned by every API endpoint."""

    payload: Any = None
    code: int = 0
    text: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape of the response."""
        return {"payload": self.payload, "code": self.code, "text": self.text}


ERR_LOGIN = Resp(code=1301, text="账号/密码错误,请输入正确的账号密码!")
ERR_REGISTER = Resp(code=1302, text="没有开启注册通道！")
ERR_REQ_BIND = Resp(code=1310, text="传参错误！")
ERR_REQ_FAKE = Resp(code=1310, text="非法传参！")


def success_payload(payload: Any) -> Resp:
    """A successful response carrying ``payload``."""
    return Resp(payload=payload, code=SUCCESS_CODE)


def success_message(text: str) -> Resp:
    """A successful response carrying a message."""
    return Resp(text=text, code=SUCCESS_CODE)


def err_soar_alter_error(err: BaseException) -> Resp:
    """A statement-merge failure built from an exception."""
    return Resp(code=1901, text=str(err))


def err_soar_alter_message(text: str) -> Resp:
    """A statement-merge failure built from a message."""
    return Resp(code=1901, text=text)


def err_common_message(err: BaseException) -> Resp:
    """A generic failure built from an exception."""
    return Resp(code=5555, text=str(err))


@dataclass
class DbInfo:
    """Names read from a data source, arranged for the front end."""

    results: list[str] = field(default_factory=list)
    query: list[dict[str, Any]] = field(default_factory=list)
    base_list: list[dict[str, Any]] = field(default_factory=list)
    highlight: list[dict[str, str]] = field(default_factory=list)


def is_excluded(name: str, exclude: Iterable[str]) -> bool:
    """Whether ``name`` is in the exclusion list."""
    return name in exclude


def collect_rows(
    names: Iterable[str], meta: str, is_query: bool, exclude: Iterable[str] = ()
) -> DbInfo:
    """Arrange database or table names into a :class:`DbInfo`.

    For query listings, excluded names are left out of ``query`` and
    ``base_list``; every name is always highlighted.
    """
    excluded = tuple(exclude)
    info = DbInfo()
    for name in names:
        if is_query:
            if not is_excluded(name, excluded):
                info.query.append({"title": name})
                info.base_list.append({"title": name, "children": [{}]})
        else:
            info.results.append(name)
        info.highlight.append({"vl": name, "meta": meta})
    return info