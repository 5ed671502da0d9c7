"""Approval workflow templates and the rules for auditing an order."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

ORDER_AGREE_MESSAGE = "审核通过,并已转交至%s"
ORDER_REJECT_MESSAGE = "驳回"
ORDER_AGREE_STATE = "工单已转交！"
ORDER_REJECT_STATE = "工单已驳回！"
ORDER_KILL_STATE = "延时工单已终止！"
ORDER_EXECUTE_STATE = "审核通过并执行！"
ORDER_DELAY_KILL_DETAIL = "kill指令已发送!将在到达执行时间时自动取消，状态已更改为执行失败！"
IDEMPOTENT = "工单已执行过！操作不符合幂等性"
AUDITOR_IS_NOT_EXIST = "流程信息缺失,请检查该数据源流程配置!"
FLOW_IS_NOT_EXIST = "环境没有添加流程!无法审批工单"

STATE_NOT_ALLOWED = "工单状态不允许审批"
SUBMITTER_NOT_ALLOWED = "你是提交人不能进行操作"
NO_PERMISSION = "你没有权限进行操作"

STATUS_AUDIT = 2
STATUS_EXEC_READY = 5


class AuditError(Exception):
    """An audit action is not allowed on the order in its current state."""


@dataclass
class Step:
    """One stage of an approval workflow."""

    desc: str = ""
    auditor: list[str] = field(default_factory=list)
    type: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Step:
        """Build a step from its JSON object; raise ValueError on bad fields."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError("a step must be a JSON object")
        desc = data.get("desc")
        if desc is None:
            desc = ""
        elif not isinstance(desc, str):
            raise ValueError("field 'desc' must be a string")
        auditor = data.get("auditor")
        if auditor is None:
            auditor = []
        elif not isinstance(auditor, list) or not all(isinstance(a, str) for a in auditor):
            raise ValueError("field 'auditor' must be a list of strings")
        kind = data.get("type")
        if kind is None:
            kind = 0
        elif isinstance(kind, float) and kind.is_integer():
            kind = int(kind)
        if isinstance(kind, bool) or not isinstance(kind, int):
            raise ValueError("field 'type' must be an integer")
        return cls(desc=desc, auditor=list(auditor), type=kind)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape of the step."""
        return {"desc": self.desc, "auditor": list(self.auditor), "type": self.type}


def parse_steps(raw: str | bytes | None) -> list[Step]:
    """Decode a stored workflow template; raise ValueError when malformed."""
    if raw is None or (isinstance(raw, (str, bytes)) and not raw.strip()):
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid workflow template: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("a workflow template must be a JSON array")
    return [Step.from_dict(item) for item in data]


def dump_steps(steps: Sequence[Step]) -> str:
    """Encode a workflow template for storage."""
    return json.dumps([step.to_dict() for step in steps], ensure_ascii=False)


def template_auditors(steps: Sequence[Step]) -> list[str] | None:
    """Auditors of the first review stage, or None when there are none."""
    if len(steps) > 1 and steps[1].auditor:
        return list(steps[1].auditor)
    return None


def check_audit(
    steps: Sequence[Step], current_step: int, status: int, submitter: str, user: str
) -> bool:
    """Check that ``user`` may audit the order; raise AuditError otherwise.

    Returns True when the current step is the last one, so that agreeing
    executes the order rather than passing it on.
    """
    if status not in (STATUS_AUDIT, STATUS_EXEC_READY) or current_step >= len(steps):
        raise AuditError(STATE_NOT_ALLOWED)
    if user == submitter:
        raise AuditError(SUBMITTER_NOT_ALLOWED)
    if user not in steps[current_step].auditor:
        raise AuditError(NO_PERMISSION)
    return current_step + 1 == len(steps)


def next_performer(steps: Sequence[Step], current_step: int, perform: str) -> str:
    """The auditor an agreed order is handed to.

    When the next stage names auditors and ``perform`` is not among them,
    the first auditor of the current stage is chosen instead.
    """
    if current_step + 1 >= len(steps):
        return perform
    auditors = steps[current_step + 1].auditor
    if auditors and perform not in auditors:
        return steps[current_step].auditor[0]
    return perform


def agree_message(perform: str) -> str:
    """The history entry recorded when an order is passed to ``perform``."""
    return ORDER_AGREE_MESSAGE % perform


def truncate_sql(sql: str, limit: str | int | None) -> str:
    """Shorten a long statement list for preview when ``limit`` is ``"10"``."""
    if str(limit) == "10":
        parts = sql.split(";")
        if len(parts) > 10:
            return "".join(parts[:9])
    return sql