# modules/personnel/rejoin.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from .dates import utcnow
from .filters import leave_is_active
from .history import iter_leaves, resolve_current_block
from .schemas import Employee, StatusBadge
from .vocabulary import VOCABULARY, StatusVocabulary, normalize

DEFAULT_STATUS = "In-Service"


def is_terminal_status(status: Optional[str], vocabulary: Optional[StatusVocabulary] = None) -> bool:
    return (vocabulary or VOCABULARY).is_terminal(status)


def is_rejoinable_status(status: Optional[str], vocabulary: Optional[StatusVocabulary] = None) -> bool:
    return (vocabulary or VOCABULARY).is_rejoinable(status)


def can_rejoin(employee: Optional[Employee], vocabulary: Optional[StatusVocabulary] = None) -> bool:
    """
    Decide whether the employee may be re-posted ("rejoin").

    The status of the current block decides first: terminal -> False,
    rejoinable -> True. Anything else falls back to the top-level status,
    which only ever allows rejoin through the "suspended" branch below.
    """
    if employee is None:
        return False
    vocab = vocabulary or VOCABULARY

    block = resolve_current_block(employee)
    last_status = (block.status if block else None) or ""

    if vocab.is_terminal(last_status):
        return False
    if vocab.is_rejoinable(last_status):
        return True

    top = normalize(employee.status)
    if not top:
        return False
    if top == "active":
        return False
    if top in ("retired", "inactive"):
        return False
    # ไม่มีผลจริง: ถ้า last_status rejoinable ก็ return True ไปแล้วด้านบน
    if top == "suspended" and vocab.is_rejoinable(last_status):
        return True
    return False


def current_status(employee: Optional[Employee]) -> str:
    """status ของ current block > status ระดับพนักงาน > In-Service"""
    if employee is None:
        return DEFAULT_STATUS
    block = resolve_current_block(employee)
    for raw in ((block.status if block else None), employee.status):
        if raw and str(raw).strip():
            return str(raw).strip()
    return DEFAULT_STATUS


def describe_status(
    employee: Employee,
    vocabulary: Optional[StatusVocabulary] = None,
    now: Optional[datetime] = None,
) -> StatusBadge:
    vocab = vocabulary or VOCABULARY
    at = now or utcnow()
    block = resolve_current_block(employee)
    status = current_status(employee)
    return StatusBadge(
        id=employee.id,
        status=vocab.canonical(status) or status,
        status_date=(block.status_date if block else None) or None,
        is_active=vocab.is_in_service(status),
        is_terminal=vocab.is_terminal(status),
        can_rejoin=can_rejoin(employee, vocab),
        is_on_leave=any(leave_is_active(leave, at) for leave in iter_leaves(employee)),
    )
