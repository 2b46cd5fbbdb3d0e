# modules/personnel/history.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterator, Optional, Sequence

from .dates import EPOCH, is_provided, parse_date
from .schemas import DisciplinaryAction, Employee, EmploymentBlock, Leave

logger = logging.getLogger(__name__)


def _history(employee: Optional[Employee]) -> Sequence[EmploymentBlock]:
    if employee is None:
        return ()
    return [b for b in (employee.employment_history or []) if b is not None]


def block_sort_key(block: EmploymentBlock) -> datetime:
    """
    วันที่ "ล่าสุด" ของ block: status_date > to_date > from_date (ตัวแรกที่มีค่า).
    parse ไม่ได้ / ไม่มีเลย -> EPOCH จึงไม่มีวันชนะ block ที่มีวันที่จริง
    """
    for raw in (block.status_date, block.to_date, block.from_date):
        if is_provided(raw):
            return parse_date(raw) or EPOCH
    return EPOCH


def resolve_current_block(employee: Optional[Employee]) -> Optional[EmploymentBlock]:
    """
    Pick the single employment block that represents "now".

    1. empty history -> None
    2. first block flagged ``is_currently_working`` (several flagged: the
       first one in history order wins, the others are ignored)
    3. otherwise the block with the latest ``block_sort_key``; ties keep
       history order, so with no usable dates the first block is returned
    """
    blocks = _history(employee)
    if not blocks:
        return None

    flagged = [b for b in blocks if b.is_currently_working]
    if flagged:
        if len(flagged) > 1:
            logger.debug(
                "employee %s has %d blocks flagged as current; using the first",
                getattr(employee, "id", None), len(flagged),
            )
        return flagged[0]

    best = blocks[0]
    best_key = block_sort_key(best)
    for block in blocks[1:]:
        key = block_sort_key(block)
        if key > best_key:
            best, best_key = block, key
    return best


def iter_leaves(employee: Optional[Employee]) -> Iterator[Leave]:
    for block in _history(employee):
        for leave in block.leaves or []:
            if leave is not None:
                yield leave


def iter_disciplinary_actions(employee: Optional[Employee]) -> Iterator[DisciplinaryAction]:
    for block in _history(employee):
        for action in block.disciplinary_actions or []:
            if action is not None:
                yield action
