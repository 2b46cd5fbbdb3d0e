# modules/personnel/filters.py
from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from .dates import in_range, is_provided, parse_date, utcnow
from .history import iter_disciplinary_actions, iter_leaves, resolve_current_block
from .schemas import Employee, EmploymentBlock, FilterOptions, Leave
from .vocabulary import normalize

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")

# criteria ที่ต้องมี current block ถึงจะประเมินได้
_BLOCK_FIELDS = (
    "hq_id", "tehsil_id", "designation_id", "unit_id", "category_id",
    "posting_place", "bps_grade",
)

# filter field -> EmploymentBlock attribute (exact id match)
_BLOCK_ID_ATTRS = {
    "hq_id": "hq_id",
    "tehsil_id": "tehsil_id",
    "designation_id": "designation_id",
    "unit_id": "unit_id",
    "category_id": "posting_category_id",
}


def _digits(value) -> str:
    return _NON_DIGITS.sub("", str(value or ""))


def _as_options(options: Union[FilterOptions, Mapping[str, Any], None]) -> FilterOptions:
    if options is None:
        return FilterOptions()
    if isinstance(options, FilterOptions):
        return options
    return FilterOptions.model_validate(dict(options))


# -------------------------------------------------
# Per-criterion predicates
# -------------------------------------------------

def _match_query(emp: Employee, query: str) -> bool:
    q = normalize(query)
    if not q:
        return True
    for field in (emp.full_name, emp.father_name, emp.cnic):
        if q in normalize(field):
            return True
    q_digits = _digits(q)
    return bool(q_digits) and q_digits in _digits(emp.cnic)


def _match_exact(value, wanted: Sequence[str]) -> bool:
    v = normalize(value)
    return any(normalize(w) == v for w in wanted)


def _match_block_id(value, wanted: Sequence[str]) -> bool:
    v = str(value).strip() if value is not None else ""
    return bool(v) and any(w.strip() == v for w in wanted)


def _match_posting_place(block: EmploymentBlock, wanted: Sequence[str]) -> bool:
    title = normalize(block.posting_place_title)
    return any(normalize(p) in title for p in wanted)


def _match_bps(block: EmploymentBlock, wanted: Sequence[str]) -> bool:
    # หลวม: "7" ก็ตรงกับ "BPS-17" เพราะเป็น digit-substring
    have = _digits(block.bps)
    return any(_digits(w) in have for w in wanted)


def _match_status(emp: Employee, block: Optional[EmploymentBlock], wanted: Sequence[str]) -> bool:
    requested = [s for s in (normalize(w) for w in wanted) if s]
    if not requested:
        return True
    collected = [s for s in (normalize(emp.status), normalize(block.status if block else None)) if s]
    if not collected:
        return False
    return any(st == m or st in m or m in st for st in requested for m in collected)


def _match_since(emp: Employee, block: Optional[EmploymentBlock], since: str) -> bool:
    cutoff = parse_date(since)
    if cutoff is None:
        return False
    started = block.from_date if block and is_provided(block.from_date) else emp.created_at
    start = parse_date(started)
    return start is not None and start >= cutoff


def _end_of(leave: Leave):
    """
    (open_ended, end). end ที่ส่งมาแต่ parse ไม่ได้ -> (False, None) = ใช้ไม่ได้
    """
    if not is_provided(leave.end_date):
        return True, None
    return False, parse_date(leave.end_date)


def leave_is_active(leave: Leave, now: datetime) -> bool:
    start = parse_date(leave.start_date)
    if start is None or start > now:
        return False
    open_ended, end = _end_of(leave)
    if open_ended:
        return True
    return end is not None and now <= end


def leave_overlaps(leave: Leave, date_from: Optional[datetime], date_to: Optional[datetime]) -> bool:
    """
    Leave [S, E] against filter bounds F / T; E absent = still on leave.
    - no bounds: any leave with a usable start
    - E provided but unparseable: fails only the branches that compare E
    - F only: E >= F, or (E absent and S >= F)
    - T only: S <= T
    - F and T: S <= T and (E absent or E >= F)
    """
    start = parse_date(leave.start_date)
    if start is None:
        return False
    if date_from is None and date_to is None:
        return True
    if date_from is None:
        return start <= date_to

    # จากนี้ไปต้องเทียบ E; E ที่ส่งมาแต่ parse ไม่ได้ -> ไม่นับ
    open_ended, end = _end_of(leave)
    if not open_ended and end is None:
        return False
    if date_to is None:
        if open_ended:
            return start >= date_from
        return end >= date_from
    if open_ended:
        return start <= date_to
    return start <= date_to and end >= date_from


def _parse_bound(raw: Optional[str]):
    """(ok, value): bound ไม่ได้ส่งมา -> (True, None); parse ไม่ได้ -> (False, None)"""
    if not is_provided(raw):
        return True, None
    value = parse_date(raw)
    return value is not None, value


def _match_leaves(emp: Employee, opts: FilterOptions) -> bool:
    ok_from, date_from = _parse_bound(opts.leave_from_date)
    ok_to, date_to = _parse_bound(opts.leave_to_date)
    if not (ok_from and ok_to):
        return False
    for leave in iter_leaves(emp):
        if opts.leave_type and not _match_exact(leave.type, opts.leave_type):
            continue
        if leave_overlaps(leave, date_from, date_to):
            return True
    return False


def _match_disciplinary(emp: Employee, opts: FilterOptions) -> bool:
    return any(
        in_range(action.action_date, opts.disciplinary_from_date, opts.disciplinary_to_date)
        for action in iter_disciplinary_actions(emp)
    )


# -------------------------------------------------
# Engine
# -------------------------------------------------

def matches(emp: Employee, opts: FilterOptions, now: Optional[datetime] = None) -> bool:
    """True when ``emp`` satisfies every provided criterion of ``opts``."""
    if emp is None:
        return False

    if opts.query and not _match_query(emp, opts.query):
        return False

    if opts.gender and not _match_exact(emp.gender, opts.gender):
        return False
    if opts.domicile and not _match_exact(emp.domicile, opts.domicile):
        return False
    if opts.sect and not _match_exact(emp.sect, opts.sect):
        return False

    if (opts.dob_from or opts.dob_to) and not in_range(emp.dob, opts.dob_from, opts.dob_to):
        return False
    if (opts.doa_from or opts.doa_to) and not in_range(
        emp.date_of_appointment, opts.doa_from, opts.doa_to
    ):
        return False

    block = resolve_current_block(emp)
    if block is None and any(getattr(opts, f) for f in _BLOCK_FIELDS):
        return False

    if opts.status and not _match_status(emp, block, opts.status):
        return False

    if opts.status_date_from or opts.status_date_to:
        status_date = block.status_date if block and is_provided(block.status_date) else emp.updated_at
        if not in_range(status_date, opts.status_date_from, opts.status_date_to):
            return False

    for field, attr in _BLOCK_ID_ATTRS.items():
        wanted = getattr(opts, field)
        if wanted and not _match_block_id(getattr(block, attr), wanted):
            return False

    if opts.posting_place and not _match_posting_place(block, opts.posting_place):
        return False
    if opts.bps_grade and not _match_bps(block, opts.bps_grade):
        return False

    if opts.since_date and not _match_since(emp, block, opts.since_date):
        return False

    if opts.active_leave_only:
        at = now or utcnow()
        if not any(leave_is_active(leave, at) for leave in iter_leaves(emp)):
            return False

    if (opts.leave_type or opts.leave_from_date or opts.leave_to_date) and not _match_leaves(emp, opts):
        return False

    if (opts.disciplinary_from_date or opts.disciplinary_to_date) and not _match_disciplinary(emp, opts):
        return False

    if opts.has_disciplinary_action and next(iter_disciplinary_actions(emp), None) is None:
        return False

    return True


def filter_employees(
    employees: Optional[Iterable[Employee]],
    options: Union[FilterOptions, Mapping[str, Any], None] = None,
    *,
    now: Optional[datetime] = None,
) -> List[Employee]:
    """
    Return the employees matching every provided criterion, in input order.

    Criteria combine with AND across fields and OR within a multi-value
    field. The input is never mutated; the result is always a new list.
    """
    population = [e for e in (employees or []) if e is not None]
    opts = _as_options(options)
    active = opts.active_criteria()
    if not active:
        return population

    # now คงที่ตลอดการเรียกหนึ่งครั้ง
    at = now or utcnow()
    result = [emp for emp in population if matches(emp, opts, at)]
    logger.debug("filter_employees: criteria=%s in=%d out=%d", active, len(population), len(result))
    return result
