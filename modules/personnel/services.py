# modules/personnel/services.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional

import pandas as pd

from .dates import utcnow
from .filters import leave_is_active
from .history import iter_leaves
from .rejoin import can_rejoin, current_status
from .schemas import Employee, FacetValues, PopulationSummary, RejoinResult
from .vocabulary import VOCABULARY, StatusCategory, StatusVocabulary, normalize

logger = logging.getLogger(__name__)

# -------------------------------------------------
# Helpers
# -------------------------------------------------

def _population(employees: Optional[Iterable[Employee]]) -> List[Employee]:
    return [e for e in (employees or []) if e is not None]

def _distinct(values: Iterable[Optional[str]]) -> List[str]:
    """ไม่ซ้ำแบบ case-insensitive, เก็บตัวสะกดแรกที่เจอ, เรียงตามตัวอักษร"""
    seen = {}
    for v in values:
        s = str(v).strip() if v is not None else ""
        if s and normalize(s) not in seen:
            seen[normalize(s)] = s
    return sorted(seen.values(), key=normalize)

def _bps_order(grade: str):
    digits = "".join(ch for ch in grade if ch.isdigit())
    return (int(digits) if digits else 0, normalize(grade))

# -------------------------------------------------
# Summary (metrics panel)
# -------------------------------------------------

def summarize_population(
    employees: Optional[Iterable[Employee]],
    vocabulary: Optional[StatusVocabulary] = None,
    now: Optional[datetime] = None,
) -> PopulationSummary:
    vocab = vocabulary or VOCABULARY
    at = now or utcnow()
    population = _population(employees)
    if not population:
        return PopulationSummary()

    statuses = [current_status(emp) for emp in population]
    frame = pd.DataFrame({
        "status": [vocab.canonical(s) or s for s in statuses],
        "category": [vocab.category_of(s).name for s in statuses],
        "on_leave": [
            any(leave_is_active(leave, at) for leave in iter_leaves(emp))
            for emp in population
        ],
    })
    by_category = frame["category"].value_counts()
    by_status = frame["status"].value_counts()

    summary = PopulationSummary(
        total_employees=len(frame),
        in_service=int(by_category.get(StatusCategory.IN_SERVICE.name, 0)),
        retired=int(by_category.get(StatusCategory.TERMINAL.name, 0)),
        separated=int(by_category.get(StatusCategory.REJOINABLE.name, 0)),
        on_leave=int(frame["on_leave"].sum()),
        by_status={str(k): int(v) for k, v in by_status.items()},
    )
    logger.debug("summary: %s", summary.model_dump())
    return summary

# -------------------------------------------------
# Facets (ตัวเลือกใน filter panel)
# -------------------------------------------------

def facet_values(employees: Optional[Iterable[Employee]]) -> FacetValues:
    population = _population(employees)
    blocks = [b for emp in population for b in (emp.employment_history or []) if b is not None]

    return FacetValues(
        genders=_distinct(emp.gender for emp in population),
        sects=_distinct(emp.sect for emp in population),
        domiciles=_distinct(emp.domicile for emp in population),
        statuses=_distinct([emp.status for emp in population] + [b.status for b in blocks]),
        bps_grades=sorted(_distinct(b.bps for b in blocks), key=_bps_order),
        leave_types=_distinct(
            VOCABULARY.canonical_leave_type(leave.type) or leave.type
            for emp in population
            for leave in iter_leaves(emp)
        ),
    )

# -------------------------------------------------
# Rejoin eligibility
# -------------------------------------------------

def rejoin_eligibility(
    employees: Optional[Iterable[Employee]],
    vocabulary: Optional[StatusVocabulary] = None,
) -> List[RejoinResult]:
    return [
        RejoinResult(id=emp.id, can_rejoin=can_rejoin(emp, vocabulary))
        for emp in _population(employees)
    ]
