# modules/personnel/schemas.py
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .vocabulary import normalize

# -------------------------------------------------
# helpers: รับค่าจาก UI / API ที่รูปแบบไม่แน่นอน
# -------------------------------------------------

# ค่า flag แบบ string ที่ถือว่า "ปิด"
_FALSE_STRINGS = ("", "false", "0", "no", "off")

def _coerce_optional_str(v):
    """ตัวเลข -> str (id จาก API บางตัวเป็น int)"""
    if v is None or isinstance(v, str):
        return v
    if isinstance(v, bool):
        return str(v).lower()
    if isinstance(v, (int, float)):
        return str(v)
    return v

def _clean_optional_str(v):
    if v is None:
        return None
    s = str(v).strip()
    return s or None

def _clean_multi(v) -> Optional[Tuple[str, ...]]:
    """
    One value or many -> tuple of trimmed, non-blank strings.
    Nothing usable left -> None ("not provided").
    """
    if v is None or v is False:
        return None
    if isinstance(v, (list, tuple, set, frozenset)):
        items = v
    else:
        items = [v]
    out = []
    for item in items:
        s = _clean_optional_str(_coerce_optional_str(item))
        if s:
            out.append(s)
    return tuple(out) or None


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -------------------------------------------------
# Employee history records
# -------------------------------------------------

class Leave(_Record):
    id: Optional[str] = None
    type: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None  # None = ยังลาอยู่ (open-ended)
    reason: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        return _coerce_optional_str(v)


class DisciplinaryAction(_Record):
    id: Optional[str] = None
    action_date: Optional[str] = None
    decision: Optional[str] = None
    court_reference: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        return _coerce_optional_str(v)


class EmploymentBlock(_Record):
    id: Optional[str] = None
    hq_id: Optional[str] = None
    tehsil_id: Optional[str] = None
    designation_id: Optional[str] = None
    unit_id: Optional[str] = None
    posting_category_id: Optional[str] = None
    posting_place_title: Optional[str] = None
    bps: Optional[str] = None

    from_date: Optional[str] = None
    to_date: Optional[str] = None  # None/"" = ongoing
    status: Optional[str] = None
    status_date: Optional[str] = None
    is_currently_working: bool = False

    leaves: List[Leave] = Field(default_factory=list)
    disciplinary_actions: List[DisciplinaryAction] = Field(default_factory=list)

    @field_validator(
        "id", "hq_id", "tehsil_id", "designation_id", "unit_id",
        "posting_category_id", "bps", mode="before",
    )
    @classmethod
    def _coerce_ids(cls, v):
        return _coerce_optional_str(v)

    @field_validator("leaves", "disciplinary_actions", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return [] if v is None else v

    @field_validator("is_currently_working", mode="before")
    @classmethod
    def _none_as_false(cls, v):
        return False if v is None else v


class Employee(_Record):
    id: Optional[str] = None
    full_name: Optional[str] = None
    father_name: Optional[str] = None
    cnic: Optional[str] = None
    dob: Optional[str] = None
    gender: Optional[str] = None
    domicile: Optional[str] = None
    sect: Optional[str] = Field(None, validation_alias=AliasChoices("sect", "religion"))
    date_of_appointment: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    employment_history: List[EmploymentBlock] = Field(default_factory=list)

    @field_validator("id", "cnic", mode="before")
    @classmethod
    def _coerce_ids(cls, v):
        return _coerce_optional_str(v)

    @field_validator("employment_history", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return [] if v is None else v


# -------------------------------------------------
# Filter specification (built from UI state)
# -------------------------------------------------

_MULTI_FIELDS = (
    "status", "category_id", "designation_id", "unit_id", "posting_place",
    "hq_id", "tehsil_id", "gender", "domicile", "sect", "bps_grade", "leave_type",
)
_TEXT_FIELDS = (
    "query", "dob_from", "dob_to", "doa_from", "doa_to",
    "status_date_from", "status_date_to", "since_date",
    "leave_from_date", "leave_to_date",
    "disciplinary_from_date", "disciplinary_to_date",
)

class FilterOptions(_Record):
    """
    Sparse filter record. Every criterion is optional; "", whitespace, [],
    a list of blanks, False and None all mean "not provided".
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    query: Optional[str] = None
    status: Optional[Tuple[str, ...]] = None

    # block-scoped identifiers
    category_id: Optional[Tuple[str, ...]] = None
    designation_id: Optional[Tuple[str, ...]] = None
    unit_id: Optional[Tuple[str, ...]] = None
    hq_id: Optional[Tuple[str, ...]] = None
    tehsil_id: Optional[Tuple[str, ...]] = None
    posting_place: Optional[Tuple[str, ...]] = None
    bps_grade: Optional[Tuple[str, ...]] = None

    # employee attributes
    gender: Optional[Tuple[str, ...]] = None
    domicile: Optional[Tuple[str, ...]] = None
    sect: Optional[Tuple[str, ...]] = Field(None, validation_alias=AliasChoices("sect", "religion"))

    dob_from: Optional[str] = None
    dob_to: Optional[str] = None
    doa_from: Optional[str] = None
    doa_to: Optional[str] = None
    status_date_from: Optional[str] = None
    status_date_to: Optional[str] = None
    since_date: Optional[str] = None

    active_leave_only: bool = False
    leave_type: Optional[Tuple[str, ...]] = None
    leave_from_date: Optional[str] = None
    leave_to_date: Optional[str] = None

    disciplinary_from_date: Optional[str] = None
    disciplinary_to_date: Optional[str] = None
    has_disciplinary_action: bool = False

    @field_validator(*_MULTI_FIELDS, mode="before")
    @classmethod
    def _normalize_multi(cls, v):
        return _clean_multi(v)

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def _normalize_text(cls, v):
        if v is False:
            return None
        return _clean_optional_str(_coerce_optional_str(v))

    @field_validator("active_leave_only", "has_disciplinary_action", mode="before")
    @classmethod
    def _normalize_flag(cls, v):
        if isinstance(v, str):
            return normalize(v) not in _FALSE_STRINGS
        return bool(v)

    def active_criteria(self) -> List[str]:
        out = []
        for name in type(self).model_fields:
            value = getattr(self, name)
            if value is None or value is False:
                continue
            out.append(name)
        return out

    def has_active_filters(self) -> bool:
        return bool(self.active_criteria())


# -------------------------------------------------
# API payloads / results
# -------------------------------------------------

class PopulationRequest(_Record):
    employees: List[Employee] = Field(default_factory=list)

class FilterRequest(PopulationRequest):
    filters: FilterOptions = Field(default_factory=FilterOptions)

class EmployeeRequest(_Record):
    employee: Employee

class FilterResponse(_Record):
    count: int
    employees: List[Employee]

class RejoinResult(_Record):
    id: Optional[str] = None
    can_rejoin: bool

class StatusBadge(_Record):
    id: Optional[str] = None
    status: str
    status_date: Optional[str] = None
    is_active: bool = False
    is_terminal: bool = False
    can_rejoin: bool = False
    is_on_leave: bool = False

class PopulationSummary(_Record):
    total_employees: int = 0
    in_service: int = 0
    retired: int = 0
    separated: int = 0
    on_leave: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)

class FacetValues(_Record):
    genders: List[str] = Field(default_factory=list)
    sects: List[str] = Field(default_factory=list)
    domiciles: List[str] = Field(default_factory=list)
    statuses: List[str] = Field(default_factory=list)
    bps_grades: List[str] = Field(default_factory=list)
    leave_types: List[str] = Field(default_factory=list)

class VocabularyOut(_Record):
    status_options: List[str]
    leave_types: List[str]
    bps_grades: List[str]
    categories: Dict[str, str]
