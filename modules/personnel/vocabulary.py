# modules/personnel/vocabulary.py
from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from config.settings import Settings, settings


class StatusCategory(enum.Enum):
    IN_SERVICE = "In-Service"
    REJOINABLE = "Rejoinable"
    TERMINAL = "Terminal"
    OTHER = "Other"


def normalize(value) -> str:
    """lower-case + trim; None/ว่าง -> "" """
    if value is None:
        return ""
    return str(value).strip().lower()


class StatusVocabulary:
    """
    Closed status / leave vocabularies, keyed by normalized name.

    Built once from Settings; every lookup goes through ``normalize`` so
    "OSD", " osd " and "Osd" always resolve to the same entry.
    """

    def __init__(
        self,
        status_options: Iterable[str],
        in_service: Iterable[str],
        terminal: Iterable[str],
        rejoinable: Iterable[str],
        leave_types: Iterable[str] = (),
        max_bps_grade: int = 22,
    ):
        categories: dict[str, StatusCategory] = {}
        spelling: dict[str, str] = {}

        # ลำดับสำคัญ: terminal ชนะ rejoinable ชนะ in-service
        for names, category in (
            (status_options, StatusCategory.OTHER),
            (in_service, StatusCategory.IN_SERVICE),
            (rejoinable, StatusCategory.REJOINABLE),
            (terminal, StatusCategory.TERMINAL),
        ):
            for name in names:
                key = normalize(name)
                if not key:
                    continue
                categories[key] = category
                spelling.setdefault(key, str(name).strip())

        self._categories: Mapping[str, StatusCategory] = MappingProxyType(categories)
        self._spelling: Mapping[str, str] = MappingProxyType(spelling)
        self.status_options: Tuple[str, ...] = tuple(str(s).strip() for s in status_options)
        self.leave_types: Tuple[str, ...] = tuple(str(s).strip() for s in leave_types)
        self.bps_grades: Tuple[str, ...] = tuple(f"BPS-{i}" for i in range(1, max_bps_grade + 1))

    @classmethod
    def from_settings(cls, cfg: Settings) -> "StatusVocabulary":
        return cls(
            status_options=cfg.STATUS_OPTIONS,
            in_service=cfg.IN_SERVICE_STATUSES,
            terminal=cfg.TERMINAL_STATUSES,
            rejoinable=cfg.REJOINABLE_STATUSES,
            leave_types=cfg.LEAVE_TYPES,
            max_bps_grade=cfg.MAX_BPS_GRADE,
        )

    @property
    def categories(self) -> Mapping[str, StatusCategory]:
        return self._categories

    def category_of(self, status: Optional[str]) -> StatusCategory:
        return self._categories.get(normalize(status), StatusCategory.OTHER)

    def canonical(self, status: Optional[str]) -> Optional[str]:
        """คืนตัวสะกดตาม config (เช่น " osd " -> "OSD"), ไม่รู้จัก -> None"""
        return self._spelling.get(normalize(status))

    def is_terminal(self, status: Optional[str]) -> bool:
        return bool(normalize(status)) and self.category_of(status) is StatusCategory.TERMINAL

    def is_rejoinable(self, status: Optional[str]) -> bool:
        return bool(normalize(status)) and self.category_of(status) is StatusCategory.REJOINABLE

    def is_in_service(self, status: Optional[str]) -> bool:
        return bool(normalize(status)) and self.category_of(status) is StatusCategory.IN_SERVICE

    def canonical_leave_type(self, leave_type: Optional[str]) -> Optional[str]:
        key = normalize(leave_type)
        for name in self.leave_types:
            if normalize(name) == key:
                return name
        return None


# process-wide, อ่านอย่างเดียว
VOCABULARY = StatusVocabulary.from_settings(settings)
