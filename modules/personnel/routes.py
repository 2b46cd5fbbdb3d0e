# modules/personnel/routes.py
import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from modules.personnel import schemas, services
from modules.personnel.filters import filter_employees
from modules.personnel.history import resolve_current_block
from modules.personnel.rejoin import describe_status
from modules.personnel.vocabulary import VOCABULARY

logger = logging.getLogger(__name__)

api_router = APIRouter()

# ---------- API : Vocabulary ----------
@api_router.get("/vocabulary", response_model=schemas.VocabularyOut)
def read_vocabulary_route():
    return schemas.VocabularyOut(
        status_options=list(VOCABULARY.status_options),
        leave_types=list(VOCABULARY.leave_types),
        bps_grades=list(VOCABULARY.bps_grades),
        categories={name: cat.value for name, cat in VOCABULARY.categories.items()},
    )

# ---------- API : Employees ----------
@api_router.post("/employees/filter", response_model=schemas.FilterResponse)
def filter_employees_route(payload: schemas.FilterRequest):
    result = filter_employees(payload.employees, payload.filters)
    logger.info(
        "filter: %d/%d employees matched (%s)",
        len(result), len(payload.employees), ", ".join(payload.filters.active_criteria()) or "no criteria",
    )
    return schemas.FilterResponse(count=len(result), employees=result)

@api_router.post("/employees/can-rejoin", response_model=List[schemas.RejoinResult])
def can_rejoin_route(payload: schemas.PopulationRequest):
    return services.rejoin_eligibility(payload.employees)

@api_router.post("/employees/status", response_model=List[schemas.StatusBadge])
def status_badges_route(payload: schemas.PopulationRequest):
    return [describe_status(emp) for emp in payload.employees]

@api_router.post("/employees/summary", response_model=schemas.PopulationSummary)
def summary_route(payload: schemas.PopulationRequest):
    return services.summarize_population(payload.employees)

@api_router.post("/employees/facets", response_model=schemas.FacetValues)
def facets_route(payload: schemas.PopulationRequest):
    return services.facet_values(payload.employees)

@api_router.post("/employees/current-block", response_model=schemas.EmploymentBlock)
def current_block_route(payload: schemas.EmployeeRequest):
    block = resolve_current_block(payload.employee)
    if block is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee has no employment history")
    return block
