from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from coursemap.core.config import settings
from coursemap.core.database import get_db
from coursemap.core.errors import NotFound
from coursemap.schemas.course import (
    CourseCreateRequest,
    CourseDetailResponse,
    CourseResponse,
    CourseSummary,
)
from coursemap.schemas.graph import CourseGraphResponse, PrerequisiteGraphResponse
from coursemap.schemas.module import (
    ModuleCreateRequest,
    ModuleDetailResponse,
    ModuleResponse,
    ModuleSummary,
)
from coursemap.services.course_graph import build_course_graph
from coursemap.services.courses import get_course_detail, list_courses, upsert_courses
from coursemap.services.modules import get_module_detail, list_modules, upsert_modules
from coursemap.services.prerequisite_chain import resolve_prerequisite_chain
from coursemap.services.store import SqlRecordStore, get_record_store

router = APIRouter(prefix="/api")


def _raise_not_found(result: NotFound):
    raise HTTPException(status_code=404, detail=result.message)


# ── Courses ───────────────────────────────────────────────────────────────────

@router.get("/courses", response_model=list[CourseSummary])
def list_courses_endpoint(
    search: str | None = None,
    degree: str | None = None,
    department: str | None = None,
    db: Session = Depends(get_db),
):
    return list_courses(db, search=search, degree=degree, department=department)


@router.post("/courses", response_model=list[CourseResponse])
def upsert_courses_endpoint(
    payload: CourseCreateRequest,
    db: Session = Depends(get_db),
):
    return [CourseResponse.model_validate(c) for c in upsert_courses(db, payload.courses)]


@router.get("/courses/{course_code}", response_model=CourseDetailResponse)
def get_course_endpoint(course_code: str, store: SqlRecordStore = Depends(get_record_store)):
    result = get_course_detail(store, course_code)
    if isinstance(result, NotFound):
        _raise_not_found(result)
    return CourseDetailResponse.model_validate(result)


@router.get("/courses/{course_code}/graph", response_model=CourseGraphResponse)
def get_course_graph_endpoint(
    course_code: str,
    store: SqlRecordStore = Depends(get_record_store),
):
    result = build_course_graph(store, course_code)
    if isinstance(result, NotFound):
        _raise_not_found(result)
    return CourseGraphResponse.model_validate(result)


# ── Modules ───────────────────────────────────────────────────────────────────

@router.get("/modules", response_model=list[ModuleSummary])
def list_modules_endpoint(
    search: str | None = None,
    credit_value: float | None = None,
    year: int | None = None,
    db: Session = Depends(get_db),
):
    return list_modules(db, search=search, credit_value=credit_value, year=year)


@router.post("/modules", response_model=list[ModuleResponse])
def upsert_modules_endpoint(
    payload: ModuleCreateRequest,
    db: Session = Depends(get_db),
):
    return [ModuleResponse.model_validate(m) for m in upsert_modules(db, payload.modules)]


@router.get("/modules/{module_code}", response_model=ModuleDetailResponse)
def get_module_endpoint(module_code: str, store: SqlRecordStore = Depends(get_record_store)):
    result = get_module_detail(store, module_code)
    if isinstance(result, NotFound):
        _raise_not_found(result)
    return ModuleDetailResponse.model_validate(result)


@router.get("/modules/{module_code}/prerequisites", response_model=PrerequisiteGraphResponse)
def get_prerequisite_chain_endpoint(
    module_code: str,
    max_depth: int | None = Query(None, ge=0, le=settings.prerequisite_depth_limit),
    store: SqlRecordStore = Depends(get_record_store),
):
    result = resolve_prerequisite_chain(store, module_code, max_depth=max_depth)
    if isinstance(result, NotFound):
        _raise_not_found(result)
    return PrerequisiteGraphResponse.model_validate(result)
