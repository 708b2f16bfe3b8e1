import logging
from contextlib import contextmanager

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from coursemap.core.database import get_db
from coursemap.core.errors import MalformedRecord, StoreUnavailable
from coursemap.models.course import Course as CourseRow
from coursemap.models.module import Module as ModuleRow
from coursemap.models.module import ModuleRequisite
from coursemap.services.records import (
    AssessmentMethod,
    Course,
    CourseModules,
    Degree,
    Module,
    ModuleRef,
    Semester,
)

logger = logging.getLogger(__name__)


class SqlRecordStore:
    def __init__(self, db: Session):
        self.db = db

    def find_course_by_code(self, code: str) -> Course | None:
        with _store_call("find_course_by_code", code):
            row = (
                self.db.query(CourseRow)
                .options(selectinload(CourseRow.modules))
                .filter(CourseRow.course_code == code)
                .first()
            )
            return course_from_row(row) if row is not None else None

    def find_modules_by_codes(self, codes: set[str]) -> list[Module]:
        if not codes:
            return []
        with _store_call("find_modules_by_codes", sorted(codes)):
            rows = (
                self.db.query(ModuleRow)
                .options(selectinload(ModuleRow.requisites))
                .filter(ModuleRow.module_code.in_(codes))
                .order_by(ModuleRow.module_code)
                .all()
            )
            return [module_from_row(row) for row in rows]

    def find_module_by_code(self, code: str) -> Module | None:
        with _store_call("find_module_by_code", code):
            row = (
                self.db.query(ModuleRow)
                .options(selectinload(ModuleRow.requisites))
                .filter(ModuleRow.module_code == code)
                .first()
            )
            return module_from_row(row) if row is not None else None

    def find_modules_requiring(self, code: str) -> list[Module]:
        with _store_call("find_modules_requiring", code):
            rows = (
                self.db.query(ModuleRow)
                .join(ModuleRequisite, ModuleRequisite.module_id == ModuleRow.id)
                .options(selectinload(ModuleRow.requisites))
                .filter(
                    ModuleRequisite.requisite_code == code,
                    ModuleRequisite.relation == "prerequisite",
                )
                .distinct()
                .order_by(ModuleRow.module_code)
                .all()
            )
            return [module_from_row(row) for row in rows]


def get_record_store(db: Session = Depends(get_db)) -> SqlRecordStore:
    return SqlRecordStore(db)


@contextmanager
def _store_call(operation: str, argument):
    try:
        yield
    except SQLAlchemyError as exc:
        logger.warning("Record store %s(%r) failed: %s", operation, argument, exc)
        raise StoreUnavailable(f"Record store unavailable during {operation}") from exc


# ── Row -> entity conversion ─────────────────────────────────────────────────


def module_from_row(row: ModuleRow) -> Module:
    code = row.module_code
    if not code:
        raise MalformedRecord("module", code, "empty module code")
    if row.credit_value is None:
        raise MalformedRecord("module", code, "missing credit value")
    if row.credit_value <= 0:
        raise MalformedRecord("module", code, f"credit value {row.credit_value!r} is not positive")
    if row.course_year is not None and not 1 <= row.course_year <= 4:
        raise MalformedRecord("module", code, f"course year {row.course_year!r} outside 1-4")
    try:
        semester = Semester.parse(row.semester)
    except ValueError as exc:
        raise MalformedRecord("module", code, str(exc)) from exc

    outcomes = row.learning_outcomes or []
    if not isinstance(outcomes, list):
        raise MalformedRecord("module", code, "learning outcomes must be a list")

    methods = []
    for item in row.assessment_methods or []:
        if not isinstance(item, dict) or "method" not in item:
            raise MalformedRecord("module", code, f"bad assessment method {item!r}")
        methods.append(AssessmentMethod(method=item["method"], percentage=item.get("percentage")))

    prerequisites = [r.requisite_code for r in row.requisites if r.relation == "prerequisite"]
    corequisites = [r.requisite_code for r in row.requisites if r.relation == "corequisite"]

    return Module(
        module_code=code,
        title=row.title or code,
        credit_value=row.credit_value,
        summary=row.summary or "",
        learning_outcomes=[str(o) for o in outcomes],
        assessment_methods=methods,
        course_year=row.course_year,
        semester=semester,
        is_optional=bool(row.is_optional),
        prerequisites=prerequisites,
        corequisites=corequisites,
        url=row.url,
    )


def course_from_row(row: CourseRow) -> Course:
    code = row.course_code
    if not code:
        raise MalformedRecord("course", code, "empty course code")
    if row.duration is None or row.duration <= 0:
        raise MalformedRecord("course", code, f"duration {row.duration!r} is not positive")
    try:
        degree = Degree(row.degree)
    except ValueError as exc:
        raise MalformedRecord("course", code, f"unknown degree {row.degree!r}") from exc

    modules = CourseModules()
    for entry in row.modules:
        ref = ModuleRef(module_code=entry.module_code, year=entry.year)
        if entry.kind == "core":
            modules.core.append(ref)
        elif entry.kind == "optional":
            modules.optional.append(ref)
        else:
            raise MalformedRecord("course", code, f"unknown module kind {entry.kind!r}")

    return Course(
        course_code=code,
        name=row.name,
        degree=degree,
        department=row.department,
        duration=row.duration,
        entry_requirements=row.entry_requirements,
        description=row.description,
        url=row.url,
        modules=modules,
    )
