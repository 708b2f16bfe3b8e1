import logging
from dataclasses import dataclass, field

from sqlalchemy import or_
from sqlalchemy.orm import Session

from coursemap.core.errors import NotFound
from coursemap.models.course import Course as CourseRow
from coursemap.models.course import CourseModule
from coursemap.schemas.course import CourseCreate
from coursemap.services.records import Course, Module, RecordStore
from coursemap.services.store import course_from_row

logger = logging.getLogger(__name__)


@dataclass
class CourseDetail:
    course: Course
    modules: list[Module] = field(default_factory=list)


def upsert_courses(db: Session, courses: list[CourseCreate]) -> list[Course]:
    codes = {c.course_code for c in courses}
    existing = {
        row.course_code: row
        for row in db.query(CourseRow).filter(CourseRow.course_code.in_(codes)).all()
    }
    touched: dict[str, CourseRow] = {}
    for payload in courses:
        row = existing.get(payload.course_code)
        if row is None:
            row = CourseRow(course_code=payload.course_code)
            db.add(row)
            existing[payload.course_code] = row
        _apply_course(row, payload)
        touched[payload.course_code] = row
    db.commit()
    for row in touched.values():
        db.refresh(row)
    logger.info("Upserted %d course(s)", len(touched))
    return [course_from_row(row) for row in touched.values()]


def _apply_course(row: CourseRow, payload: CourseCreate) -> None:
    row.name = payload.name
    row.degree = payload.degree.value
    row.department = payload.department
    row.duration = payload.duration
    row.entry_requirements = payload.entry_requirements
    row.description = payload.description
    row.url = payload.url
    refs = [("core", ref) for ref in payload.modules.core]
    refs += [("optional", ref) for ref in payload.modules.optional]
    row.modules = [
        CourseModule(module_code=ref.module_code, year=ref.year, kind=kind, position=position)
        for position, (kind, ref) in enumerate(refs)
    ]


def list_courses(
    db: Session,
    search: str | None = None,
    degree: str | None = None,
    department: str | None = None,
) -> list[CourseRow]:
    query = db.query(CourseRow)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(CourseRow.name.ilike(pattern), CourseRow.course_code.ilike(pattern))
        )
    if degree:
        query = query.filter(CourseRow.degree == degree)
    if department:
        query = query.filter(CourseRow.department.ilike(f"%{department}%"))
    return query.order_by(CourseRow.name).all()


def get_course_detail(store: RecordStore, course_code: str) -> CourseDetail | NotFound:
    course = store.find_course_by_code(course_code)
    if course is None:
        return NotFound("course", course_code)
    referenced = course.modules.all_codes()
    found = {m.module_code: m for m in store.find_modules_by_codes(set(referenced))}
    return CourseDetail(
        course=course,
        modules=[found[code] for code in referenced if code in found],
    )
