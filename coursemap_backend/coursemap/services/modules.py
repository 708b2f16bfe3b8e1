import logging
from dataclasses import dataclass, field

from sqlalchemy import or_
from sqlalchemy.orm import Session

from coursemap.core.errors import NotFound
from coursemap.models.module import Module as ModuleRow
from coursemap.models.module import ModuleRequisite
from coursemap.schemas.module import ModuleCreate
from coursemap.services.records import Module, RecordStore
from coursemap.services.store import module_from_row

logger = logging.getLogger(__name__)


@dataclass
class ModuleDetail:
    module: Module
    prerequisites: list[Module] = field(default_factory=list)
    dependents: list[Module] = field(default_factory=list)


def upsert_modules(db: Session, modules: list[ModuleCreate]) -> list[Module]:
    """Insert or replace modules keyed by module code.

    Replacing a module also replaces its prerequisite and corequisite lists.
    """
    codes = {m.module_code for m in modules}
    existing = {
        row.module_code: row
        for row in db.query(ModuleRow).filter(ModuleRow.module_code.in_(codes)).all()
    }
    touched: dict[str, ModuleRow] = {}
    for payload in modules:
        row = existing.get(payload.module_code)
        if row is None:
            row = ModuleRow(module_code=payload.module_code)
            db.add(row)
            existing[payload.module_code] = row
        _apply_module(row, payload)
        touched[payload.module_code] = row
    db.commit()
    for row in touched.values():
        db.refresh(row)
    logger.info("Upserted %d module(s)", len(touched))
    return [module_from_row(row) for row in touched.values()]


def _apply_module(row: ModuleRow, payload: ModuleCreate) -> None:
    row.title = payload.title
    row.credit_value = payload.credit_value
    row.summary = payload.summary
    row.learning_outcomes = list(payload.learning_outcomes)
    row.assessment_methods = [m.model_dump() for m in payload.assessment_methods]
    row.course_year = payload.course_year
    row.semester = payload.semester.value
    row.is_optional = payload.is_optional
    row.url = payload.url
    requisites = [("prerequisite", code) for code in payload.prerequisites]
    requisites += [("corequisite", code) for code in payload.corequisites]
    row.requisites = [
        ModuleRequisite(requisite_code=code, relation=relation, position=position)
        for position, (relation, code) in enumerate(requisites)
    ]


def list_modules(
    db: Session,
    search: str | None = None,
    credit_value: float | None = None,
    year: int | None = None,
) -> list[ModuleRow]:
    query = db.query(ModuleRow)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(ModuleRow.title.ilike(pattern), ModuleRow.module_code.ilike(pattern))
        )
    if credit_value is not None:
        query = query.filter(ModuleRow.credit_value == credit_value)
    if year is not None:
        query = query.filter(ModuleRow.course_year == year)
    return query.order_by(ModuleRow.module_code).all()


def get_module_detail(store: RecordStore, module_code: str) -> ModuleDetail | NotFound:
    module = store.find_module_by_code(module_code)
    if module is None:
        return NotFound("module", module_code)
    found = {m.module_code: m for m in store.find_modules_by_codes(set(module.prerequisites))}
    prerequisites = [found[code] for code in dict.fromkeys(module.prerequisites) if code in found]
    return ModuleDetail(
        module=module,
        prerequisites=prerequisites,
        dependents=store.find_modules_requiring(module_code),
    )
