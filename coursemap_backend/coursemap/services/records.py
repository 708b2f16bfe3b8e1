from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Protocol


class Semester(str, Enum):
    AUTUMN = "Autumn"
    SPRING = "Spring"
    SUMMER = "Summer"
    FULL_YEAR = "Full Year"

    @classmethod
    def parse(cls, value: "str | Semester | None") -> "Semester":
        if value is None or value == "":
            return cls.FULL_YEAR
        if isinstance(value, Semester):
            return value
        key = "".join(ch for ch in str(value).lower() if ch.isalpha())
        for member in cls:
            if member.value.lower().replace(" ", "") == key:
                return member
        raise ValueError(f"Unknown semester '{value}'")


class Degree(str, Enum):
    BSC = "BSc"
    BA = "BA"
    BENG = "BEng"
    MSC = "MSc"
    MA = "MA"
    MENG = "MEng"
    PHD = "PhD"
    MRES = "MRes"


@dataclass
class AssessmentMethod:
    method: str
    percentage: float | None = None


@dataclass
class Module:
    module_code: str
    title: str
    credit_value: float
    summary: str = ""
    learning_outcomes: list[str] = field(default_factory=list)
    assessment_methods: list[AssessmentMethod] = field(default_factory=list)
    course_year: int | None = None
    semester: Semester = Semester.FULL_YEAR
    is_optional: bool = False
    prerequisites: list[str] = field(default_factory=list)
    corequisites: list[str] = field(default_factory=list)
    url: str | None = None


@dataclass
class ModuleRef:
    module_code: str
    year: int | None = None


@dataclass
class CourseModules:
    core: list[ModuleRef] = field(default_factory=list)
    optional: list[ModuleRef] = field(default_factory=list)

    def core_codes(self) -> list[str]:
        return [ref.module_code for ref in self.core]

    def optional_codes(self) -> list[str]:
        return [ref.module_code for ref in self.optional]

    def all_codes(self) -> list[str]:
        """Every referenced code once, core first, in declaration order."""
        seen: dict[str, None] = {}
        for code in self.core_codes() + self.optional_codes():
            seen.setdefault(code, None)
        return list(seen)


@dataclass
class Course:
    course_code: str
    name: str
    degree: Degree
    department: str
    duration: int
    entry_requirements: str | None = None
    description: str | None = None
    url: str | None = None
    modules: CourseModules = field(default_factory=CourseModules)


class RecordStore(Protocol):
    """Read side of the course/module record store.

    Lookups return ``None`` (or omit entries) for codes that are not stored;
    infrastructure failures raise ``StoreError`` subclasses.
    """

    def find_course_by_code(self, code: str) -> Course | None: ...

    def find_modules_by_codes(self, codes: set[str]) -> list[Module]: ...

    def find_module_by_code(self, code: str) -> Module | None: ...

    def find_modules_requiring(self, code: str) -> list[Module]: ...


class InMemoryRecordStore:
    """Dict-backed store; ``lookups`` records each call as ``(method, argument)``."""

    def __init__(self, modules: Iterable[Module] = (), courses: Iterable[Course] = ()):
        # Later records replace earlier ones with the same code.
        self.modules = {module.module_code: module for module in modules}
        self.courses = {course.course_code: course for course in courses}
        self.lookups: list[tuple[str, object]] = []

    def find_course_by_code(self, code: str) -> Course | None:
        self.lookups.append(("find_course_by_code", code))
        return self.courses.get(code)

    def find_modules_by_codes(self, codes: set[str]) -> list[Module]:
        self.lookups.append(("find_modules_by_codes", frozenset(codes)))
        return [self.modules[code] for code in sorted(codes) if code in self.modules]

    def find_module_by_code(self, code: str) -> Module | None:
        self.lookups.append(("find_module_by_code", code))
        return self.modules.get(code)

    def find_modules_requiring(self, code: str) -> list[Module]:
        self.lookups.append(("find_modules_requiring", code))
        return [
            module
            for module in sorted(self.modules.values(), key=lambda m: m.module_code)
            if code in module.prerequisites
        ]
