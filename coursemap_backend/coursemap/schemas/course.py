from pydantic import AliasChoices, BaseModel, Field, field_validator

from coursemap.schemas.module import ModuleResponse
from coursemap.services.records import Course, CourseModules, Degree, ModuleRef


class ModuleRefIn(BaseModel):
    module_code: str = Field(
        validation_alias=AliasChoices("module_code", "moduleCode", "module", "code")
    )
    year: int | None = None

    model_config = {"from_attributes": True}

    @field_validator("module_code")
    @classmethod
    def _strip_code(cls, value: str) -> str:
        return value.strip()


class CourseModulesIn(BaseModel):
    core: list[ModuleRefIn] = []
    optional: list[ModuleRefIn] = []

    model_config = {"from_attributes": True}


class CourseCreate(BaseModel):
    course_code: str = Field(validation_alias=AliasChoices("course_code", "courseCode", "code"))
    name: str = Field(validation_alias=AliasChoices("name", "courseName"))
    degree: Degree
    department: str
    duration: int = Field(gt=0)
    entry_requirements: str | None = Field(
        default=None, validation_alias=AliasChoices("entry_requirements", "entryRequirements")
    )
    description: str | None = None
    url: str | None = None
    modules: CourseModulesIn = Field(default_factory=CourseModulesIn)

    model_config = {"from_attributes": True}

    @field_validator("course_code")
    @classmethod
    def _strip_code(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("course code must not be empty")
        return value

    def to_entity(self) -> Course:
        return Course(
            course_code=self.course_code,
            name=self.name,
            degree=self.degree,
            department=self.department,
            duration=self.duration,
            entry_requirements=self.entry_requirements,
            description=self.description,
            url=self.url,
            modules=CourseModules(
                core=[ModuleRef(r.module_code, r.year) for r in self.modules.core],
                optional=[ModuleRef(r.module_code, r.year) for r in self.modules.optional],
            ),
        )


class CourseCreateRequest(BaseModel):
    courses: list[CourseCreate]


class CourseResponse(CourseCreate):
    pass


class CourseSummary(BaseModel):
    course_code: str
    name: str
    degree: Degree
    department: str
    duration: int
    url: str | None = None

    model_config = {"from_attributes": True}


class CourseDetailResponse(BaseModel):
    course: CourseResponse
    modules: list[ModuleResponse] = []

    model_config = {"from_attributes": True}
