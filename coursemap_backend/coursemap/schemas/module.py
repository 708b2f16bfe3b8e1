from pydantic import AliasChoices, BaseModel, Field, field_validator

from coursemap.services.records import AssessmentMethod, Module, Semester


class AssessmentMethodIn(BaseModel):
    method: str
    percentage: float | None = None

    model_config = {"from_attributes": True}


class ModuleCreate(BaseModel):
    """A module record as produced by scrapers or seed files.

    Accepts the camelCase names used by the scraper output as well as the
    canonical snake_case ones.
    """

    module_code: str = Field(validation_alias=AliasChoices("module_code", "moduleCode", "code"))
    title: str = Field(validation_alias=AliasChoices("title", "moduleTitle", "name"))
    credit_value: float = Field(
        gt=0, validation_alias=AliasChoices("credit_value", "creditValue", "credits")
    )
    summary: str = Field(
        default="", validation_alias=AliasChoices("summary", "summaryOfContents")
    )
    learning_outcomes: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("learning_outcomes", "intendedLearningOutcomes"),
    )
    assessment_methods: list[AssessmentMethodIn] = Field(
        default_factory=list,
        validation_alias=AliasChoices("assessment_methods", "assessmentMethods"),
    )
    course_year: int | None = Field(
        default=None, ge=1, le=4, validation_alias=AliasChoices("course_year", "courseYear", "year")
    )
    semester: Semester = Semester.FULL_YEAR
    is_optional: bool = Field(default=False, validation_alias=AliasChoices("is_optional", "isOptional"))
    prerequisites: list[str] = []
    corequisites: list[str] = []
    url: str | None = None

    model_config = {"from_attributes": True}

    @field_validator("module_code")
    @classmethod
    def _strip_code(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("module code must not be empty")
        return value

    @field_validator("semester", mode="before")
    @classmethod
    def _parse_semester(cls, value):
        return Semester.parse(value)

    @field_validator("prerequisites", "corequisites")
    @classmethod
    def _strip_requisites(cls, value: list[str]) -> list[str]:
        # Duplicates and self references are kept as declared.
        return [code.strip() for code in value if code and code.strip()]

    def to_entity(self) -> Module:
        return Module(
            module_code=self.module_code,
            title=self.title,
            credit_value=self.credit_value,
            summary=self.summary,
            learning_outcomes=list(self.learning_outcomes),
            assessment_methods=[
                AssessmentMethod(method=m.method, percentage=m.percentage)
                for m in self.assessment_methods
            ],
            course_year=self.course_year,
            semester=self.semester,
            is_optional=self.is_optional,
            prerequisites=list(self.prerequisites),
            corequisites=list(self.corequisites),
            url=self.url,
        )


class ModuleCreateRequest(BaseModel):
    modules: list[ModuleCreate]


class ModuleResponse(ModuleCreate):
    pass


class ModuleSummary(BaseModel):
    module_code: str
    title: str
    credit_value: float
    course_year: int | None = None
    semester: Semester = Semester.FULL_YEAR

    model_config = {"from_attributes": True}

    @field_validator("semester", mode="before")
    @classmethod
    def _parse_semester(cls, value):
        return Semester.parse(value)


class ModuleDetailResponse(BaseModel):
    module: ModuleResponse
    prerequisites: list[ModuleSummary] = []
    dependents: list[ModuleSummary] = []

    model_config = {"from_attributes": True}
