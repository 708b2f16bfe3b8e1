"""Tests for ingestion schemas and field normalisation."""

import pytest
from pydantic import ValidationError

from coursemap.schemas.course import CourseCreate
from coursemap.schemas.module import ModuleCreate
from coursemap.services.records import Degree, Semester


class TestSemester:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Autumn", Semester.AUTUMN),
            ("spring", Semester.SPRING),
            ("Full Year", Semester.FULL_YEAR),
            ("FullYear", Semester.FULL_YEAR),
            ("full-year", Semester.FULL_YEAR),
            (None, Semester.FULL_YEAR),
        ],
    )
    def test_parse(self, raw, expected):
        assert Semester.parse(raw) == expected

    def test_unknown_semester(self):
        with pytest.raises(ValueError):
            Semester.parse("Winter")


class TestModuleCreate:
    def test_accepts_scraper_field_names(self):
        module = ModuleCreate.model_validate(
            {
                "moduleCode": " MTH2001 ",
                "moduleTitle": "Analysis",
                "creditValue": 20,
                "summaryOfContents": "Real analysis.",
                "intendedLearningOutcomes": ["Prove things"],
                "assessmentMethods": [{"method": "Examination", "percentage": 100}],
                "courseYear": 2,
                "semester": "Autumn",
                "isOptional": True,
                "prerequisites": ["MTH1001", " MTH1001 ", ""],
            }
        )

        assert module.module_code == "MTH2001"
        assert module.credit_value == 20
        assert module.summary == "Real analysis."
        assert module.course_year == 2
        assert module.is_optional is True
        assert module.prerequisites == ["MTH1001", "MTH1001"]

    def test_credits_alias_and_defaults(self):
        module = ModuleCreate.model_validate({"code": "X1", "title": "X", "credits": 7.5})

        assert module.credit_value == 7.5
        assert module.semester == Semester.FULL_YEAR
        assert module.learning_outcomes == []

    @pytest.mark.parametrize(
        "override",
        [{"credit_value": 0}, {"course_year": 5}, {"semester": "Winter"}, {"module_code": "  "}],
    )
    def test_rejects_invalid_values(self, override):
        payload = {"module_code": "X1", "title": "X", "credit_value": 10}
        payload.update(override)

        with pytest.raises(ValidationError):
            ModuleCreate.model_validate(payload)

    def test_to_entity(self):
        entity = ModuleCreate.model_validate(
            {"module_code": "X1", "title": "X", "credit_value": 10, "prerequisites": ["Y"]}
        ).to_entity()

        assert entity.module_code == "X1"
        assert entity.prerequisites == ["Y"]


class TestCourseCreate:
    def test_accepts_scraper_field_names(self):
        course = CourseCreate.model_validate(
            {
                "courseCode": "MATHBSC",
                "courseName": "Mathematics",
                "degree": "BSc",
                "department": "Mathematics and Statistics",
                "duration": 3,
                "entryRequirements": "A*AA",
                "modules": {
                    "core": [{"module": "MTH1001", "year": 1}],
                    "optional": [{"moduleCode": "MTH2003"}],
                },
            }
        )

        entity = course.to_entity()
        assert entity.degree == Degree.BSC
        assert entity.entry_requirements == "A*AA"
        assert entity.modules.core_codes() == ["MTH1001"]
        assert entity.modules.optional[0].year is None

    def test_unknown_degree(self):
        with pytest.raises(ValidationError):
            CourseCreate.model_validate(
                {"code": "X", "name": "X", "degree": "BTech", "department": "D", "duration": 3}
            )
