import logging

from sqlalchemy.orm import Session

from coursemap.models.course import Course as CourseRow
from coursemap.models.course import CourseModule
from coursemap.models.module import Module as ModuleRow
from coursemap.models.module import ModuleRequisite
from coursemap.schemas.course import CourseCreate
from coursemap.schemas.module import ModuleCreate
from coursemap.services.courses import upsert_courses
from coursemap.services.modules import upsert_modules
from coursemap.services.records import InMemoryRecordStore

logger = logging.getLogger(__name__)

# Same shape as the scraper output, so loading goes through field normalisation.
SAMPLE_COURSES = [
    {
        "courseName": "Mathematics",
        "courseCode": "MATHBSC",
        "degree": "BSc",
        "department": "Mathematics and Statistics",
        "duration": 3,
        "description": "A comprehensive mathematics degree covering pure and applied "
        "mathematics, statistics, and computational methods.",
        "url": "https://www.exeter.ac.uk/undergraduate/degrees/mathematics/mathematics/",
        "modules": {
            "core": [
                {"module": "MTH1001", "year": 1},
                {"module": "MTH1002", "year": 1},
                {"module": "MTH2001", "year": 2},
                {"module": "MTH2002", "year": 2},
                {"module": "MTH3001", "year": 3},
            ],
            "optional": [
                {"module": "MTH2003", "year": 2},
                {"module": "MTH3002", "year": 3},
                {"module": "MTH3003", "year": 3},
            ],
        },
    },
    {
        "courseName": "Computer Science",
        "courseCode": "COMPBSC",
        "degree": "BSc",
        "department": "Computer Science",
        "duration": 3,
        "description": "A modern computer science degree covering programming, algorithms, "
        "software engineering, and artificial intelligence.",
        "url": "https://www.exeter.ac.uk/undergraduate/degrees/computerscience/computerscience/",
        "modules": {
            "core": [
                {"module": "ECM1400", "year": 1},
                {"module": "ECM1410", "year": 1},
                {"module": "ECM2400", "year": 2},
                {"module": "ECM2410", "year": 2},
                {"module": "ECM3400", "year": 3},
            ],
            "optional": [
                {"module": "ECM2420", "year": 2},
                {"module": "ECM3410", "year": 3},
                {"module": "ECM3420", "year": 3},
            ],
        },
    },
]


def _module(code, title, credits, prereqs, summary, outcomes, methods, year, semester, optional):
    return {
        "moduleCode": code,
        "moduleTitle": title,
        "creditValue": credits,
        "prerequisites": prereqs,
        "summaryOfContents": summary,
        "intendedLearningOutcomes": outcomes,
        "assessmentMethods": [{"method": m, "percentage": p} for m, p in methods],
        "courseYear": year,
        "semester": semester,
        "isOptional": optional,
    }


SAMPLE_MODULES = [
    _module(
        "MTH1001", "Calculus and Linear Algebra", 20, [],
        "Introduction to differential and integral calculus, matrices and vector spaces.",
        [
            "Understand fundamental concepts of calculus",
            "Perform matrix operations and solve linear systems",
            "Apply calculus techniques to solve real-world problems",
        ],
        [("Examination", 70), ("Coursework", 30)], 1, "Full Year", False,
    ),
    _module(
        "MTH1002", "Probability and Statistics", 20, [],
        "Basic probability theory, statistical distributions, hypothesis testing.",
        [
            "Calculate probabilities for various scenarios",
            "Understand statistical distributions",
            "Perform hypothesis tests",
        ],
        [("Examination", 80), ("Coursework", 20)], 1, "Full Year", False,
    ),
    _module(
        "MTH2001", "Analysis", 20, ["MTH1001"],
        "Real analysis, sequences, series, continuity and differentiability.",
        [
            "Understand rigorous mathematical proofs",
            "Analyze convergence of sequences and series",
            "Apply analysis techniques to functions",
        ],
        [("Examination", 100)], 2, "Autumn", False,
    ),
    _module(
        "MTH2002", "Abstract Algebra", 20, ["MTH1001"],
        "Group theory, ring theory, field theory and their applications.",
        [
            "Understand abstract algebraic structures",
            "Prove theorems about groups and rings",
            "Apply algebraic concepts to problem solving",
        ],
        [("Examination", 70), ("Coursework", 30)], 2, "Spring", False,
    ),
    _module(
        "MTH2003", "Numerical Methods", 15, ["MTH1001"],
        "Computational approaches to mathematical problems, programming with MATLAB.",
        [
            "Implement numerical algorithms",
            "Use MATLAB for mathematical computation",
            "Analyze numerical errors",
        ],
        [("Coursework", 100)], 2, "Spring", True,
    ),
    _module(
        "MTH3001", "Complex Analysis", 20, ["MTH2001"],
        "Functions of a complex variable, contour integration, residue theory.",
        [
            "Understand complex function theory",
            "Perform contour integration",
            "Apply residue calculus",
        ],
        [("Examination", 100)], 3, "Autumn", False,
    ),
    _module(
        "MTH3002", "Differential Equations", 20, ["MTH2001"],
        "Ordinary and partial differential equations, analytical and numerical solutions.",
        [
            "Solve various types of differential equations",
            "Understand existence and uniqueness theorems",
            "Apply differential equations to modeling",
        ],
        [("Examination", 80), ("Coursework", 20)], 3, "Spring", True,
    ),
    _module(
        "MTH3003", "Mathematical Modeling", 15, ["MTH2001", "MTH1002"],
        "Mathematical modeling of real-world phenomena, optimization techniques.",
        [
            "Develop mathematical models",
            "Use optimization techniques",
            "Validate model solutions",
        ],
        [("Coursework", 100)], 3, "Full Year", True,
    ),
    _module(
        "ECM1400", "Programming", 20, [],
        "Introduction to programming using Python, fundamental algorithms and data structures.",
        [
            "Write programs in Python",
            "Understand basic algorithms",
            "Use fundamental data structures",
        ],
        [("Coursework", 100)], 1, "Full Year", False,
    ),
    _module(
        "ECM1410", "Object-Oriented Programming", 20, ["ECM1400"],
        "Object-oriented programming concepts, Java programming, software design patterns.",
        ["Understand OOP principles", "Program in Java", "Apply design patterns"],
        [("Coursework", 70), ("Examination", 30)], 1, "Spring", False,
    ),
    _module(
        "ECM2400", "Database Systems", 20, ["ECM1400"],
        "Database design, SQL, normalization, transaction processing.",
        [
            "Design relational databases",
            "Write complex SQL queries",
            "Understand transaction processing",
        ],
        [("Examination", 50), ("Coursework", 50)], 2, "Autumn", False,
    ),
    _module(
        "ECM2410", "Software Engineering", 20, ["ECM1410"],
        "Software development lifecycle, requirements engineering, testing, project management.",
        [
            "Understand software development processes",
            "Apply software engineering principles",
            "Work effectively in teams",
        ],
        [("Coursework", 100)], 2, "Spring", False,
    ),
    _module(
        "ECM2420", "Web Development", 15, ["ECM1400"],
        "HTML, CSS, JavaScript, server-side programming, web frameworks.",
        [
            "Create dynamic web applications",
            "Understand client-server architecture",
            "Use modern web frameworks",
        ],
        [("Coursework", 100)], 2, "Full Year", True,
    ),
    _module(
        "ECM3400", "Artificial Intelligence", 20, ["ECM2400"],
        "AI algorithms, machine learning, neural networks, natural language processing.",
        [
            "Understand AI algorithms",
            "Implement machine learning models",
            "Apply AI to real problems",
        ],
        [("Examination", 60), ("Coursework", 40)], 3, "Autumn", False,
    ),
    _module(
        "ECM3410", "Computer Graphics", 20, ["ECM1410"],
        "3D graphics, rendering algorithms, computer animation, graphics programming.",
        [
            "Understand 3D graphics principles",
            "Implement rendering algorithms",
            "Create interactive graphics applications",
        ],
        [("Coursework", 100)], 3, "Spring", True,
    ),
    _module(
        "ECM3420", "Cybersecurity", 15, ["ECM2400"],
        "Network security, cryptography, ethical hacking, security protocols.",
        [
            "Understand security threats",
            "Apply cryptographic techniques",
            "Implement security measures",
        ],
        [("Examination", 50), ("Coursework", 50)], 3, "Spring", True,
    ),
]


def sample_payloads() -> tuple[list[ModuleCreate], list[CourseCreate]]:
    modules = [ModuleCreate.model_validate(item) for item in SAMPLE_MODULES]
    courses = [CourseCreate.model_validate(item) for item in SAMPLE_COURSES]
    return modules, courses


def sample_record_store() -> InMemoryRecordStore:
    modules, courses = sample_payloads()
    return InMemoryRecordStore(
        modules=[m.to_entity() for m in modules],
        courses=[c.to_entity() for c in courses],
    )


def load_sample_data(db: Session, replace: bool = True) -> tuple[int, int]:
    """Seed the database with the sample catalogue; returns (modules, courses)."""
    if replace:
        db.query(CourseModule).delete()
        db.query(CourseRow).delete()
        db.query(ModuleRequisite).delete()
        db.query(ModuleRow).delete()
        db.commit()
    modules, courses = sample_payloads()
    stored_modules = upsert_modules(db, modules)
    stored_courses = upsert_courses(db, courses)
    logger.info(
        "Loaded %d sample module(s) and %d sample course(s)",
        len(stored_modules),
        len(stored_courses),
    )
    return len(stored_modules), len(stored_courses)
