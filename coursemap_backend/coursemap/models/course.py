from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from coursemap.models.base import Base


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    course_code = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    degree = Column(String, nullable=False)  # BSc/BA/BEng/MSc/MA/MEng/PhD/MRes
    department = Column(String, nullable=False)
    duration = Column(Integer, nullable=False)
    entry_requirements = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    url = Column(String, nullable=True)
    last_updated = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    modules = relationship(
        "CourseModule",
        back_populates="course",
        order_by="CourseModule.position",
        cascade="all, delete-orphan",
    )


class CourseModule(Base):
    __tablename__ = "course_modules"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    module_code = Column(String, nullable=False, index=True)
    year = Column(Integer, nullable=True)
    kind = Column(String, nullable=False, default="core")  # core/optional
    position = Column(Integer, nullable=False, default=0)

    course = relationship("Course", back_populates="modules")
