from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from coursemap.models.base import Base


class Module(Base):
    __tablename__ = "modules"

    id = Column(Integer, primary_key=True, index=True)
    module_code = Column(String, nullable=False, unique=True, index=True)
    title = Column(String, nullable=False)
    credit_value = Column(Float, nullable=False)
    summary = Column(Text, default="")
    learning_outcomes = Column(JSON, default=list)
    assessment_methods = Column(JSON, default=list)  # [{"method": ..., "percentage": ...}]
    course_year = Column(Integer, nullable=True)
    semester = Column(String, default="Full Year")
    is_optional = Column(Boolean, default=False)
    url = Column(String, nullable=True)
    last_updated = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    requisites = relationship(
        "ModuleRequisite",
        back_populates="module",
        order_by="ModuleRequisite.position",
        cascade="all, delete-orphan",
    )


class ModuleRequisite(Base):
    __tablename__ = "module_requisites"

    id = Column(Integer, primary_key=True, index=True)
    module_id = Column(Integer, ForeignKey("modules.id"), nullable=False, index=True)
    # Not a foreign key: scraped codes may point at modules we never stored.
    requisite_code = Column(String, nullable=False, index=True)
    relation = Column(String, nullable=False, default="prerequisite")  # prerequisite/corequisite
    position = Column(Integer, nullable=False, default=0)

    module = relationship("Module", back_populates="requisites")
