from coursemap.models.course import Course, CourseModule
from coursemap.models.module import Module, ModuleRequisite

__all__ = ["Course", "CourseModule", "Module", "ModuleRequisite"]
