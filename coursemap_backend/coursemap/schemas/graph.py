from typing import Any

from pydantic import BaseModel

from coursemap.schemas.course import CourseResponse
from coursemap.services.graph import EdgeType, NodeType


class GraphNodeOut(BaseModel):
    id: str
    label: str
    type: NodeType
    depth: int | None = None
    data: dict[str, Any] = {}

    model_config = {"from_attributes": True}


class GraphEdgeOut(BaseModel):
    id: str
    source: str
    target: str
    type: EdgeType

    model_config = {"from_attributes": True}


class PrerequisiteGraphResponse(BaseModel):
    nodes: list[GraphNodeOut]
    edges: list[GraphEdgeOut]

    model_config = {"from_attributes": True}


class CourseGraphResponse(PrerequisiteGraphResponse):
    course: CourseResponse
