"""View Schemas — request/response models for view sessions and selection.

Invariants:
    - query is the page's query string, forwarded verbatim (with or without '?')
    - SelectionRequest ids keep their JSON type (str stays str, numbers stay numbers)
    - ViewState always carries the details text and fit generation
"""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from bomviz.schemas.graph import ElementIdField, GraphData


class ViewCreate(BaseModel):
    """Open a view session for one browser page."""
    query: str = Field("", max_length=2048)

    @field_validator("query")
    @classmethod
    def strip_query(cls, v: str) -> str:
        return v.strip()


class ViewLoad(BaseModel):
    """Refetch the graph, optionally with a different query string."""
    query: str | None = Field(None, max_length=2048)


class SelectionRequest(BaseModel):
    """Ids under the cursor, as reported by the canvas click event."""
    nodes: list[ElementIdField] = []
    edges: list[ElementIdField] = []


class DetailsResponse(BaseModel):
    """Current details panel text."""
    content: str


class ViewState(BaseModel):
    """Everything the page needs to render the current view."""
    id: UUID
    path: str
    graph: GraphData
    details: str
    fit_generation: int
    last_error_code: str | None = None
