"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Core dataclasses (GephiParseOptions, RenderOptions) are built from settings,
      core never reads settings itself

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults match the BDIO viewer page: data/graph.json, no fetch timeout,
      free layout, default colors
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bomviz.core.domain_types import DEFAULT_GRAPH_PATH
from bomviz.core.gephi_adapter import GephiParseOptions
from bomviz.core.render_protocols import RenderOptions


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Graph source
    graph_base_url: str = "http://localhost:8000/"
    graph_path: str = DEFAULT_GRAPH_PATH
    # None = wait forever, the view keeps showing the last good graph
    graph_fetch_timeout_seconds: float | None = None

    @field_validator("graph_base_url", mode="before")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Relative graph paths resolve under the base URL, not beside it."""
        if isinstance(v, str) and not v.endswith("/"):
            return v + "/"
        return v

    # Gephi parsing
    graph_fixed_positions: bool = False
    graph_parse_color: bool = False
    graph_inherit_edge_color: bool = False

    # Rendering engine
    render_node_shape: str = "dot"
    render_font_face: str = "Tahoma"
    render_edge_width: float = 0.15
    render_arrow_scale_factor: float = 0.5
    render_smooth_type: str = "continuous"
    render_tooltip_delay_ms: int = 200
    render_hide_edges_on_drag: bool = True
    render_stabilization: bool = False
    render_gravitational_constant: float = -10000
    render_spring_constant: float = 0.002
    render_spring_length: float = 150

    # API
    cors_origins: list[str] = ["http://localhost:5173"]
    static_dir: str = "static"
    # oldest view session is closed once this many are open
    max_views: int = Field(256, ge=1)

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def parse_options(self) -> GephiParseOptions:
        return GephiParseOptions(
            fixed=self.graph_fixed_positions,
            parse_color=self.graph_parse_color,
            inherit_color=self.graph_inherit_edge_color,
        )

    def render_options(self) -> RenderOptions:
        return RenderOptions(
            node_shape=self.render_node_shape,
            font_face=self.render_font_face,
            edge_width=self.render_edge_width,
            arrow_scale_factor=self.render_arrow_scale_factor,
            smooth_type=self.render_smooth_type,
            tooltip_delay_ms=self.render_tooltip_delay_ms,
            hide_edges_on_drag=self.render_hide_edges_on_drag,
            stabilization=self.render_stabilization,
            gravitational_constant=self.render_gravitational_constant,
            spring_constant=self.render_spring_constant,
            spring_length=self.render_spring_length,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
