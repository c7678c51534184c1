"""Component summaries rendered as text or JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence

from jinja2 import Environment, FileSystemLoader

from .config import ReportConfig
from .graph import linked_components
from .models import Component, Dependency, Project

_TEMPLATE_NAME = "report.j2"


@dataclass
class ReportOptions:
    """Detail toggles and component filter applied when rendering."""

    show_incoming: bool = False
    show_outgoing: bool = False
    components: List[str] = field(default_factory=list)

    @classmethod
    def from_config(cls, config: ReportConfig) -> "ReportOptions":
        return cls(
            show_incoming=config.show_incoming,
            show_outgoing=config.show_outgoing,
            components=list(config.components),
        )


def select_components(project: Project, names: Sequence[str]) -> List[Component]:
    """Components to report, in discovery order; every one when `names` is empty."""
    if not names:
        return list(project.components)
    wanted = set(names)
    return [component for component in project.components if component.nice_name in wanted]


def _dependency_payload(dependency: Dependency, with_edges: bool) -> Dict[str, object]:
    payload: Dict[str, object] = {
        "component": dependency.component.nice_name,
        "count": dependency.count,
    }
    if with_edges:
        payload["edges"] = [
            {"source": edge.source.path, "target": edge.target.path} for edge in dependency.edges
        ]
    return payload


def summarise_component(component: Component, options: ReportOptions) -> Dict[str, object]:
    incoming, outgoing = linked_components(component)
    return {
        "name": component.nice_name,
        "path": component.path,
        "files": len(component.files),
        "incoming": [_dependency_payload(dep, options.show_incoming) for dep in incoming],
        "outgoing": [_dependency_payload(dep, options.show_outgoing) for dep in outgoing],
    }


class ReportRenderer:
    """Renders the per-component dependency report."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def summarise(self, project: Project, options: ReportOptions) -> List[Dict[str, object]]:
        return [
            summarise_component(component, options)
            for component in select_components(project, options.components)
        ]

    def render_text(self, project: Project, options: ReportOptions | None = None) -> str:
        options = options or ReportOptions()
        template = self._env.get_template(_TEMPLATE_NAME)
        rendered = template.render(
            components=self.summarise(project, options),
            show_incoming=options.show_incoming,
            show_outgoing=options.show_outgoing,
        )
        rendered = rendered.rstrip("\n")
        return f"{rendered}\n" if rendered else ""

    def render_json(self, project: Project, options: ReportOptions | None = None) -> str:
        options = options or ReportOptions()
        payload = {
            "root": project.root,
            "components": self.summarise(project, options),
        }
        return json.dumps(payload, indent=2) + "\n"

    def render(self, project: Project, options: ReportOptions | None = None, *, fmt: str = "text") -> str:
        if fmt == "json":
            return self.render_json(project, options)
        if fmt == "text":
            return self.render_text(project, options)
        raise ValueError(f"Unknown report format: {fmt}")


__all__ = ["ReportOptions", "ReportRenderer", "select_components", "summarise_component"]
