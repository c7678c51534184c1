"""Component dependency extraction for C/C++ source trees."""

from .config import CppDepConfig, load_config
from .models import Component, Dependency, Edge, Project, SourceFile
from .pipeline import DependencyPipeline, PipelineResult

__version__ = "0.1.0"

__all__ = [
    "Component",
    "CppDepConfig",
    "Dependency",
    "DependencyPipeline",
    "Edge",
    "PipelineResult",
    "Project",
    "SourceFile",
    "load_config",
]
