"""Component assignment, include resolution and graph aggregation."""

from .aggregate import edge_set, linked_components
from .assignment import assign_files_to_components
from .index import FileIndex
from .resolver import IncludeResolver, ResolutionStats, resolve_file_dependencies

__all__ = [
    "FileIndex",
    "IncludeResolver",
    "ResolutionStats",
    "assign_files_to_components",
    "edge_set",
    "linked_components",
    "resolve_file_dependencies",
]
