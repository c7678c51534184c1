"""Suffix index from include spellings to the files they may refer to."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, Iterator, List

from ..models import SourceFile


def path_suffixes(path: str) -> Iterator[str]:
    """Yield `path` and every suffix left after stripping leading segments.

    ``a/b/header.h`` yields ``a/b/header.h``, ``b/header.h`` and ``header.h``.
    """
    yield path
    index = path.find("/")
    while index != -1:
        path = path[index + 1 :]
        yield path
        index = path.find("/")


class FileIndex:
    """Maps every plausible include spelling to the files sharing it."""

    def __init__(self) -> None:
        self._by_suffix: Dict[str, List[SourceFile]] = defaultdict(list)

    @classmethod
    def build(cls, files: Iterable[SourceFile]) -> "FileIndex":
        index = cls()
        for source in files:
            index.add(source)
        return index

    def add(self, source: SourceFile) -> None:
        for suffix in path_suffixes(source.path):
            self._by_suffix[suffix].append(source)

    def lookup(self, include: str) -> List[SourceFile]:
        """Return candidates in discovery order; empty when nothing matches."""
        return list(self._by_suffix.get(include, ()))

    def __contains__(self, include: object) -> bool:
        return include in self._by_suffix

    def __len__(self) -> int:
        return len(self._by_suffix)


__all__ = ["FileIndex", "path_suffixes"]
