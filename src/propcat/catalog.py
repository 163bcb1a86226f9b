"""Property catalog: records keyed by canonical path, and the walker that builds it."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Iterator

from propcat.docs import extract_summary
from propcat.exit_codes import (
    CatalogFrozenError,
    DuplicateCanonicalPathError,
    DuplicateClassNameError,
    StartClassNotFoundError,
)
from propcat.languages.base import DeclarationNode, enclosing_class, find_class, iter_preorder
from propcat.resolver import CanonicalPathResolver

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyRecord:
    name: str
    class_name: str
    canonical_path: str
    type_name: str
    summary: str = ""
    line: int | None = field(default=None, compare=False)


class Catalog(Mapping):
    """Ordered, duplicate-free mapping of canonical path to PropertyRecord.

    Insertion order is traversal order. Once frozen, ``add`` raises.
    """

    def __init__(self, records=()) -> None:
        self._records: dict[str, PropertyRecord] = {}
        self._frozen = False
        for record in records:
            self.add(record)

    def add(self, record: PropertyRecord) -> None:
        if self._frozen:
            raise CatalogFrozenError(record.canonical_path)
        existing = self._records.get(record.canonical_path)
        if existing is not None:
            raise DuplicateCanonicalPathError(record.canonical_path, existing.line, record.line)
        self._records[record.canonical_path] = record

    def freeze(self) -> "Catalog":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def records(self) -> list[PropertyRecord]:
        return list(self._records.values())

    def __getitem__(self, canonical_path: str) -> PropertyRecord:
        return self._records[canonical_path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"Catalog({len(self._records)} records, {state})"


def build_catalog(
    root: DeclarationNode,
    start_class: str | None = None,
    include_nested: bool = True,
    *,
    track_exits: bool = True,
    strict_docs: bool = False,
) -> Catalog:
    """Walk the declaration tree under *root* and catalog its properties.

    With *start_class*, the walk starts at the first class of that name and
    canonical paths begin with it. With ``include_nested=False`` only the
    properties declared directly in the start class (or, without a start
    class, in top-level classes) are kept; nested classes are still walked.

    *track_exits* selects stack resolution (the walker reports leaving each
    class). Without it, resolution relies on name truncation alone and the
    tree must not reuse a class name at two positions.

    Raises StartClassNotFoundError, DuplicateCanonicalPathError,
    DuplicateClassNameError, or DocumentationParseError (only with
    *strict_docs*).
    """
    top = root
    if start_class is not None:
        top = find_class(root, start_class)
        if top is None:
            raise StartClassNotFoundError(start_class)
    if not track_exits:
        check_unique_class_names(top)

    walker = _CatalogWalker(top, start_class, include_nested, track_exits, strict_docs)
    catalog = walker.run()
    log.info("Catalogued %d properties under %s", len(catalog), start_class or "<root>")
    return catalog.freeze()


def check_unique_class_names(top: DeclarationNode) -> None:
    """Raise DuplicateClassNameError if a class name occurs with two lineages under *top*."""
    seen: dict[str, set[str]] = {}
    for node in iter_preorder(top):
        if node.is_class:
            seen.setdefault(node.identifier, set()).add(".".join(_relative_lineage(node, top)))
    for name, lineages in seen.items():
        if len(lineages) > 1:
            raise DuplicateClassNameError(name, sorted(lineages))


def _relative_lineage(node: DeclarationNode, top: DeclarationNode) -> list[str]:
    names = []
    current: DeclarationNode | None = node
    while current is not None:
        if current.is_class:
            names.append(current.identifier)
        if current is top:
            break
        current = current.parent
    names.reverse()
    return names


class _CatalogWalker:
    def __init__(self, top, start_class, include_nested, track_exits, strict_docs):
        self._top = top
        self._start_class = start_class
        self._include_nested = include_nested
        self._track_exits = track_exits
        self._strict_docs = strict_docs
        self._resolver = CanonicalPathResolver(track_exits=track_exits)
        self._catalog = Catalog()

    def run(self) -> Catalog:
        self._walk(self._top)
        return self._catalog

    def _walk(self, node):
        if node.is_class:
            self._resolver.enter_class(self._parent_name(node), node.identifier)
            for child in node.children:
                self._walk(child)
            if self._track_exits:
                self._resolver.exit_class()
        elif node.is_property:
            self._visit_property(node)
        else:
            for child in node.children:
                self._walk(child)

    def _parent_name(self, node) -> str | None:
        if node is self._top:
            return None
        parent = enclosing_class(node)
        return parent.identifier if parent is not None else None

    def _visit_property(self, node):
        if enclosing_class(node) is None:
            log.debug("Skipping %s at line %d: not declared in a class", node.identifier, node.line)
            return
        resolver = self._resolver
        canonical_path = resolver.path_for(node.identifier)
        record = PropertyRecord(
            name=node.identifier,
            class_name=resolver.current_class or "",
            canonical_path=canonical_path,
            type_name=node.type_name,
            summary=extract_summary(node.leading_trivia, strict=self._strict_docs, context=canonical_path),
            line=node.line,
        )
        if self._include_nested or self._is_top_level(resolver.lineage):
            self._catalog.add(record)

    def _is_top_level(self, lineage) -> bool:
        # a class inside a struct or interface also has a lineage of one
        if self._start_class is not None:
            return lineage == (self._start_class,)
        return len(lineage) == 1
