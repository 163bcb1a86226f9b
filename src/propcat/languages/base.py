from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Iterator


class NodeKind(enum.Enum):
    CLASS = "class"
    PROPERTY = "property"
    OTHER = "other"


class DeclarationNode:
    """A declaration in the tree handed to the catalog builder.

    Providers build these once per parse; the builder, resolver and
    extractor only read them.
    """

    __slots__ = ("kind", "identifier", "type_name", "parent", "children", "leading_trivia", "line", "syntax")

    def __init__(
        self,
        kind: NodeKind,
        identifier: str = "",
        *,
        type_name: str = "",
        leading_trivia: tuple[str, ...] = (),
        line: int = 0,
        syntax: str = "",
    ) -> None:
        self.kind = kind
        self.identifier = identifier
        self.type_name = type_name
        self.leading_trivia = tuple(leading_trivia)
        self.line = line
        self.syntax = syntax
        self.parent: DeclarationNode | None = None
        self.children: list[DeclarationNode] = []

    def add(self, child: DeclarationNode) -> DeclarationNode:
        child.parent = self
        self.children.append(child)
        return child

    @property
    def is_class(self) -> bool:
        return self.kind is NodeKind.CLASS

    @property
    def is_property(self) -> bool:
        return self.kind is NodeKind.PROPERTY

    def __repr__(self) -> str:
        return f"DeclarationNode({self.kind.value}, {self.identifier!r}, line={self.line})"


def iter_preorder(node: DeclarationNode) -> Iterator[DeclarationNode]:
    """Yield *node* and its descendants in document (pre-)order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def enclosing_class(node: DeclarationNode) -> DeclarationNode | None:
    """Return the parent of *node* when that parent is a class, else None."""
    parent = node.parent
    if parent is not None and parent.is_class:
        return parent
    return None


def find_class(root: DeclarationNode, name: str) -> DeclarationNode | None:
    """First class named *name* in pre-order, or None."""
    for node in iter_preorder(root):
        if node.is_class and node.identifier == name:
            return node
    return None


class TreeProvider(ABC):
    """Base class for language-specific declaration tree providers."""

    @property
    @abstractmethod
    def language_name(self) -> str: ...

    @property
    @abstractmethod
    def file_extensions(self) -> list[str]: ...

    @abstractmethod
    def parse(self, source: bytes, file_path: str = "") -> DeclarationNode:
        """Parse *source* and return the root of its declaration tree.

        The root is an OTHER node standing for the compilation unit. Class
        and property nodes carry their identifier, properties their type
        text, and both their leading comments as ``leading_trivia``.
        """
        ...

    def node_text(self, node, source: bytes) -> str:
        if node is None:
            return ""
        return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
