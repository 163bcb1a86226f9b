from __future__ import annotations

import logging

from tree_sitter_language_pack import get_parser

from .base import DeclarationNode, NodeKind, TreeProvider

log = logging.getLogger(__name__)

_GRAMMAR = "csharp"

# Declarations kept as OTHER containers so classes nested in them keep a
# non-class parent.
_CONTAINERS = frozenset(
    {
        "namespace_declaration",
        "file_scoped_namespace_declaration",
        "struct_declaration",
        "interface_declaration",
        "record_declaration",
        "record_struct_declaration",
    }
)

# Walked through as if their children belonged to the enclosing declaration.
_TRANSPARENT = frozenset({"declaration_list", "ERROR"})


class CSharpTreeProvider(TreeProvider):
    """C# declaration tree provider backed by tree-sitter."""

    def __init__(self) -> None:
        self._parser = None

    @property
    def language_name(self) -> str:
        return "c_sharp"

    @property
    def file_extensions(self) -> list[str]:
        return [".cs"]

    def parse(self, source: bytes, file_path: str = "") -> DeclarationNode:
        if self._parser is None:
            self._parser = get_parser(_GRAMMAR)
        tree = self._parser.parse(source)
        if tree.root_node.has_error:
            log.warning("%s contains syntax errors; declarations may be incomplete", file_path or "<source>")
        root = DeclarationNode(NodeKind.OTHER, syntax=tree.root_node.type, line=1)
        self._convert_children(tree.root_node, source, root)
        return root

    def leading_comments(self, node, source: bytes) -> tuple[str, ...]:
        """Comment siblings directly preceding *node*, in source order.

        A comment that starts on the line where the previous declaration
        ends belongs to that declaration and stops the scan.
        """
        comments = []
        prev = node.prev_sibling
        while prev is not None and prev.type == "comment":
            before = prev.prev_sibling
            if before is not None and before.type != "comment" and before.end_point[0] == prev.start_point[0]:
                break
            comments.append(self.node_text(prev, source).strip())
            prev = before
        comments.reverse()
        return tuple(comments)

    # ---- Tree conversion ----

    def _convert_children(self, ts_node, source, owner):
        for child in ts_node.children:
            if child.type == "class_declaration":
                self._convert_class(child, source, owner)
            elif child.type == "property_declaration":
                self._convert_property(child, source, owner)
            elif child.type in _CONTAINERS:
                self._convert_container(child, source, owner)
            elif child.type in _TRANSPARENT:
                self._convert_children(child, source, owner)

    def _convert_class(self, ts_node, source, owner):
        name_node = ts_node.child_by_field_name("name")
        if name_node is None:
            return
        node = owner.add(DeclarationNode(
            NodeKind.CLASS,
            self.node_text(name_node, source),
            leading_trivia=self.leading_comments(ts_node, source),
            line=ts_node.start_point[0] + 1,
            syntax=ts_node.type,
        ))
        body = ts_node.child_by_field_name("body")
        if body is not None:
            self._convert_children(body, source, node)

    def _convert_property(self, ts_node, source, owner):
        name_node = ts_node.child_by_field_name("name")
        if name_node is None:
            return
        type_node = ts_node.child_by_field_name("type")
        owner.add(DeclarationNode(
            NodeKind.PROPERTY,
            self.node_text(name_node, source),
            type_name=self.node_text(type_node, source),
            leading_trivia=self.leading_comments(ts_node, source),
            line=ts_node.start_point[0] + 1,
            syntax=ts_node.type,
        ))

    def _convert_container(self, ts_node, source, owner):
        name_node = ts_node.child_by_field_name("name")
        node = owner.add(DeclarationNode(
            NodeKind.OTHER,
            self.node_text(name_node, source),
            line=ts_node.start_point[0] + 1,
            syntax=ts_node.type,
        ))
        body = ts_node.child_by_field_name("body")
        # file-scoped namespaces hold their members directly
        self._convert_children(body if body is not None else ts_node, source, node)
