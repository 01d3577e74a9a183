"""CSS tree model: Root, Rule, AtRule, Declaration and Comment nodes.

The tree is mutated in place by transforms. Containers keep track of the
iterations running over their children so that nodes inserted or removed
during a walk shift the iteration cursor instead of being skipped or
revisited.
"""

from __future__ import annotations

import itertools
from typing import Callable, Iterator

from viewport_toggle._text import split_top_level

INDENT = "  "

# Callback return value that stops a walk early.
STOP = False

Visitor = Callable[["Node"], "bool | None"]


class Node:
    """Base class for every node in the tree."""

    type = "node"

    def __init__(self, source: str | None = None) -> None:
        self.parent: Container | None = None
        self.source = source

    # ---- tree navigation ----

    def root(self) -> "Node":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def next(self) -> "Node | None":
        if self.parent is None:
            return None
        index = self.parent.index(self)
        nodes = self.parent.nodes
        return nodes[index + 1] if index + 1 < len(nodes) else None

    def prev(self) -> "Node | None":
        if self.parent is None:
            return None
        index = self.parent.index(self)
        return self.parent.nodes[index - 1] if index > 0 else None

    # ---- mutation ----

    def before(self, *nodes: "Node") -> "Node":
        """Insert *nodes* immediately before this node."""
        self._require_parent().insert_before(self, *nodes)
        return self

    def after(self, *nodes: "Node") -> "Node":
        """Insert *nodes* immediately after this node."""
        self._require_parent().insert_after(self, *nodes)
        return self

    def replace_with(self, *nodes: "Node") -> "Node":
        """Put *nodes* in this node's place and detach it."""
        parent = self._require_parent()
        parent.insert_before(self, *nodes)
        parent.remove_child(self)
        return self

    def remove(self) -> "Node":
        if self.parent is not None:
            self.parent.remove_child(self)
        return self

    def clone(self, **overrides: object) -> "Node":
        """Deep-copy this node, detached from any parent.

        Keyword arguments overwrite attributes on the copy, e.g.
        ``rule.clone(selector=".other")``.
        """
        cloned = self._copy()
        for name, value in overrides.items():
            if not hasattr(cloned, name) or name in ("parent", "nodes"):
                raise ValueError(f"Cannot override {name!r} on {self.type} node")
            setattr(cloned, name, value)
        return cloned

    def _copy(self) -> "Node":
        raise NotImplementedError

    def _require_parent(self) -> "Container":
        if self.parent is None:
            raise ValueError(f"{self.type} node has no parent")
        return self.parent

    # ---- serialisation ----

    def to_css(self, depth: int = 0) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_css()


class Declaration(Node):
    """A ``prop: value`` pair inside a rule or at-rule block."""

    type = "decl"

    def __init__(
        self,
        prop: str,
        value: str,
        important: bool = False,
        source: str | None = None,
    ) -> None:
        super().__init__(source)
        self.prop = prop
        self.value = value
        self.important = important

    def _copy(self) -> "Declaration":
        return Declaration(self.prop, self.value, self.important, self.source)

    def to_css(self, depth: int = 0) -> str:
        important = " !important" if self.important else ""
        return f"{INDENT * depth}{self.prop}: {self.value}{important};"

    def __repr__(self) -> str:
        return f"Declaration({self.prop!r}, {self.value!r})"


class Comment(Node):
    """A ``/* ... */`` comment kept in source order."""

    type = "comment"

    def __init__(self, text: str, source: str | None = None) -> None:
        super().__init__(source)
        self.text = text

    def _copy(self) -> "Comment":
        return Comment(self.text, self.source)

    def to_css(self, depth: int = 0) -> str:
        return f"{INDENT * depth}/*{self.text}*/"

    def __repr__(self) -> str:
        return f"Comment({self.text!r})"


class Container(Node):
    """A node holding an ordered list of child nodes."""

    type = "container"

    _iterator_ids = itertools.count()

    def __init__(
        self, nodes: list[Node] | None = None, source: str | None = None
    ) -> None:
        super().__init__(source)
        self.nodes: list[Node] = []
        # iteration id -> index of the child currently being visited
        self._indexes: dict[int, int] = {}
        if nodes:
            self.append(*nodes)

    @property
    def first(self) -> Node | None:
        return self.nodes[0] if self.nodes else None

    @property
    def last(self) -> Node | None:
        return self.nodes[-1] if self.nodes else None

    def index(self, child: Node) -> int:
        for i, node in enumerate(self.nodes):
            if node is child:
                return i
        raise ValueError(f"{child.type} node is not a child of this {self.type}")

    # ---- insertion / removal ----

    def _adopt(self, nodes: tuple[Node, ...]) -> list[Node]:
        adopted = []
        for node in nodes:
            if node is self or (isinstance(node, Container) and _contains(node, self)):
                raise ValueError("Cannot insert a node into its own subtree")
            node.remove()
            node.parent = self
            if node.source is None:
                node.source = self.source
            adopted.append(node)
        return adopted

    def append(self, *nodes: Node) -> "Container":
        self.nodes.extend(self._adopt(nodes))
        return self

    def prepend(self, *nodes: Node) -> "Container":
        adopted = self._adopt(nodes)
        self.nodes[0:0] = adopted
        for key in self._indexes:
            self._indexes[key] += len(adopted)
        return self

    def insert_before(self, existing: Node, *nodes: Node) -> "Container":
        adopted = self._adopt(nodes)
        index = self.index(existing)
        self.nodes[index:index] = adopted
        for key, cursor in self._indexes.items():
            if cursor >= index:
                self._indexes[key] = cursor + len(adopted)
        return self

    def insert_after(self, existing: Node, *nodes: Node) -> "Container":
        adopted = self._adopt(nodes)
        index = self.index(existing)
        self.nodes[index + 1:index + 1] = adopted
        for key, cursor in self._indexes.items():
            if cursor > index:
                self._indexes[key] = cursor + len(adopted)
        return self

    def remove_child(self, child: Node) -> "Container":
        index = self.index(child)
        del self.nodes[index]
        child.parent = None
        for key, cursor in self._indexes.items():
            if cursor >= index:
                self._indexes[key] = cursor - 1
        return self

    # ---- iteration ----

    def each(self, callback: Visitor) -> bool:
        """Call *callback* for each direct child; safe against mutation.

        Returns False if the callback stopped the iteration.
        """
        iterator_id = next(self._iterator_ids)
        self._indexes[iterator_id] = 0
        try:
            while self._indexes[iterator_id] < len(self.nodes):
                child = self.nodes[self._indexes[iterator_id]]
                if callback(child) is STOP:
                    return False
                self._indexes[iterator_id] += 1
        finally:
            del self._indexes[iterator_id]
        return True

    def walk(self, callback: Visitor) -> bool:
        """Depth-first walk over every descendant."""

        def visit(child: Node) -> bool | None:
            if callback(child) is STOP:
                return STOP
            if isinstance(child, Container) and not child.walk(callback):
                return STOP
            return None

        return self.each(visit)

    def walk_decls(
        self, callback: Callable[[Declaration], "bool | None"], prop: str | None = None
    ) -> bool:
        def visit(node: Node) -> bool | None:
            if isinstance(node, Declaration) and (prop is None or node.prop == prop):
                return callback(node)
            return None

        return self.walk(visit)

    def walk_rules(self, callback: Callable[["Rule"], "bool | None"]) -> bool:
        def visit(node: Node) -> bool | None:
            if isinstance(node, Rule):
                return callback(node)
            return None

        return self.walk(visit)

    def walk_at_rules(
        self, callback: Callable[["AtRule"], "bool | None"], name: str | None = None
    ) -> bool:
        def visit(node: Node) -> bool | None:
            if isinstance(node, AtRule) and (name is None or node.name == name):
                return callback(node)
            return None

        return self.walk(visit)

    def iter_decls(self) -> Iterator[Declaration]:
        """Yield the declarations that are direct children of this node."""
        for node in self.nodes:
            if isinstance(node, Declaration):
                yield node

    def _copy_children_into(self, target: "Container") -> None:
        target.append(*(child._copy() for child in self.nodes))

    def _block(self, depth: int) -> str:
        if not self.nodes:
            return "{}"
        body = "\n".join(child.to_css(depth + 1) for child in self.nodes)
        return "{\n" + body + "\n" + INDENT * depth + "}"


def _contains(container: Container, node: Node) -> bool:
    parent = node.parent
    while parent is not None:
        if parent is container:
            return True
        parent = parent.parent
    return False


class Rule(Container):
    """A qualified rule: a selector list and its declarations."""

    type = "rule"

    def __init__(
        self,
        selector: str,
        nodes: list[Node] | None = None,
        source: str | None = None,
    ) -> None:
        self.selector = selector
        super().__init__(nodes, source)

    @property
    def selectors(self) -> list[str]:
        """The comma-separated selector list, split and stripped."""
        return [part.strip() for part in split_top_level(self.selector) if part.strip()]

    def _copy(self) -> "Rule":
        cloned = Rule(self.selector, source=self.source)
        self._copy_children_into(cloned)
        return cloned

    def to_css(self, depth: int = 0) -> str:
        return f"{INDENT * depth}{self.selector} {self._block(depth)}"

    def __repr__(self) -> str:
        return f"Rule({self.selector!r}, {len(self.nodes)} nodes)"


class AtRule(Container):
    """An at-rule such as ``@media`` or ``@container``.

    ``has_block`` is False for statement at-rules like ``@import url(x);``.
    """

    type = "atrule"

    def __init__(
        self,
        name: str,
        params: str = "",
        nodes: list[Node] | None = None,
        has_block: bool = True,
        source: str | None = None,
    ) -> None:
        self.name = name
        self.params = params
        self.has_block = has_block
        super().__init__(nodes, source)

    def _copy(self) -> "AtRule":
        cloned = AtRule(self.name, self.params, has_block=self.has_block, source=self.source)
        self._copy_children_into(cloned)
        return cloned

    def to_css(self, depth: int = 0) -> str:
        head = f"{INDENT * depth}@{self.name}"
        if self.params:
            head += f" {self.params}"
        if not self.has_block:
            return head + ";"
        return f"{head} {self._block(depth)}"

    def __repr__(self) -> str:
        return f"AtRule({self.name!r}, {self.params!r}, {len(self.nodes)} nodes)"


class Root(Container):
    """The stylesheet: top-level rules, at-rules and comments in order."""

    type = "root"

    def _copy(self) -> "Root":
        cloned = Root(source=self.source)
        self._copy_children_into(cloned)
        return cloned

    def to_css(self, depth: int = 0) -> str:
        return "\n".join(child.to_css(depth) for child in self.nodes)

    def __repr__(self) -> str:
        return f"Root({len(self.nodes)} nodes, source={self.source!r})"
