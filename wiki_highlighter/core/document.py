"""Content tree with DOM-style boundary points, ranges and selection.

WHY: The client view needs to replace exactly the text the user highlighted,
anchored to its structural position, not just its string value. A string
search would hit the wrong occurrence and would not know about previously
inserted spans. This module gives the view the same primitives a browser
page uses: nodes, boundary points, ranges and a selection.

HOW: Two node kinds form the tree:
  Text     a run of characters (leaf)
  Element  a tagged node with attributes, inline style and children
A BoundaryPoint is (node, offset): a character offset inside a Text, a child
index inside an Element. Boundary points are ordered by tree order using a
tuple key (child-index path of the node, then the offset), which gives the
same answers as the DOM "compare boundary points" algorithm. Range and
Selection are built on top of that ordering.

RULES:
- Node equality is identity; the same node is never in two places
- Offsets larger than the node length raise IndexSizeError
- delete_contents() removes fully contained nodes, truncates partially
  selected Text nodes and keeps partially contained Elements
- insert_node() splits a Text start container and inserts before the split
- Ranges are not live: callers that mutate the tree re-derive their ranges
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Iterator


class IndexSizeError(IndexError):
    """Raised when a boundary offset exceeds the node's length."""


class HierarchyError(ValueError):
    """Raised when a tree edit would make a node its own ancestor, or when
    two boundary points belong to different trees."""


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


class Node:
    """Base class for tree nodes."""

    def __init__(self) -> None:
        self.parent: Element | None = None

    @property
    def length(self) -> int:
        raise NotImplementedError

    @property
    def text_content(self) -> str:
        raise NotImplementedError

    @property
    def index(self) -> int:
        """Position of this node among its parent's children."""
        if self.parent is None:
            return 0
        for i, child in enumerate(self.parent.children):
            if child is self:
                return i
        raise HierarchyError("node is not among its parent's children")

    def root(self) -> Node:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def path(self) -> tuple[int, ...]:
        """Child-index path from the root down to this node."""
        indices = []
        node = self
        while node.parent is not None:
            indices.append(node.index)
            node = node.parent
        return tuple(reversed(indices))

    def contains(self, other: Node | None) -> bool:
        """True if ``other`` is this node or one of its descendants."""
        node = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def to_html(self) -> str:
        raise NotImplementedError


class Text(Node):
    """A run of characters."""

    def __init__(self, data: str = "") -> None:
        super().__init__()
        self.data = data

    def __repr__(self) -> str:
        return "Text({!r})".format(self.data)

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def text_content(self) -> str:
        return self.data

    def split(self, offset: int) -> Text:
        """Split at ``offset``; this node keeps the head, the returned sibling
        holds the tail and is inserted right after this node."""
        if offset > self.length:
            raise IndexSizeError("offset {} exceeds text length {}".format(offset, self.length))
        tail = Text(self.data[offset:])
        self.data = self.data[:offset]
        if self.parent is not None:
            self.parent.insert_child(self.index + 1, tail)
        return tail

    def to_html(self) -> str:
        return html.escape(self.data, quote=False)


class Element(Node):
    """A tagged node with attributes, inline style and children.

    ``attrs`` holds plain attributes (id, class, ...); ``style`` holds inline
    CSS properties and is rendered into the ``style`` attribute.
    """

    def __init__(
        self,
        tag: str,
        children: list[Node] | None = None,
        attrs: dict[str, str] | None = None,
        style: dict[str, str] | None = None,
    ) -> None:
        super().__init__()
        self.tag = tag
        self.attrs: dict[str, str] = dict(attrs or {})
        self.style: dict[str, str] = dict(style or {})
        self.children: list[Node] = []
        for child in children or []:
            self.append_child(child)

    def __repr__(self) -> str:
        return "Element({!r}, {!r})".format(self.tag, self.children)

    @property
    def length(self) -> int:
        return len(self.children)

    @property
    def text_content(self) -> str:
        return "".join(c.text_content for c in self.children)

    def set_text(self, text: str) -> None:
        """Replace all children with a single Text node (DOM textContent=)."""
        for child in self.children:
            child.parent = None
        self.children = []
        if text:
            self.append_child(Text(text))

    def insert_child(self, index: int, node: Node) -> Node:
        if node.contains(self):
            raise HierarchyError("cannot insert a node into its own subtree")
        if node.parent is not None:
            old_parent = node.parent
            old_index = node.index
            old_parent.remove_child(node)
            if old_parent is self and old_index < index:
                index -= 1
        if index > len(self.children):
            raise IndexSizeError("index {} exceeds child count {}".format(index, len(self.children)))
        self.children.insert(index, node)
        node.parent = self
        return node

    def append_child(self, node: Node) -> Node:
        return self.insert_child(len(self.children), node)

    def remove_child(self, node: Node) -> Node:
        del self.children[node.index]
        node.parent = None
        return node

    def iter_descendants(self) -> Iterator[Node]:
        """Yield all descendants in tree order."""
        for child in self.children:
            yield child
            if isinstance(child, Element):
                yield from child.iter_descendants()

    def iter_text(self) -> Iterator[Text]:
        for node in self.iter_descendants():
            if isinstance(node, Text):
                yield node

    def get_element_by_id(self, element_id: str) -> Element | None:
        for node in self.iter_descendants():
            if isinstance(node, Element) and node.attrs.get("id") == element_id:
                return node
        return None

    def to_html(self) -> str:
        attrs = dict(self.attrs)
        if self.style:
            attrs["style"] = "; ".join("{}: {}".format(k, v) for k, v in self.style.items())
        rendered = "".join(
            ' {}="{}"'.format(k, html.escape(v, quote=True)) for k, v in attrs.items()
        )
        inner = "".join(c.to_html() for c in self.children)
        return "<{tag}{attrs}>{inner}</{tag}>".format(tag=self.tag, attrs=rendered, inner=inner)


# ---------------------------------------------------------------------------
# Boundary points and ranges
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class BoundaryPoint:
    """A position in the tree: a character offset in a Text node, or a
    child index in an Element."""

    node: Node
    offset: int

    def key(self) -> tuple[int, ...]:
        # (parent, i) sorts before anything inside child i and
        # (parent, i + 1) after it, which is DOM tree order.
        return self.node.path() + (self.offset,)

    def compare(self, other: BoundaryPoint) -> int:
        """-1, 0 or 1 as this point is before, equal to or after ``other``."""
        if self.node.root() is not other.node.root():
            raise HierarchyError("boundary points are in different trees")
        a, b = self.key(), other.key()
        return (a > b) - (a < b)


def _check_offset(node: Node, offset: int) -> None:
    if offset < 0 or offset > node.length:
        raise IndexSizeError(
            "offset {} is outside 0..{} for {!r}".format(offset, node.length, node)
        )


class Range:
    """A contiguous region of the tree between two boundary points."""

    START_TO_START = 0
    START_TO_END = 1
    END_TO_END = 2
    END_TO_START = 3

    def __init__(self, node: Node, offset: int = 0) -> None:
        _check_offset(node, offset)
        self.start = BoundaryPoint(node, offset)
        self.end = self.start

    def __repr__(self) -> str:
        return "Range({!r}:{} -> {!r}:{})".format(
            self.start.node, self.start.offset, self.end.node, self.end.offset
        )

    @classmethod
    def around_contents(cls, node: Node) -> Range:
        """A new range spanning all of ``node``'s content."""
        rng = cls(node, 0)
        rng.select_node_contents(node)
        return rng

    @property
    def start_container(self) -> Node:
        return self.start.node

    @property
    def start_offset(self) -> int:
        return self.start.offset

    @property
    def end_container(self) -> Node:
        return self.end.node

    @property
    def end_offset(self) -> int:
        return self.end.offset

    @property
    def collapsed(self) -> bool:
        return self.start.node is self.end.node and self.start.offset == self.end.offset

    def clone(self) -> Range:
        copy = Range(self.start.node, self.start.offset)
        copy.end = self.end
        return copy

    def set_start(self, node: Node, offset: int) -> None:
        _check_offset(node, offset)
        point = BoundaryPoint(node, offset)
        if node.root() is not self.end.node.root() or point.compare(self.end) > 0:
            self.end = point
        self.start = point

    def set_end(self, node: Node, offset: int) -> None:
        _check_offset(node, offset)
        point = BoundaryPoint(node, offset)
        if node.root() is not self.start.node.root() or point.compare(self.start) < 0:
            self.start = point
        self.end = point

    def select_node_contents(self, node: Node) -> None:
        self.start = BoundaryPoint(node, 0)
        self.end = BoundaryPoint(node, node.length)

    def collapse(self, to_start: bool = False) -> None:
        if to_start:
            self.end = self.start
        else:
            self.start = self.end

    def compare_boundary_points(self, how: int, source: Range) -> int:
        """Compare one of this range's points with one of ``source``'s.

        START_TO_START compares the starts, END_TO_END the ends,
        START_TO_END this end with source start, END_TO_START this start
        with source end.
        """
        if how == Range.START_TO_START:
            return self.start.compare(source.start)
        if how == Range.START_TO_END:
            return self.end.compare(source.start)
        if how == Range.END_TO_END:
            return self.end.compare(source.end)
        if how == Range.END_TO_START:
            return self.start.compare(source.end)
        raise ValueError("unknown comparison {!r}".format(how))

    def to_string(self) -> str:
        """The characters of all Text nodes inside the range, in order."""
        root = self.start.node.root()
        if self.collapsed:
            return ""
        if isinstance(self.start.node, Text) and self.start.node is self.end.node:
            return self.start.node.data[self.start.offset:self.end.offset]
        if not isinstance(root, Element):
            return ""

        start_key, end_key = self.start.key(), self.end.key()
        parts = []
        for text in root.iter_text():
            lo = self.start.offset if text is self.start.node else 0
            hi = self.end.offset if text is self.end.node else text.length
            if lo >= hi:
                continue
            if BoundaryPoint(text, lo).key() >= start_key and BoundaryPoint(text, hi).key() <= end_key:
                parts.append(text.data[lo:hi])
        return "".join(parts)

    def delete_contents(self) -> None:
        """Remove everything inside the range and collapse it.

        The range collapses onto the point where the removed content used
        to start: the start point itself when the start container encloses
        the end container, otherwise the point just after the highest
        ancestor of the start container that does not enclose the end.
        """
        if self.collapsed:
            return

        start, end = self.start, self.end
        if start.node.contains(end.node):
            new_point = start
        else:
            ref = start.node
            while ref.parent is not None and not ref.parent.contains(end.node):
                ref = ref.parent
            if ref.parent is None:
                raise HierarchyError("range ends are not in the same tree")
            new_point = BoundaryPoint(ref.parent, ref.index + 1)

        if isinstance(start.node, Text) and start.node is end.node:
            text = start.node
            text.data = text.data[:start.offset] + text.data[end.offset:]
        else:
            root = start.node.root()
            if isinstance(root, Element):
                _prune(root, root.path(), start, end)

        self.start = self.end = new_point

    def insert_node(self, node: Node) -> None:
        """Insert ``node`` at the start of the range.

        A Text start container is split at the start offset and the node
        goes between the two halves. A collapsed range grows to span the
        inserted node.
        """
        container = self.start.node
        if node.contains(container):
            raise HierarchyError("cannot insert a node at a point inside itself")

        if isinstance(container, Text):
            parent = container.parent
            if parent is None:
                raise HierarchyError("cannot insert next to a detached text node")
            reference = container.split(self.start.offset)
            parent.insert_child(reference.index, node)
        elif isinstance(container, Element):
            parent = container
            parent.insert_child(self.start.offset, node)
        else:
            raise HierarchyError("unsupported start container {!r}".format(container))

        if self.collapsed:
            self.end = BoundaryPoint(parent, node.index + 1)


def _prune(element: Element, base: tuple[int, ...], start: BoundaryPoint, end: BoundaryPoint) -> None:
    """Remove the part of ``element``'s subtree that lies between two points.

    Children are visited right to left so removals never shift the index
    of a child that is still to be visited.
    """
    start_key, end_key = start.key(), end.key()
    for i in reversed(range(len(element.children))):
        child = element.children[i]
        before = base + (i,)
        after = base + (i + 1,)
        if after <= start_key or before >= end_key:
            continue
        if before >= start_key and after <= end_key:
            element.remove_child(child)
        elif isinstance(child, Text):
            lo = start.offset if child is start.node else 0
            hi = end.offset if child is end.node else child.length
            child.data = child.data[:lo] + child.data[hi:]
        elif isinstance(child, Element):
            _prune(child, before, start, end)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class Selection:
    """The user's live selection: zero or one range plus a direction.

    ``anchor`` is where the user started dragging, ``focus`` where they
    stopped; a backward selection has the focus before the anchor.
    """

    def __init__(self) -> None:
        self._ranges: list[Range] = []
        self._backward = False

    @property
    def range_count(self) -> int:
        return len(self._ranges)

    def get_range_at(self, index: int) -> Range:
        if index < 0 or index >= len(self._ranges):
            raise IndexSizeError("selection has {} range(s)".format(len(self._ranges)))
        return self._ranges[index]

    def add_range(self, rng: Range) -> None:
        # A selection holds at most one range, as in every current browser
        if not self._ranges:
            self._ranges.append(rng)
            self._backward = False

    def remove_all_ranges(self) -> None:
        self._ranges = []
        self._backward = False

    @property
    def is_collapsed(self) -> bool:
        return not self._ranges or self._ranges[0].collapsed

    @property
    def anchor_node(self) -> Node | None:
        if not self._ranges:
            return None
        rng = self._ranges[0]
        return rng.end.node if self._backward else rng.start.node

    @property
    def anchor_offset(self) -> int:
        if not self._ranges:
            return 0
        rng = self._ranges[0]
        return rng.end.offset if self._backward else rng.start.offset

    @property
    def focus_node(self) -> Node | None:
        if not self._ranges:
            return None
        rng = self._ranges[0]
        return rng.start.node if self._backward else rng.end.node

    @property
    def focus_offset(self) -> int:
        if not self._ranges:
            return 0
        rng = self._ranges[0]
        return rng.start.offset if self._backward else rng.end.offset

    def set_base_and_extent(
        self, anchor_node: Node, anchor_offset: int, focus_node: Node, focus_offset: int
    ) -> None:
        """Select from an anchor point to a focus point in either direction."""
        anchor = BoundaryPoint(anchor_node, anchor_offset)
        focus = BoundaryPoint(focus_node, focus_offset)
        _check_offset(anchor_node, anchor_offset)
        _check_offset(focus_node, focus_offset)
        backward = focus.compare(anchor) < 0
        first, last = (focus, anchor) if backward else (anchor, focus)

        rng = Range(first.node, first.offset)
        rng.set_end(last.node, last.offset)
        self._ranges = [rng]
        self._backward = backward

    def select_text(self, container: Element, start: int, end: int) -> None:
        """Select characters ``start..end`` of ``container``'s text content."""
        first = point_at_offset(container, start, prefer_next=True)
        last = point_at_offset(container, end, prefer_next=False)
        self.set_base_and_extent(first.node, first.offset, last.node, last.offset)

    def to_string(self) -> str:
        return "".join(r.to_string() for r in self._ranges)


def point_at_offset(container: Element, offset: int, prefer_next: bool = False) -> BoundaryPoint:
    """Map a character offset in ``container``'s text to a boundary point.

    An offset on the seam between two Text nodes resolves to the start of
    the next node when ``prefer_next`` is set, else the end of the previous.
    """
    if offset < 0 or offset > len(container.text_content):
        raise IndexSizeError(
            "offset {} is outside 0..{}".format(offset, len(container.text_content))
        )

    seen = 0
    last_text = None
    for text in container.iter_text():
        last_text = text
        upper = seen + text.length
        if offset < upper or (offset == upper and not prefer_next):
            return BoundaryPoint(text, offset - seen)
        seen = upper

    if last_text is not None:
        return BoundaryPoint(last_text, last_text.length)
    return BoundaryPoint(container, 0)
