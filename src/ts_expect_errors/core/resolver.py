"""Locate the template node that should carry the marker for a diagnostic.

The lookup is a pure function of the tree and the position: children are
searched first and the deepest hit wins, except for two upward redirections.
A hit inside a branch condition goes to the owning conditional group, and an
attribute hit on an element wrapped by a branch or repeat goes to that
structural construct (when attribute forwarding is enabled). Nothing else
redirects to an ancestor.
"""

from ts_expect_errors.models import Location, NodeKind, SyntaxNode


def _at_or_before(line_a: int, column_a: int, line_b: int, column_b: int) -> bool:
    return line_a < line_b or (line_a == line_b and column_a <= column_b)


def within(location: Location, line: int, column: int) -> bool:
    """Lexicographic containment with both ends inclusive."""
    start, end = location.start, location.end
    return _at_or_before(start.line, start.column, line, column) and _at_or_before(line, column, end.line, end.column)


def _first_located_child(node: SyntaxNode) -> SyntaxNode | None:
    for child in node.children:
        if child.location is not None:
            return child
    return None


def in_attribute_region(element: SyntaxNode, line: int, column: int) -> bool:
    """Return True if the position lies in the element's start tag.

    The region runs from the element start up to (excluding) its first child.
    A childless element covers its whole span except the last line of a
    multi-line element, which only holds the closing bracket or tag.
    """
    location = element.location
    if location is None:
        return False
    start, end = location.start, location.end
    if not _at_or_before(start.line, start.column, line, column):
        return False

    first = _first_located_child(element)
    if first is not None and first.location is not None:
        boundary = first.location.start
        return line < boundary.line or (line == boundary.line and column < boundary.column)

    if start.line == end.line:
        return line == start.line and column < end.column
    return line < end.line


def _wrapped_element(node: SyntaxNode) -> SyntaxNode | None:
    """Return the element a branch or repeat directly controls, if any."""
    located = [child for child in node.children if child.location is not None]
    if len(located) != 1:
        return None
    child = located[0]
    if child.kind is NodeKind.ELEMENT:
        return child
    if child.kind is NodeKind.REPEAT and node.kind is NodeKind.CONDITIONAL_BRANCH:
        return _wrapped_element(child)
    return None


def _find(
    node: SyntaxNode,
    line: int,
    column: int,
    group: SyntaxNode | None,
    forward_attributes: bool,
) -> SyntaxNode | None:
    location = node.location
    if location is None:
        return None

    best: SyntaxNode | None = None

    if node.kind is NodeKind.CONDITIONAL_GROUP:
        for branch in node.branches:
            found = _find(branch, line, column, node, forward_attributes)
            if found is not None:
                best = found

    for child in node.children:
        found = _find(child, line, column, None, forward_attributes)
        if found is not None:
            best = found

    if node.content is not None:
        found = _find(node.content, line, column, None, forward_attributes)
        if found is not None:
            best = found

    if node.kind is NodeKind.CONDITIONAL_BRANCH:
        if node.condition is not None and within(node.condition, line, column):
            return group if group is not None else node
        wrapped = _wrapped_element(node)
        if wrapped is not None and in_attribute_region(wrapped, line, column):
            if not forward_attributes:
                return wrapped
            return group if group is not None else node

    if node.kind is NodeKind.REPEAT and forward_attributes:
        wrapped = _wrapped_element(node)
        if wrapped is not None and in_attribute_region(wrapped, line, column):
            return node

    if best is not None:
        return best

    if not location.start.line <= line <= location.end.line:
        return None
    if not within(location, line, column):
        return None

    if node.kind is NodeKind.ELEMENT and in_attribute_region(node, line, column):
        return node
    if node.kind is NodeKind.ROOT:
        return None
    return node


def resolve(
    tree: SyntaxNode,
    line: int,
    column: int,
    *,
    forward_attributes: bool = True,
) -> SyntaxNode | None:
    """Return the smallest node owning ``(line, column)``, or None.

    The root itself is never returned; a position that no node contains
    resolves to None and must be skipped by the caller.
    """
    return _find(tree, line, column, None, forward_attributes)
