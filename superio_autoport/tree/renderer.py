"""Device tree text rendering."""

from __future__ import annotations

from .nodes import Node

INDENT = "\t"


def render(root: Node) -> str:
    """Render a node and its subtree as device tree text."""
    return "".join(_render_subtree(root, ""))


def _format_line(node: Node, indent: str) -> str:
    """Format the single line opening a node."""
    line = f"{indent}{node.tag}{node.head()}{node.head_post()}"
    if node.comment:
        line += f" # {node.comment}"
    return line + "\n"


def _render_subtree(node: Node, indent: str) -> list[str]:
    """Recursively render a subtree, depth-first, children one level deeper."""
    lines = [_format_line(node, indent)]
    for child in node.children:
        lines.extend(_render_subtree(child, indent + INDENT))
    if node.enclosed:
        lines.append(f"{indent}end\n")
    return lines
