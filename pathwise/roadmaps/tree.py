## Roadmap tree model and text parser
import logging
from typing import Iterator

from pydantic import BaseModel, Field

from pathwise.errors import FormatError, NotFound

log = logging.getLogger(__name__)

DEPTH_MARKER = "|"


class RoadmapNode(BaseModel):
    node_id: str = ""
    name: str = Field(min_length=1)
    children: list["RoadmapNode"] = Field(default_factory=list)
    description: str | None = None
    reference_link: str | None = None


RoadmapNode.model_rebuild()


def _depth_of(line: str, marker: str) -> int:
    """Length of the leading marker run; unmarked lines sit at depth 1."""
    stripped = line.lstrip()
    depth = len(stripped) - len(stripped.lstrip(marker))
    return depth or 1


def parse_roadmap(text: str, root_name: str, marker: str = DEPTH_MARKER) -> RoadmapNode:
    """
    Build a tree from marker-indented lines such as::

        | Basics
        || Variables
        | Control flow

    Each line hangs off the most recent node one level above it. Lines with
    no parent at that level are dropped. Raises FormatError when the text
    carries no marker at all.
    """
    if marker not in text:
        raise FormatError("Invalid roadmap format received. Please try again.")

    root = RoadmapNode(name=root_name)
    by_depth: dict[int, RoadmapNode] = {0: root}

    for line in text.strip().splitlines():
        name = line.replace(marker, "").strip()
        if not name:
            continue

        depth = _depth_of(line, marker)
        node = RoadmapNode(name=name)
        parent = by_depth.get(depth - 1)
        if parent is not None:
            parent.children.append(node)
        else:
            log.debug("Dropping line with no parent at depth %d: %r", depth, name)
        # An orphan still takes the slot, so its own children are dropped with it
        by_depth[depth] = node

    assign_node_ids(root)
    return root


def iter_nodes(root: RoadmapNode) -> Iterator[RoadmapNode]:
    """Pre-order walk, root first, children in learning order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def flatten(root: RoadmapNode) -> list[RoadmapNode]:
    return list(iter_nodes(root))


def count_nodes(root: RoadmapNode) -> int:
    return sum(1 for _ in iter_nodes(root))


def assign_node_ids(root: RoadmapNode) -> None:
    for i, node in enumerate(iter_nodes(root)):
        node.node_id = f"n{i}"


def find_node(root: RoadmapNode, node_id: str) -> RoadmapNode:
    for node in iter_nodes(root):
        if node.node_id == node_id:
            return node
    raise NotFound(f"Roadmap node {node_id} not found.")
