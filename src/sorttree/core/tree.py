"""
Decision tree nodes produced by the analyzer.

A tree is made of two node variants, tagged by `NodeKind`:

- `ComparisonNode`: one comparison made by the routine under test. `left` is
  the subtree taken when the comparison answered True, `right` when it answered
  False. After a complete search, a `None` child is a pruned branch (its
  outcome contradicts facts already established on the path).
- `ResultNode`: a leaf holding the final order of the items on that path.

Consumers treat the returned tree as read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .comparison import Comparison

__all__ = [
    "NodeKind",
    "DecisionTreeNode",
    "ComparisonNode",
    "ResultNode",
    "iter_nodes",
    "tree_to_dict",
    "tree_signature",
]


class NodeKind(Enum):
    COMPARISON = "comparison"
    RESULT = "result"


class DecisionTreeNode:
    """Common base of the two node variants."""

    kind: NodeKind

    @property
    def is_comparison(self) -> bool:
        return self.kind is NodeKind.COMPARISON

    @property
    def is_result(self) -> bool:
        return self.kind is NodeKind.RESULT

    def children(self) -> Tuple[Optional["DecisionTreeNode"], ...]:
        return ()


@dataclass(eq=False)
class ComparisonNode(DecisionTreeNode):
    comparison: Comparison
    left: Optional[DecisionTreeNode] = None
    right: Optional[DecisionTreeNode] = None
    # Position of the live frame on the path stack, None once no frame holds it.
    active_depth: Optional[int] = field(default=None, repr=False)

    kind = NodeKind.COMPARISON

    def children(self) -> Tuple[Optional[DecisionTreeNode], Optional[DecisionTreeNode]]:
        return (self.left, self.right)

    def set_child(self, outcome: bool, child: DecisionTreeNode) -> None:
        """Attach `child` on the True (left) or False (right) branch."""
        if outcome:
            self.left = child
        else:
            self.right = child

    def __str__(self) -> str:
        return str(self.comparison)


@dataclass(eq=False)
class ResultNode(DecisionTreeNode):
    order: Tuple[str, ...]

    kind = NodeKind.RESULT

    def __str__(self) -> str:
        return "[" + ", ".join(self.order) + "]"


def iter_nodes(tree: Optional[DecisionTreeNode]) -> Iterator[DecisionTreeNode]:
    """Yield every node of `tree` in pre-order (node, True branch, False branch)."""
    stack: List[Optional[DecisionTreeNode]] = [tree]
    while stack:
        node = stack.pop()
        if node is None:
            continue
        yield node
        # Push right first so the True branch comes out first
        for child in reversed(node.children()):
            stack.append(child)


def tree_to_dict(tree: Optional[DecisionTreeNode]) -> Optional[Dict[str, Any]]:
    """
    Export a tree as nested plain dicts (JSON-ready).

    Comparison nodes become ``{"type": "comparison", "text": "A > B",
    "true": {...}, "false": {...}}`` with pruned branches as ``None``; leaves
    become ``{"type": "result", "text": "[A, B]", "order": ["A", "B"]}``.
    """
    if tree is None:
        return None
    if isinstance(tree, ResultNode):
        return {"type": NodeKind.RESULT.value, "text": str(tree), "order": list(tree.order)}
    if isinstance(tree, ComparisonNode):
        return {
            "type": NodeKind.COMPARISON.value,
            "text": str(tree),
            "true": tree_to_dict(tree.left),
            "false": tree_to_dict(tree.right),
        }
    raise TypeError(f"Not a decision tree node: {tree!r}")


def tree_signature(tree: Optional[DecisionTreeNode]) -> Any:
    """Hashable structural form of a tree; equal for structurally identical trees."""
    if tree is None:
        return None
    if isinstance(tree, ResultNode):
        return ("result", tree.order)
    return ("comparison", str(tree), tree_signature(tree.left), tree_signature(tree.right))
