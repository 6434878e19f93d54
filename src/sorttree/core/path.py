"""
Path stack and truth set.

The path stack is the current depth-first search path, from the root of the
decision tree to the point of execution. Each `DecisionFrame` records one
comparison and the outcome chosen for it. The "truth" of a frame is the fact
that outcome establishes: the comparison itself if the outcome was True, its
negation otherwise.

The stack keeps a truth set equal to the truths of the frames it holds, and
links tree nodes together as frames are pushed; the tree is assembled as a
byproduct of the search.

Public API (stable):
    DecisionFrame(comparison, outcome, node)
    PathStack
        push(frame) / pop() -> DecisionFrame | None / peek()
        is_consistent(frame) -> bool
        snapshot_outcomes() -> list[bool]
        snapshot_frames() -> list[DecisionFrame]
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import FrozenSet, List, Optional

from .comparison import Comparison
from .tree import ComparisonNode

__all__ = ["DecisionFrame", "PathStack"]


@dataclass
class DecisionFrame:
    comparison: Comparison
    outcome: bool
    node: Optional[ComparisonNode]

    @classmethod
    def new(cls, comparison: Comparison, outcome: bool) -> "DecisionFrame":
        """Create a frame together with a fresh tree node for it."""
        return cls(comparison, outcome, ComparisonNode(comparison))

    def truth(self) -> Comparison:
        return self.comparison if self.outcome else self.comparison.negate()

    def flipped(self) -> "DecisionFrame":
        """Same comparison and tree node, opposite outcome."""
        return DecisionFrame(self.comparison, not self.outcome, self.node)

    def discard(self) -> None:
        """Drop the reference to the tree node; the frame is no longer usable."""
        self.node = None


class PathStack:
    def __init__(self) -> None:
        self._frames: List[DecisionFrame] = []
        # Multiset: the same fact can be established by more than one frame
        self._truths: Counter = Counter()

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)

    @property
    def truths(self) -> FrozenSet[Comparison]:
        """Facts currently established on the path."""
        return frozenset(self._truths)

    def peek(self) -> Optional[DecisionFrame]:
        return self._frames[-1] if self._frames else None

    def push(self, frame: DecisionFrame) -> None:
        """
        Push `frame`, record its truth and hang its node under the previous top.

        The new node becomes the True (left) child of the previous top's node
        if that frame's outcome was True, otherwise its False (right) child.
        On an empty stack the node is the root and is not linked to anything.
        """
        if frame.node is None:
            raise ValueError("Cannot push a discarded frame")
        previous = self.peek()
        self._frames.append(frame)
        self._truths[frame.truth()] += 1
        frame.node.active_depth = len(self._frames) - 1
        if previous is not None and previous.node is not None:
            previous.node.set_child(previous.outcome, frame.node)

    def pop(self) -> Optional[DecisionFrame]:
        if not self._frames:
            return None
        frame = self._frames.pop()
        truth = frame.truth()
        self._truths[truth] -= 1
        if self._truths[truth] <= 0:
            del self._truths[truth]
        if frame.node is not None:
            frame.node.active_depth = None
        return frame

    def is_consistent(self, frame: DecisionFrame) -> bool:
        """True iff the opposite of the frame's truth is not already established."""
        return frame.truth().negate() not in self._truths

    def snapshot_outcomes(self) -> List[bool]:
        return [f.outcome for f in self._frames]

    def snapshot_frames(self) -> List[DecisionFrame]:
        return list(self._frames)
