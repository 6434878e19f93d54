"""
Search engine: builds the decision tree of a comparison sort.

The routine under test is treated as a black box. It is run over a list of
`SortableItem`s whose comparisons call back into `AlgorithmAnalyzer.compare`,
which chooses every outcome. Each run of the routine walks one root-to-leaf
path of the decision tree; the analyzer then backtracks to the most recent
comparison answered True, answers it False instead, and runs the routine again
from scratch. The already-validated prefix is reproduced by replaying its
outcomes by position (state restoration), so the routine never has to be
suspended mid-execution.

Outcomes that contradict facts already established on the path are never
chosen, which prunes impossible branches. True is always tried before False,
so the traversal order and the resulting tree are deterministic.

Public API (stable):
    OperationMode
    SortingRoutine
    AlgorithmAnalyzer(algorithm, array_size, *, initial_order=None)
        .analyze() -> DecisionTreeNode
        .compare(comparison) -> bool
    analyze(algorithm, array_size, *, initial_order=None) -> DecisionTreeNode

Conventions:
- The routine must be deterministic: given the same outcomes for its first k
  comparisons it must make the same (k+1)-th comparison. Replay checks each
  replayed comparison against the recorded one and raises NondeterminismError
  on divergence.
- Array sizes 0 and 1 make no comparisons; the tree is then a single ResultNode.
"""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Any, Callable, Deque, List, Optional, Sequence

from .comparison import Comparison
from .errors import ContradictionError, NondeterminismError
from .operand import SortableItem, generate_sequential_items
from .path import DecisionFrame, PathStack
from .tree import DecisionTreeNode, ResultNode

__all__ = ["OperationMode", "SortingRoutine", "AlgorithmAnalyzer", "analyze"]

logger = logging.getLogger(__name__)

SortingRoutine = Callable[[List[SortableItem]], Any]


class OperationMode(Enum):
    EXPLORATORY = "exploratory"
    STATE_RESTORATION = "state_restoration"


class AlgorithmAnalyzer:
    """
    Exhaustive decision-tree explorer for one routine and one array size.

    Parameters
    ----------
    algorithm : Callable[[list[SortableItem]], Any]
        The routine under test. Reorders the list in place using only
        ``<``, ``>``, ``==`` and ``!=`` between items. Its return value is ignored.
    array_size : int
        Number of distinct items to sort. Must be >= 0.
    initial_order : sequence of int, optional
        Permutation of ``range(array_size)`` fixing which label starts at each
        position. Defaults to A, B, C, ...
    """

    def __init__(
        self,
        algorithm: SortingRoutine,
        array_size: int,
        *,
        initial_order: Optional[Sequence[int]] = None,
    ) -> None:
        if not callable(algorithm):
            raise ValueError("algorithm must be callable")
        if not isinstance(array_size, int) or isinstance(array_size, bool):
            raise ValueError("array_size must be an int")
        if array_size < 0:
            raise ValueError("array_size must be nonnegative")
        if initial_order is not None and len(initial_order) != array_size:
            raise ValueError(
                f"initial_order has {len(initial_order)} entries; expected {array_size}"
            )

        self.algorithm = algorithm
        self.array_size = array_size
        self.initial_order = list(initial_order) if initial_order is not None else None

        self.mode = OperationMode.EXPLORATORY
        self.path = PathStack()
        self.items: List[SortableItem] = []
        self._replay: Deque[DecisionFrame] = deque()

        self.paths_explored = 0
        self.comparisons_handled = 0

    # ------------------------- public ------------------------- #

    def analyze(self) -> DecisionTreeNode:
        """Run the routine down every consistent path and return the tree root."""
        self.mode = OperationMode.EXPLORATORY
        self.path = PathStack()
        self._replay = deque()
        self.paths_explored = 0
        self.comparisons_handled = 0
        self._reset_items()
        while True:
            self.algorithm(self.items)
            self.paths_explored += 1

            if self.mode is OperationMode.STATE_RESTORATION and self._replay:
                raise NondeterminismError(
                    f"Routine returned with {len(self._replay)} recorded comparison(s) "
                    "left to replay; it is not deterministic",
                    path=self.path.snapshot_outcomes(),
                )

            leaf = ResultNode(tuple(item.label for item in self.items))
            top = self.path.peek()
            if top is None:
                # No comparisons at all: the tree is this single leaf
                logger.debug("No comparisons made for n=%d", self.array_size)
                return leaf
            top.node.set_child(top.outcome, leaf)

            if not self._prepare_next_path():
                root_frame = self.path.pop()
                logger.debug(
                    "Search complete: %d path(s), %d comparison call(s)",
                    self.paths_explored,
                    self.comparisons_handled,
                )
                return root_frame.node

    def compare(self, comparison: Comparison) -> bool:
        """Comparison handler called by every instrumented item."""
        self.comparisons_handled += 1
        if self.mode is OperationMode.STATE_RESTORATION:
            return self._compare_restoring(comparison)
        return self._compare_exploring(comparison)

    # ------------------------- helpers ------------------------- #

    def _reset_items(self) -> None:
        self.items = generate_sequential_items(self.array_size, self.compare, self.initial_order)

    def _try_push(self, comparison: Comparison, outcome: bool) -> bool:
        frame = DecisionFrame.new(comparison, outcome)
        if self.path.is_consistent(frame):
            self.path.push(frame)
            return True
        frame.discard()
        return False

    def _compare_exploring(self, comparison: Comparison) -> bool:
        if self._try_push(comparison, True):
            return True
        if self._try_push(comparison, False):
            return False
        raise ContradictionError(
            f"Neither outcome of {comparison} is consistent with the current path; "
            "the routine is not a valid deterministic comparison sort",
            comparison=comparison,
            path=self.path.snapshot_outcomes(),
        )

    def _compare_restoring(self, comparison: Comparison) -> bool:
        if not self._replay:
            self.mode = OperationMode.EXPLORATORY
            return self._compare_exploring(comparison)
        recorded = self._replay.popleft()
        if recorded.comparison != comparison:
            raise NondeterminismError(
                f"Replay diverged: expected {recorded.comparison}, routine asked {comparison}",
                comparison=comparison,
                path=self.path.snapshot_outcomes(),
            )
        return recorded.outcome

    def _prepare_next_path(self) -> bool:
        """
        Backtrack to the next unexplored branch.

        Returns False when every branch has been explored; the root frame is
        then the only frame left on the stack.
        """
        while True:
            top = self.path.pop()
            if top is None:
                return False
            if top.outcome:
                flipped = top.flipped()
                if not self.path.is_consistent(flipped):
                    flipped.discard()
                    continue
                self.path.push(flipped)
                self._replay = deque(self.path.snapshot_frames())
                self.mode = OperationMode.STATE_RESTORATION
                self._reset_items()
                logger.debug(
                    "Backtracked to %s (depth %d)", flipped.comparison, len(self.path) - 1
                )
                return True
            if not self.path:
                # Both branches of the root are done; keep it to hand back the tree
                self.path.push(top)
                return False


def analyze(
    algorithm: SortingRoutine,
    array_size: int,
    *,
    initial_order: Optional[Sequence[int]] = None,
) -> DecisionTreeNode:
    """Build the decision tree of `algorithm` sorting `array_size` distinct items."""
    return AlgorithmAnalyzer(algorithm, array_size, initial_order=initial_order).analyze()
