"""Tree growth under one of three budget policies.

All policies share the same loop: take a frontier node, split its dataset,
create both children, and put interior children back on the frontier. They
differ in how the frontier is ordered and when growth stops:

- :class:`AlphaLimitedGrowth`: LIFO stack, grows until every node is a leaf
  by the weight/variance rule with ``limit = floor(alpha * n)``.
- :class:`DepthLimitedGrowth`: FIFO queue, nodes at ``max_depth`` are forced
  leaves.
- :class:`LeafLimitedGrowth`: best-first on the potential score, stops once
  the leaf budget is reached and turns the remaining frontier into leaves.
"""
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Optional, Union
import heapq
import itertools
import logging
import math

from .attributes import Instances
from .config import GrowthConfig, GrowthMode
from .dataset import Dataset
from .factory import NodeResult, create_node, dataset_stats
from .rng import Random, check_random
from .tree import RegressionTree, RegressionTreeLeaf, RegressionTreeNode

logger = logging.getLogger(__name__)

# minimum node weight for depth- and leaf-limited growth
DEFAULT_LIMIT = 5


@dataclass
class FrontierNode:
    node: RegressionTreeNode
    dataset: Optional[Dataset]
    depth: int
    prediction: float
    potential: Optional[float] = None


class GrowthStrategy:
    """Base class for the growth policies.

    Subclasses provide the frontier discipline (:meth:`push`,
    :meth:`select_next`, ``__len__``) and may override :meth:`classify`,
    :meth:`should_stop` and :meth:`on_leaf`.
    """

    name = "base"

    def __init__(self, rng: Random, limit: float = DEFAULT_LIMIT):
        self.rng = rng
        self.limit = limit

    # -- frontier --

    def push(self, item: FrontierNode) -> None:
        raise NotImplementedError

    def select_next(self) -> FrontierNode:
        raise NotImplementedError

    def pending(self):
        """Remaining frontier items in selection order (drains the frontier)."""
        while len(self):
            yield self.select_next()

    def __len__(self) -> int:
        raise NotImplementedError

    # -- policy hooks --

    def classify(self, dataset: Dataset, depth: int) -> NodeResult:
        return create_node(dataset, self.limit, self.rng)

    def should_stop(self) -> bool:
        return False

    def on_leaf(self, depth: int) -> None:
        pass

    # -- driver --

    def build(self, instances: Instances) -> RegressionTree:
        tree = RegressionTree()
        dataset = Dataset.create(instances)
        result = self.classify(dataset, 1)
        tree.root = result.node
        self._enqueue(result, dataset, 1)

        n_expanded = 0
        while len(self) and not self.should_stop():
            item = self.select_next()
            node = item.node
            left, right = item.dataset.split(node)
            item.dataset = None
            logger.debug("%s: expand depth=%d attribute=%d split=%r (%d | %d)",
                         self.name, item.depth, node.attribute_index, node.split_point,
                         len(left), len(right))
            for side, child_data in (("left", left), ("right", right)):
                child = self.classify(child_data, item.depth + 1)
                setattr(node, side, child.node)
                self._enqueue(child, child_data, item.depth + 1)
            n_expanded += 1

        self.finalize(tree)
        logger.info("%s: built tree with %d leaves after %d expansions (limit=%r)",
                    self.name, tree.n_leaves, n_expanded, self.limit)
        return tree

    def _enqueue(self, result: NodeResult, dataset: Dataset, depth: int) -> None:
        if result.node.is_leaf:
            self.on_leaf(depth)
            return
        self.push(FrontierNode(result.node, dataset, depth,
                               result.stats.weighted_mean, result.potential))

    def finalize(self, tree: RegressionTree) -> None:
        """Turn frontier nodes that were never expanded into leaves."""
        if not len(self):
            return
        parents = tree.parent_map()
        for item in self.pending():
            tree.replace(item.node, RegressionTreeLeaf(item.prediction), parents)


class AlphaLimitedGrowth(GrowthStrategy):
    name = "alpha-limited"

    def __init__(self, rng: Random, alpha: float, n_instances: int):
        super().__init__(rng, limit=math.floor(alpha * n_instances))
        self.alpha = alpha
        self._stack = []

    def push(self, item):
        self._stack.append(item)

    def select_next(self):
        return self._stack.pop()

    def __len__(self):
        return len(self._stack)


class DepthLimitedGrowth(GrowthStrategy):
    name = "depth-limited"

    def __init__(self, rng: Random, max_depth: int, limit: float = DEFAULT_LIMIT):
        super().__init__(rng, limit=limit)
        self.max_depth = int(max_depth)
        self._queue = deque()

    def push(self, item):
        self._queue.append(item)

    def select_next(self):
        return self._queue.popleft()

    def __len__(self):
        return len(self._queue)

    def classify(self, dataset, depth):
        if depth >= self.max_depth:
            # forced leaf: weighted mean only, no split search
            stats = dataset_stats(dataset)
            return NodeResult(RegressionTreeLeaf(stats.weighted_mean), stats)
        return super().classify(dataset, depth)


class LeafLimitedGrowth(GrowthStrategy):
    name = "leaf-limited"

    def __init__(self, rng: Random, max_leaves: int, limit: float = DEFAULT_LIMIT):
        super().__init__(rng, limit=limit)
        self.max_leaves = int(max_leaves)
        self.num_leaves = 0
        self._heap = []
        self._counter = itertools.count()

    def push(self, item):
        heapq.heappush(self._heap, (item.potential, next(self._counter), item))

    def select_next(self):
        return heapq.heappop(self._heap)[2]

    def __len__(self):
        return len(self._heap)

    def on_leaf(self, depth):
        self.num_leaves += 1

    def should_stop(self):
        return self.num_leaves + len(self._heap) >= self.max_leaves


def make_strategy(config: GrowthConfig, rng: Random, n_instances: int) -> GrowthStrategy:
    config.validate()
    if config.mode is GrowthMode.ALPHA_LIMITED:
        return AlphaLimitedGrowth(rng, float(config.alpha), n_instances)
    if config.mode is GrowthMode.DEPTH_LIMITED:
        return DepthLimitedGrowth(rng, int(config.max_depth))
    return LeafLimitedGrowth(rng, int(config.max_leaves))


def build_tree(instances: Instances, config: GrowthConfig,
               rng: Optional[Union[Random, int]] = None) -> RegressionTree:
    """Grow a regression tree on ``instances`` as described by ``config``."""
    rng = check_random(rng)
    strategy = make_strategy(config, rng, len(instances))
    logger.info("growing %s tree on %d instances (%s, seed=%d)",
                strategy.name, len(instances), config.to_string(), rng.seed)
    return strategy.build(instances)


def build(instances: Instances, mode: Union[GrowthMode, str], parameter,
          rng: Optional[Union[Random, int]] = None) -> RegressionTree:
    """Grow a tree with ``mode`` in ``{"a", "d", "l"}`` (or a :class:`GrowthMode`)."""
    return build_tree(instances, GrowthConfig.from_mode(mode, parameter), rng)
