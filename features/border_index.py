"""Border lookup tables for candidate retrieval during assembly."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from core.tiles import Tile

logger = logging.getLogger(__name__)

_EMPTY: Tuple[Tile, ...] = ()


@dataclass
class BorderIndex:
    """
    Variants bucketed by border value.

    Buckets keep insertion order, which fixes the order in which the
    assembler tries candidates.

    Attributes:
        by_top: top border -> variants
        by_left: left border -> variants
        by_top_left: (top border, left border) -> variants
    """
    by_top: Dict[int, List[Tile]] = field(default_factory=dict)
    by_left: Dict[int, List[Tile]] = field(default_factory=dict)
    by_top_left: Dict[Tuple[int, int], List[Tile]] = field(default_factory=dict)

    def with_top(self, border: int) -> Sequence[Tile]:
        """Variants whose top border equals `border`."""
        return self.by_top.get(border, _EMPTY)

    def with_left(self, border: int) -> Sequence[Tile]:
        """Variants whose left border equals `border`."""
        return self.by_left.get(border, _EMPTY)

    def with_top_left(self, top: int, left: int) -> Sequence[Tile]:
        """Variants matching both a top and a left border."""
        return self.by_top_left.get((top, left), _EMPTY)


def build_index(variants: Sequence[Tile]) -> BorderIndex:
    """Build the three border lookup tables over all variants."""
    by_top = defaultdict(list)
    by_left = defaultdict(list)
    by_top_left = defaultdict(list)

    for variant in variants:
        by_top[variant.top].append(variant)
        by_left[variant.left].append(variant)
        by_top_left[(variant.top, variant.left)].append(variant)

    index = BorderIndex(dict(by_top), dict(by_left), dict(by_top_left))
    logger.debug(
        "Indexed %d variants: %d top keys, %d left keys, %d top/left keys",
        len(variants), len(index.by_top), len(index.by_left), len(index.by_top_left)
    )
    return index
