"""Deduplication of physical block ids backing persisted segments."""

import logging
from typing import Iterable, Set

from domain import INVALID_BLOCK, Segment
from shared.exceptions import StorageConsistencyError

logger = logging.getLogger(__name__)


class BlockIdentitySet:
    """Set of distinct block ids that actually hold persisted data.

    A block shared by several segments, columns or tables is counted once.
    Segments without a backing block contribute nothing.

    Example:
        >>> blocks = BlockIdentitySet()
        >>> blocks.add_segments(segments)
        >>> blocks.count()
    """

    def __init__(self) -> None:
        self._block_ids: Set[int] = set()

    def add_segment(self, segment: Segment) -> None:
        if not segment.has_backing_block:
            return
        self._block_ids.add(segment.block_id)
        for block_id in segment.additional_block_ids:
            if block_id == INVALID_BLOCK:
                raise StorageConsistencyError(
                    f"invalid block id in additional blocks of segment "
                    f"(row group {segment.row_group_index}, column {segment.column_id}, "
                    f"block {segment.block_id})"
                )
            self._block_ids.add(block_id)

    def add_segments(self, segments: Iterable[Segment]) -> None:
        for segment in segments:
            self.add_segment(segment)

    def count(self) -> int:
        return len(self._block_ids)

    def __len__(self) -> int:
        return len(self._block_ids)


def count_unique_blocks(segments: Iterable[Segment]) -> int:
    """Return the number of distinct blocks backing ``segments``."""
    blocks = BlockIdentitySet()
    blocks.add_segments(segments)
    logger.debug("counted %d unique blocks", blocks.count())
    return blocks.count()


__all__ = ["BlockIdentitySet", "count_unique_blocks"]
