"""Per-segment compressed size derivation from block offsets.

A segment's compressed size is the distance from its offset to the next
offset in the same block, whichever column or row group owns that next
segment. The last segment in a block is bounded by the block size, which
makes its size an upper bound. Oversized segments add one full block per
additional block id.
"""

import bisect
import logging
from collections import defaultdict
from typing import Dict, List, Sequence

from domain import ColumnSegmentSize, Segment, main_data_path
from shared.exceptions import StorageConsistencyError

logger = logging.getLogger(__name__)


def is_target_main_data_segment(segment: Segment, column_id: int) -> bool:
    """True for persisted main-data segments of ``column_id``.

    Validity bitmap segments share the column id but carry a longer path
    marker and are excluded.
    """
    if segment.column_id != column_id:
        return False
    if segment.column_path != main_data_path(column_id):
        return False
    return segment.has_backing_block


class SegmentSizeResolver:
    """Resolves compressed sizes for one column's segments.

    The offset map spans every segment of the table, not just the target
    column, since blocks are shared across columns and row groups.

    Example:
        >>> resolver = SegmentSizeResolver(all_segments, block_alloc_size=262144)
        >>> sizes = resolver.resolve(column_id=0)
    """

    def __init__(self, segments: Sequence[Segment], block_alloc_size: int):
        self.segments = list(segments)
        self.block_alloc_size = block_alloc_size
        self._offsets_by_block = self._build_offset_map(self.segments)

    @staticmethod
    def _build_offset_map(segments: Sequence[Segment]) -> Dict[int, List[int]]:
        offsets: Dict[int, List[int]] = defaultdict(list)
        for segment in segments:
            if not segment.has_backing_block:
                continue
            offsets[segment.block_id].append(segment.block_offset)
        for block_offsets in offsets.values():
            block_offsets.sort()
        return dict(offsets)

    def block_offsets(self, block_id: int) -> List[int]:
        return list(self._offsets_by_block.get(block_id, ()))

    def size_of(self, segment: Segment) -> ColumnSegmentSize:
        """Compute the compressed size of a single persisted segment.

        Raises:
            StorageConsistencyError: If the segment's offset is absent from
                its own block's offset list.
        """
        offsets = self._offsets_by_block.get(segment.block_id, [])
        idx = bisect.bisect_left(offsets, segment.block_offset)
        if idx == len(offsets) or offsets[idx] != segment.block_offset:
            raise StorageConsistencyError(
                f"offset {segment.block_offset} not found in block {segment.block_id} "
                f"(row group {segment.row_group_index}, column {segment.column_id})"
            )

        # Duplicate offsets are skipped so the next distinct offset bounds the size
        next_idx = bisect.bisect_right(offsets, segment.block_offset)
        if next_idx < len(offsets):
            compressed_size = offsets[next_idx] - segment.block_offset
            is_upper_bound = False
        else:
            compressed_size = self.block_alloc_size - segment.block_offset
            is_upper_bound = True

        additional_size = len(segment.additional_block_ids) * self.block_alloc_size
        return ColumnSegmentSize(
            segment=segment,
            compressed_size=compressed_size,
            additional_blocks_size=additional_size,
            is_upper_bound=is_upper_bound,
        )

    def resolve(self, column_id: int) -> List[ColumnSegmentSize]:
        """Return sizes for every main-data segment of ``column_id``, in segment order."""
        sizes = [
            self.size_of(segment)
            for segment in self.segments
            if is_target_main_data_segment(segment, column_id)
        ]
        logger.debug(
            "resolved %d segments for column %d across %d blocks",
            len(sizes),
            column_id,
            len(self._offsets_by_block),
        )
        return sizes


__all__ = ["SegmentSizeResolver", "is_target_main_data_segment"]
