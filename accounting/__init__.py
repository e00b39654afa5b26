"""Storage accounting engine for block-inspector.

Pure functions over in-memory storage snapshots: block deduplication,
per-segment compressed sizes and the file-wide block breakdown.

Rules:
- MAY import domain, shared
- MUST NOT import storage, api or duckdb
- MUST NOT perform I/O
"""

from .block_identity import BlockIdentitySet, count_unique_blocks
from .breakdown import CATEGORY_ORDER, StorageBreakdownPartitioner
from .decompressed import estimate_decompressed_size, fixed_width
from .segment_sizes import SegmentSizeResolver, is_target_main_data_segment

__all__ = [
    # Blocks
    "BlockIdentitySet",
    "count_unique_blocks",
    # Segments
    "SegmentSizeResolver",
    "is_target_main_data_segment",
    "estimate_decompressed_size",
    "fixed_width",
    # Breakdown
    "StorageBreakdownPartitioner",
    "CATEGORY_ORDER",
]
