"""File-wide partition of blocks into storage categories.

Table data, metadata and free blocks are measured; index blocks are the
remainder of the total, so the four categories always add up to the total
exactly. Anything the measured categories miss is folded into ``index``.
"""

import logging
from typing import List

from domain import BlockUniverse, StorageCategoryEntry
from shared.exceptions import StorageConsistencyError
from shared.formatting import format_percentage

logger = logging.getLogger(__name__)

TABLE_DATA = "table_data"
INDEX = "index"
METADATA = "metadata"
FREE_BLOCKS = "free_blocks"
TOTAL = "total"

# Emission order is part of the output contract
CATEGORY_ORDER = (TABLE_DATA, INDEX, METADATA, FREE_BLOCKS, TOTAL)


class StorageBreakdownPartitioner:
    """Partitions a file's blocks into table_data, index, metadata and free_blocks.

    Example:
        >>> partitioner = StorageBreakdownPartitioner(universe)
        >>> rows = partitioner.partition(table_data_blocks=10, metadata_blocks=2)
    """

    def __init__(self, universe: BlockUniverse):
        self.universe = universe

    def index_blocks(self, table_data_blocks: int, metadata_blocks: int) -> int:
        index_blocks = (
            self.universe.total_blocks
            - table_data_blocks
            - metadata_blocks
            - self.universe.free_blocks
        )
        if index_blocks < 0:
            raise StorageConsistencyError(
                f"measured blocks exceed the file total: table_data={table_data_blocks} "
                f"metadata={metadata_blocks} free={self.universe.free_blocks} "
                f"total={self.universe.total_blocks}"
            )
        return index_blocks

    def _entry(self, category: str, block_count: int) -> StorageCategoryEntry:
        return StorageCategoryEntry(
            category=category,
            block_count=block_count,
            size_bytes=block_count * self.universe.block_alloc_size,
            percentage=format_percentage(block_count, self.universe.total_blocks),
        )

    def partition(self, table_data_blocks: int, metadata_blocks: int) -> List[StorageCategoryEntry]:
        """Build the five breakdown rows in their fixed order."""
        counts = {
            TABLE_DATA: table_data_blocks,
            INDEX: self.index_blocks(table_data_blocks, metadata_blocks),
            METADATA: metadata_blocks,
            FREE_BLOCKS: self.universe.free_blocks,
            TOTAL: self.universe.total_blocks,
        }
        logger.debug("storage breakdown block counts: %s", counts)
        return [self._entry(category, counts[category]) for category in CATEGORY_ORDER]


__all__ = [
    "StorageBreakdownPartitioner",
    "CATEGORY_ORDER",
    "TABLE_DATA",
    "INDEX",
    "METADATA",
    "FREE_BLOCKS",
    "TOTAL",
]
