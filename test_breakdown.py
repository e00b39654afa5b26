"""Tests for the file-wide storage breakdown."""

import pytest

from accounting import CATEGORY_ORDER, StorageBreakdownPartitioner
from domain import BlockUniverse
from shared.exceptions import StorageConsistencyError

BLOCK_SIZE = 262144


def test_index_is_the_reconciling_remainder():
    universe = BlockUniverse(total_blocks=100, free_blocks=10, block_alloc_size=BLOCK_SIZE)
    rows = StorageBreakdownPartitioner(universe).partition(table_data_blocks=50, metadata_blocks=5)

    assert [row.category for row in rows] == list(CATEGORY_ORDER)
    assert [row.block_count for row in rows] == [50, 35, 5, 10, 100]
    assert [row.percentage for row in rows] == ["50.0%", "35.0%", "5.0%", "10.0%", "100.0%"]
    assert [row.size_bytes for row in rows] == [n * BLOCK_SIZE for n in (50, 35, 5, 10, 100)]


def test_categories_always_reconcile_with_total():
    for total in (1, 7, 64, 1000):
        for free in range(0, total + 1, max(1, total // 4)):
            for metadata in range(0, total - free + 1, max(1, total // 5)):
                table_data = (total - free - metadata) // 2
                universe = BlockUniverse(total, free, BLOCK_SIZE)
                rows = {
                    row.category: row
                    for row in StorageBreakdownPartitioner(universe).partition(table_data, metadata)
                }
                measured = sum(
                    rows[name].block_count
                    for name in ("table_data", "index", "metadata", "free_blocks")
                )
                assert measured == rows["total"].block_count == total
                assert rows["total"].percentage == "100.0%"


def test_empty_file_reports_zero_percent_everywhere():
    universe = BlockUniverse(total_blocks=0, free_blocks=0, block_alloc_size=BLOCK_SIZE)
    rows = StorageBreakdownPartitioner(universe).partition(table_data_blocks=0, metadata_blocks=0)

    assert len(rows) == 5
    assert all(row.percentage == "0.0%" for row in rows)
    assert all(row.block_count == 0 for row in rows)


def test_measured_blocks_above_total_fail_fast():
    universe = BlockUniverse(total_blocks=10, free_blocks=2, block_alloc_size=BLOCK_SIZE)
    with pytest.raises(StorageConsistencyError):
        StorageBreakdownPartitioner(universe).partition(table_data_blocks=8, metadata_blocks=1)
