"""Integration tests for the four storage analyses.

Builds real database files, checkpoints them, and runs each analysis
through the use case layer the CLI uses.
"""

import dataclasses

import duckdb
import pytest

from accounting import SegmentSizeResolver
from api.use_cases import (
    InspectColumnUseCase,
    ListAttachedStorageUseCase,
    ListTablesUseCase,
    StorageBreakdownUseCase,
)
from domain import TableRef, TableSizeEntry
from shared.config import InspectorConfig
from shared.formatting import format_size
from shared.result import Err, ErrorKind, Ok
from storage import DatabaseHelper, DatabaseSizeRepository, SegmentRepository


def open_session(path=None, attach=None, read_only=True):
    config = InspectorConfig(
        database_path=str(path) if path else "",
        read_only=read_only,
        attach=attach or {},
    )
    return DatabaseHelper(config).connect()


def test_imports():
    """All layers import together."""
    import accounting  # noqa: F401
    import api  # noqa: F401
    import domain  # noqa: F401
    import shared  # noqa: F401
    import storage  # noqa: F401


def test_inspect_column_reports_every_row_group(numbers_db):
    with open_session(numbers_db) as conn:
        result = InspectColumnUseCase(conn).execute("numbers", "n")
        assert isinstance(result, Ok)
        rows = list(result.value)

        segments = SegmentRepository(conn).fetch_segments(TableRef("numbers", "main", "numbers"))
        block_size = DatabaseSizeRepository(conn).fetch_block_universe("numbers").block_alloc_size

    assert result.value.columns[0] == "row_group_id"
    assert len(rows) == 5
    assert [row[0] for row in rows] == [0, 1, 2, 3, 4]
    assert [row[6] for row in rows] == [122880] * 4 + [8480]
    assert all(row[1] == "n" and row[2] == "INTEGER" for row in rows)
    assert [row[5] for row in rows] == [format_size(4 * 122880)] * 4 + [format_size(4 * 8480)]

    sizes = SegmentSizeResolver(segments, block_size).resolve(column_id=0)
    assert [row[4] for row in rows] == [format_size(s.total_compressed_size) for s in sizes]
    for size in sizes:
        assert 0 < size.compressed_size <= block_size
        if size.is_upper_bound:
            assert size.compressed_size == block_size - size.segment.block_offset


def test_inspect_column_variable_width_is_not_applicable(numbers_db):
    with open_session(numbers_db) as conn:
        result = InspectColumnUseCase(conn).execute("main.numbers", "LABEL")
        rows = list(result.value)

    assert rows
    assert all(row[5] == "N/A" for row in rows)
    assert sum(row[6] for row in rows) == 500000


def test_inspect_column_unknown_names_are_errors(numbers_db):
    with open_session(numbers_db) as conn:
        missing_column = InspectColumnUseCase(conn).execute("numbers", "nope")
        missing_table = InspectColumnUseCase(conn).execute("nothing_here", "n")

    assert isinstance(missing_column, Err)
    assert missing_column.kind == ErrorKind.INVALID_INPUT
    assert "Column 'nope' not found in table 'numbers'" in missing_column.message
    assert isinstance(missing_table, Err)


def test_list_tables_with_size(shop_db):
    with open_session(shop_db) as conn:
        result = ListTablesUseCase(conn).execute()
        rows = list(result.value)

    assert [row[:3] for row in rows] == [
        ("shop", "main", "customers"),
        ("shop", "main", "empty_table"),
        ("shop", "sales", "orders"),
    ]
    sizes = {row[2]: row[3] for row in rows}
    assert sizes["empty_table"] == "0 B"
    assert sizes["customers"] != "0 B"
    assert sizes["orders"] != "0 B"


def test_list_tables_of_attached_database(shop_db, numbers_db):
    with open_session(shop_db, attach={"nums": str(numbers_db)}) as conn:
        result = ListTablesUseCase(conn).execute("nums")
        rows = list(result.value)

    assert [row[:3] for row in rows] == [("nums", "main", "numbers")]


def test_storage_breakdown_reconciles(shop_db):
    with open_session(shop_db) as conn:
        result = StorageBreakdownUseCase(conn).execute()
        rows = list(result.value)

    assert [row[0] for row in rows] == ["table_data", "index", "metadata", "free_blocks", "total"]
    counts = {row[0]: row[3] for row in rows}
    assert counts["table_data"] + counts["index"] + counts["metadata"] + counts["free_blocks"] == counts["total"]
    assert counts["table_data"] > 0
    assert counts["metadata"] > 0
    assert rows[-1][2] == "100.0%"


def test_list_attached_storage_skips_in_memory(shop_db, numbers_db):
    with open_session(shop_db, attach={"nums": str(numbers_db)}, read_only=False) as conn:
        conn.execute("ATTACH ':memory:' AS scratch")
        result = ListAttachedStorageUseCase(conn).execute()
        rows = list(result.value)

    assert sorted(row[0] for row in rows) == ["nums", "shop"]
    assert all(row[2] == "0 B" for row in rows)


def test_in_memory_database_is_rejected():
    with open_session() as conn:
        conn.execute("CREATE TABLE t AS SELECT 1 AS x")
        for result in (
            ListTablesUseCase(conn).execute(),
            StorageBreakdownUseCase(conn).execute(),
            InspectColumnUseCase(conn).execute("t", "x"),
        ):
            assert isinstance(result, Err)
            assert result.kind == ErrorKind.INVALID_INPUT
            assert "requires a persistent database file" in result.message

        storage = ListAttachedStorageUseCase(conn).execute()
        assert isinstance(storage, Ok)
        assert list(storage.value) == []


def test_results_are_pulled_in_batches(shop_db):
    with open_session(shop_db) as conn:
        result = ListTablesUseCase(conn, batch_size=2).execute()

    cursor = result.value
    assert len(cursor.next_batch()) == 2
    assert len(cursor.next_batch()) == 1
    assert cursor.next_batch() == []


def test_inspection_does_not_modify_the_file(numbers_db):
    before = numbers_db.read_bytes()
    with open_session(numbers_db) as conn:
        StorageBreakdownUseCase(conn).execute()
        InspectColumnUseCase(conn).execute("numbers", "n")
    assert numbers_db.read_bytes() == before

    # still opens cleanly afterwards
    con = duckdb.connect(str(numbers_db), read_only=True)
    assert con.execute("SELECT count(*) FROM numbers").fetchone()[0] == 500000
    con.close()


def test_inspect_column_after_a_generated_column(generated_db):
    with open_session(generated_db) as conn:
        stored = InspectColumnUseCase(conn).execute("t", "c")
        generated = InspectColumnUseCase(conn).execute("t", "g")

    rows = list(stored.value)
    assert rows
    assert all(row[1] == "c" and row[2] == "VARCHAR" for row in rows)
    assert all(row[5] == "N/A" for row in rows)
    assert sum(row[6] for row in rows) == 200000

    assert isinstance(generated, Err)
    assert generated.kind == ErrorKind.INVALID_INPUT
    assert "Column 'g' is generated and has no stored data" in generated.message


def test_catalog_qualified_table_selects_its_database(shop_db, numbers_db):
    with open_session(shop_db, attach={"nums": str(numbers_db)}) as conn:
        qualified = InspectColumnUseCase(conn).execute("nums.main.numbers", "n")
        mismatch = InspectColumnUseCase(conn).execute("nums.main.numbers", "n", database="shop")

    assert isinstance(qualified, Ok)
    assert [row[6] for row in qualified.value] == [122880] * 4 + [8480]
    assert isinstance(mismatch, Err)
    assert "belongs to database 'nums'" in mismatch.message


def test_table_size_entries_are_read_only():
    entry = TableSizeEntry("shop", "main", "customers", persisted_data_size=1024)
    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.persisted_data_size = 0
