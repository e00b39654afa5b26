"""Pull-based row cursor over a fully built result set."""

from typing import Iterator, List, Sequence, Tuple

from shared.config import DEFAULT_BATCH_SIZE
from shared.exceptions import InvalidInputError

Row = Tuple


class RowCursor:
    """Hands out pre-built rows in batches, advancing an offset.

    A cursor only moves forward. Running the analysis again is the only way
    to start over.

    Example:
        >>> cursor = RowCursor(["name", "n"], [("x", 1), ("y", 2)])
        >>> cursor.next_batch(1)
        [('x', 1)]
        >>> cursor.remaining()
        1
    """

    def __init__(
        self,
        columns: Sequence[str],
        rows: Sequence[Row],
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        if batch_size <= 0:
            raise InvalidInputError(f"batch size must be positive, got {batch_size}")
        self.columns = list(columns)
        self._rows = list(rows)
        self.batch_size = batch_size
        self.offset = 0

    def next_batch(self, max_rows: int = 0) -> List[Row]:
        """Return up to ``max_rows`` rows (the cursor's batch size when 0).

        Returns an empty list once every row has been handed out.
        """
        limit = max_rows if max_rows > 0 else self.batch_size
        batch = self._rows[self.offset:self.offset + limit]
        self.offset += len(batch)
        return batch

    def remaining(self) -> int:
        return len(self._rows) - self.offset

    @property
    def exhausted(self) -> bool:
        return self.offset >= len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        while not self.exhausted:
            yield from self.next_batch()

    def __len__(self) -> int:
        return len(self._rows)


__all__ = ["RowCursor", "Row"]
