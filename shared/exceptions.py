"""Exception hierarchy for block-inspector."""


class InspectorError(Exception):
    """Base class for every error raised by the inspector."""


class InvalidInputError(InspectorError):
    """Caller supplied something the inspector cannot act on.

    Unknown database, table or column names and in-memory databases passed
    where a database file is required all end up here.
    """


class StorageConsistencyError(InspectorError):
    """A storage snapshot broke its own contract.

    Raised for a segment offset missing from its block's offset list or an
    invalid block id inside an additional-blocks list. Never retried.
    """


__all__ = ["InspectorError", "InvalidInputError", "StorageConsistencyError"]
