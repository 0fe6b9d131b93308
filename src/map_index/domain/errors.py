# map_index/domain/errors.py


class InvalidBoundingBox(ValueError):
    """Query box is degenerate or encloses the whole dataset root."""


class EmptyGraph(LookupError):
    """Nearest-vertex search on a graph with no active vertices."""


class IngestOrderError(RuntimeError):
    """Graph construction calls arrived out of order."""
