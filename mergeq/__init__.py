"""mergeq: merge queue inspection and rejection for beads-tracked rigs."""

from .domain.merge_queue import MergeQueue

__version__ = "0.1.0"
__all__ = ["MergeQueue", "__version__"]
