"""
Error taxonomy for the export engine.

Geometry errors are raised before any drawing happens. Image errors are
recovered inside the interior build. Cover and serialization errors abort
only the document being built.
"""

from typing import List, Optional


class KDPExportError(Exception):
    """Base class for all export engine errors"""


class InvalidTrimSize(KDPExportError, ValueError):
    def __init__(self, trim_size, available: List[str]):
        self.trim_size = trim_size
        self.available = available
        super().__init__(f"Unknown trim size '{trim_size}'. Available: {available}")


class InvalidPageCount(KDPExportError, ValueError):
    def __init__(self, page_count):
        self.page_count = page_count
        super().__init__(f"Page count must be >= 0, got {page_count}")


class ImageEmbedFailure(KDPExportError):
    def __init__(self, index: int, name: Optional[str], reason: str):
        self.index = index
        self.name = name
        label = name or f"#{index}"
        super().__init__(f"Failed to embed image {label}: {reason}")


class CoverBuildFailure(KDPExportError):
    pass


class SerializationFailure(KDPExportError):
    pass
