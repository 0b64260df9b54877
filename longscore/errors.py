from __future__ import annotations


class LongScoreError(Exception):
    """Base error for the LongScore library."""


class ConfigError(LongScoreError):
    """Raised when a generation plan or its inputs are invalid."""


class GenerationError(LongScoreError):
    """Raised when a generation capability fails to produce audio."""


class GenerationAbortedError(GenerationError):
    """Raised when the caller asks for generation to stop."""


class SegmentError(GenerationError):
    """Raised when a single segment fails; the whole request is abandoned."""

    def __init__(self, index: int, cause: BaseException) -> None:
        super().__init__(f"Segment {index} generation failed: {cause}")
        self.index = index
        self.cause = cause
