"""
Immutable snapshots of what one statement did on one source.

A read keeps its header, the rendered bytes of every cell and a multiset of
row signatures used for order-insensitive comparison. A write keeps its
affected-row count. Both carry an optional failure.
"""

from collections import Counter
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

NULL_MARKER = "\\N"
SEPARATOR = "\t"

Cell = Optional[bytes]
Row = Tuple[Cell, ...]


class Mode(str, Enum):
    """How read results are compared."""

    ORDERED = "ordered"
    UNORDERED = "unordered"

    @classmethod
    def _missing_(cls, value):
        # a boolean reads as the "non order" flag
        if isinstance(value, bool):
            return cls.UNORDERED if value else cls.ORDERED
        return None


def render_cell(value, truncate_fraction: bool = False) -> Cell:
    """Render one driver value to bytes, NULL stays None."""
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    text = str(value)
    if truncate_fraction:
        text = text.split(".")[0]
    return text.encode("utf-8")


def _escape(cell: bytes) -> str:
    # backslashes are doubled before undecodable bytes turn into \xNN
    text = cell.replace(b"\\", b"\\\\").decode("utf-8", errors="backslashreplace")
    return text.replace("\t", "\\t").replace("\n", "\\n")


def row_signature(row: Sequence[Cell]) -> str:
    """Textual encoding of a row; a real value can never render as NULL."""
    return SEPARATOR.join(NULL_MARKER if cell is None else _escape(cell) for cell in row)


class Outcome(BaseModel):
    """Result of running one statement against one source."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    failure: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def _render(self) -> str:
        raise NotImplementedError

    def __str__(self):
        if self.failure is not None:
            return f"error: {self.failure}"
        return self._render()


class ReadOutcome(Outcome):
    """Rows produced by a read."""

    header: Tuple[str, ...] = ()
    rows: Optional[Tuple[Row, ...]] = None
    signatures: Optional[Tuple[Tuple[str, int], ...]] = None

    @classmethod
    def from_rows(cls, header: Iterable[str], rows: Iterable[Sequence[Cell]]) -> "ReadOutcome":
        rows = tuple(tuple(row) for row in rows)
        signatures = Counter(row_signature(row) for row in rows)
        return cls(header=tuple(header), rows=rows, signatures=tuple(sorted(signatures.items())))

    @property
    def signature_counts(self) -> Counter:
        """Row signature multiset, a fresh copy on every access."""
        return Counter(dict(self.signatures or ()))

    @classmethod
    def failed(cls, failure: BaseException) -> "ReadOutcome":
        return cls(failure=failure)

    def _render(self) -> str:
        lines = [SEPARATOR.join(self.header)]
        lines.extend(row_signature(row) for row in self.rows or ())
        return "\n".join(lines)


class WriteOutcome(Outcome):
    """Affected-row count of a write; only meaningful without failure."""

    affected_rows: int = 0

    @classmethod
    def failed(cls, failure: BaseException) -> "WriteOutcome":
        return cls(failure=failure)

    def _render(self) -> str:
        return str(self.affected_rows)
