from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Segment:
    """A contiguous run of diary text attributed to one day (or left undated)."""

    index: int
    date: str | None  # ISO YYYY-MM-DD; kept as text since day 31 is accepted for any month
    text: str

    def to_record(self) -> dict[str, object]:
        return {
            "segment_index": self.index,
            "segment_date": self.date,
            "text": self.text,
        }
