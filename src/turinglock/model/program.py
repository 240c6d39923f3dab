"""Program store: the raw instruction lines of a loaded program."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict


class Program(BaseModel):
    """An ordered, read-only sequence of raw instruction lines.

    Lines are kept as text; decoding happens one fetch at a time in the
    execution engine.
    """

    model_config = ConfigDict(frozen=True)

    lines: tuple[str, ...] = ()

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Program:
        return cls(lines=tuple(lines))

    def get(self, index: int) -> str | None:
        """Return the line at *index*, or None when *index* is out of range.

        Negative indices are out of range; they never count from the end.
        """
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return None

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.lines)
