"""Puzzle value type and conversion from pack/schedule data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

Grid = Tuple[Tuple[int, ...], ...]

DEFAULT_COLOR = "#3B82F6"


def _parse_row(raw: Any, size: int, allowed: Optional[range] = None) -> Tuple[int, ...]:
    if isinstance(raw, str):
        text = raw.replace(" ", "")
        try:
            values = tuple(int(ch) for ch in text)
        except ValueError:
            raise ValueError(f"row {raw!r} contains non-digit characters") from None
    else:
        values = tuple(int(v) for v in raw)
    if len(values) != size:
        raise ValueError(f"row {raw!r} has {len(values)} cells, expected {size}")
    if allowed is not None and any(v not in allowed for v in values):
        raise ValueError(f"row {raw!r} has values outside {allowed.start}..{allowed.stop - 1}")
    return values


def parse_grid(raw: Sequence[Any], size: int, allowed: Optional[range] = None) -> Grid:
    """Parse a square grid given as rows of digit strings or of integers."""
    if len(raw) != size:
        raise ValueError(f"grid has {len(raw)} rows, expected {size}")
    return tuple(_parse_row(row, size, allowed) for row in raw)


@dataclass(frozen=True)
class Puzzle:
    """An immutable nonogram: a square 0/1 solution plus cosmetic data.

    ``reveal_image`` maps filled cells to 1-based indices into ``palette``;
    it is display-only and never consulted by the game rules.
    """

    id: str
    name: str
    size: int
    solution: Grid
    color: str = DEFAULT_COLOR
    palette: Tuple[str, ...] = field(default_factory=tuple)
    reveal_image: Optional[Grid] = None
    date: Optional[str] = None
    is_override: bool = False

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"{self.id}: size must be positive")
        object.__setattr__(self, "solution", parse_grid(self.solution, self.size, range(0, 2)))
        object.__setattr__(self, "palette", tuple(self.palette))
        if self.reveal_image is not None:
            object.__setattr__(self, "reveal_image", parse_grid(self.reveal_image, self.size))

    @property
    def filled_count(self) -> int:
        return sum(sum(row) for row in self.solution)

    def reveal_color(self, row: int, col: int) -> str:
        """Colour a filled cell shows once revealed."""
        if self.reveal_image is not None and self.palette:
            index = self.reveal_image[row][col]
            if 0 < index <= len(self.palette):
                return self.palette[index - 1]
        return self.color

    @classmethod
    def from_dict(cls, data: Dict[str, Any], **overrides: Any) -> "Puzzle":
        """Build a puzzle from a pack or schedule entry.

        ``size`` defaults to the number of solution rows.
        """
        if not isinstance(data, dict):
            raise ValueError("puzzle entry must be a mapping")
        values: Dict[str, Any] = dict(data, **overrides)
        solution = values.get("solution")
        if not solution:
            raise ValueError(f"puzzle {values.get('id')!r}: missing 'solution'")
        puzzle_id = values.get("id")
        if not puzzle_id:
            raise ValueError("puzzle entry is missing 'id'")
        palette = values.get("palette") or ()
        return cls(
            id=str(puzzle_id),
            name=str(values.get("name") or puzzle_id),
            size=int(values.get("size") or len(solution)),
            solution=solution,
            color=str(values.get("color") or (palette[0] if palette else DEFAULT_COLOR)),
            palette=tuple(str(c) for c in palette),
            reveal_image=values.get("reveal_image") or values.get("revealImage"),
            date=values.get("date"),
            is_override=bool(values.get("is_override", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "size": self.size,
            "color": self.color,
            "solution": ["".join(str(v) for v in row) for row in self.solution],
        }
        if self.palette:
            payload["palette"] = list(self.palette)
        if self.reveal_image is not None:
            payload["reveal_image"] = [list(row) for row in self.reveal_image]
        if self.date is not None:
            payload["date"] = self.date
        return payload
