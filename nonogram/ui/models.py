"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from nonogram.core.packs import Pack
from nonogram.core.progress import UnlockRequirement


@dataclass
class PackState:
    """UI state for a single pack: progress, unlock status, and selection."""

    pack: Pack
    unlocked: bool
    completed: int
    stars: int = 0
    requirement: Optional[UnlockRequirement] = None
    is_current: bool = False

    @property
    def total(self) -> int:
        return len(self.pack.puzzles)

    @property
    def max_stars(self) -> int:
        return self.total * 3

    def requirement_text(self) -> str:
        req = self.requirement
        if self.unlocked or req is None:
            return ""
        if req.required_pack_name:
            return f"Solve {req.required_count} in {req.required_pack_name} ({req.current_count}/{req.required_count})"
        return f"Solve {req.required_count} puzzles ({req.current_count}/{req.required_count})"
