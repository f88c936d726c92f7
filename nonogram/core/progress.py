from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from nonogram.core.packs import (
    UNLOCK_AFTER_PACK,
    UNLOCK_ALWAYS,
    UNLOCK_TOTAL_PUZZLES,
    Pack,
)
from nonogram.core.storage import load_json, save_json

logger = logging.getLogger(__name__)


@dataclass
class PuzzleProgress:
    stars: int = 0
    time_ms: int = 0
    mistakes: int = 0


@dataclass(frozen=True)
class UnlockRequirement:
    """What a locked pack still needs, for display."""

    type: str
    required_count: int
    current_count: int
    required_pack_id: Optional[str] = None
    required_pack_name: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.current_count >= self.required_count


class ProgressStore:
    """Best result per (pack, puzzle) and the set of unlocked packs.

    Persists to ``progress.json`` in the user data directory on every change.
    A pack never locks again once unlocked.
    """

    def __init__(self, packs: Iterable[Pack], file_path: Path) -> None:
        self._packs: List[Pack] = list(packs)
        self._file_path = file_path
        self._completed: Dict[str, Dict[str, PuzzleProgress]] = {}
        self._unlocked: List[str] = []
        self._load()
        self.check_all_unlocks()

    def get_puzzle_result(self, pack_id: str, puzzle_id: str) -> Optional[PuzzleProgress]:
        return self._completed.get(pack_id, {}).get(puzzle_id)

    def get_pack_progress(self, pack_id: str) -> Dict[str, PuzzleProgress]:
        return dict(self._completed.get(pack_id, {}))

    def completed_in_pack(self, pack_id: str) -> int:
        return len(self._completed.get(pack_id, {}))

    def pack_stars(self, pack_id: str) -> int:
        return sum(p.stars for p in self._completed.get(pack_id, {}).values())

    @property
    def total_completed(self) -> int:
        return sum(len(pack) for pack in self._completed.values())

    @property
    def total_stars(self) -> int:
        return sum(p.stars for pack in self._completed.values() for p in pack.values())

    @property
    def unlocked_packs(self) -> List[str]:
        return list(self._unlocked)

    def is_pack_unlocked(self, pack_id: str) -> bool:
        return pack_id in self._unlocked

    def complete_puzzle(self, pack_id: str, puzzle_id: str, stars: int, time_ms: int, mistakes: int) -> None:
        """Record a completion; the stored result only improves on more stars."""
        pack_progress = self._completed.setdefault(pack_id, {})
        existing = pack_progress.get(puzzle_id)
        if existing is None or stars > existing.stars:
            pack_progress[puzzle_id] = PuzzleProgress(stars=stars, time_ms=time_ms, mistakes=mistakes)
        self.check_all_unlocks()
        self._save()

    def check_all_unlocks(self) -> List[str]:
        """Unlock every pack whose condition now holds; return the newly unlocked ids."""
        newly: List[str] = []
        for pack in self._packs:
            if pack.id in self._unlocked:
                continue
            if self._unlock_condition_met(pack):
                self._unlocked.append(pack.id)
                newly.append(pack.id)
                logger.info("Unlocked pack %s", pack.id)
        return newly

    def get_unlock_requirement(self, pack_id: str) -> Optional[UnlockRequirement]:
        pack = self._find_pack(pack_id)
        if pack is None:
            return None
        rule = pack.unlock
        if rule.type == UNLOCK_AFTER_PACK:
            required = self._find_pack(rule.pack_id)
            return UnlockRequirement(
                type=rule.type,
                required_count=rule.puzzle_count,
                current_count=self.completed_in_pack(rule.pack_id),
                required_pack_id=rule.pack_id,
                required_pack_name=required.name if required else rule.pack_id,
            )
        if rule.type == UNLOCK_TOTAL_PUZZLES:
            return UnlockRequirement(
                type=rule.type,
                required_count=rule.puzzle_count,
                current_count=self.total_completed,
            )
        return None

    def reset(self) -> None:
        """Clear all progress. Only called when user presses reset progress."""
        self._completed = {}
        self._unlocked = []
        self.check_all_unlocks()
        self._save()

    def save(self) -> None:
        self._save()

    def _find_pack(self, pack_id: Optional[str]) -> Optional[Pack]:
        for pack in self._packs:
            if pack.id == pack_id:
                return pack
        return None

    def _unlock_condition_met(self, pack: Pack) -> bool:
        rule = pack.unlock
        if rule.type == UNLOCK_ALWAYS:
            return True
        if rule.type == UNLOCK_AFTER_PACK:
            return self.completed_in_pack(rule.pack_id) >= rule.puzzle_count
        if rule.type == UNLOCK_TOTAL_PUZZLES:
            return self.total_completed >= rule.puzzle_count
        # Unknown rule types do not gate anything.
        return True

    def _load(self) -> None:
        payload = load_json(self._file_path)
        for pack_id, puzzles in (payload.get("completed") or {}).items():
            if not isinstance(puzzles, dict):
                continue
            self._completed[pack_id] = {
                puzzle_id: PuzzleProgress(
                    stars=int(value.get("stars", 0)),
                    time_ms=int(value.get("time_ms", 0)),
                    mistakes=int(value.get("mistakes", 0)),
                )
                for puzzle_id, value in puzzles.items()
                if isinstance(value, dict)
            }
        unlocked = payload.get("unlocked") or []
        if isinstance(unlocked, list):
            self._unlocked = [str(p) for p in unlocked]

    def _save(self) -> None:
        payload = {
            "completed": {
                pack_id: {puzzle_id: asdict(p) for puzzle_id, p in puzzles.items()}
                for pack_id, puzzles in self._completed.items()
            },
            "unlocked": list(self._unlocked),
        }
        save_json(self._file_path, payload)
