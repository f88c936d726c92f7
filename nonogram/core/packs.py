from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from nonogram.core.puzzle import Puzzle

logger = logging.getLogger(__name__)

UNLOCK_ALWAYS = "always"
UNLOCK_AFTER_PACK = "after_pack"
UNLOCK_TOTAL_PUZZLES = "total_puzzles"

UNORDERED = 9999


@dataclass(frozen=True)
class UnlockRule:
    type: str = UNLOCK_ALWAYS
    pack_id: Optional[str] = None
    puzzle_count: int = 1


@dataclass(frozen=True)
class Pack:
    id: str
    name: str
    puzzles: Tuple[Puzzle, ...]
    description: str = ""
    icon: str = "📦"
    color: str = "#3B82F6"
    order: int = UNORDERED
    published: bool = True
    is_event: bool = False
    event_start: Optional[date] = None
    event_end: Optional[date] = None
    unlock: UnlockRule = field(default_factory=UnlockRule)

    def puzzle(self, puzzle_id: str) -> Optional[Puzzle]:
        for puzzle in self.puzzles:
            if puzzle.id == puzzle_id:
                return puzzle
        return None

    def is_active(self, today: Optional[date] = None) -> bool:
        """Event packs are only playable between their start and end dates, inclusive."""
        if not self.is_event:
            return True
        today = today or date.today()
        if self.event_start is not None and today < self.event_start:
            return False
        if self.event_end is not None and today > self.event_end:
            return False
        return True


def _parse_event_date(value, pack_name: str) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValueError(f"{pack_name}: invalid event date {value!r}") from None


def _parse_unlock(raw, pack_name: str) -> UnlockRule:
    if raw is None:
        return UnlockRule()
    if isinstance(raw, str):
        return UnlockRule(type=raw)
    if not isinstance(raw, dict):
        raise ValueError(f"{pack_name}: 'unlock' must be a mapping")
    rule_type = str(raw.get("type", UNLOCK_ALWAYS))
    pack_id = raw.get("pack_id")
    if rule_type == UNLOCK_AFTER_PACK and not pack_id:
        raise ValueError(f"{pack_name}: after_pack unlock needs 'pack_id'")
    return UnlockRule(
        type=rule_type,
        pack_id=str(pack_id) if pack_id else None,
        puzzle_count=int(raw.get("puzzle_count", 1)),
    )


def parse_pack(raw: dict, source_name: str) -> Pack:
    if not raw or not isinstance(raw, dict):
        raise ValueError(f"{source_name}: expected YAML with 'id', 'name' and 'puzzles'")
    pack_id = raw.get("id")
    name = raw.get("name")
    if not pack_id or not isinstance(pack_id, str):
        raise ValueError(f"{source_name}: missing or invalid 'id'")
    if not name or not isinstance(name, str):
        raise ValueError(f"{source_name}: missing or invalid 'name'")
    entries = raw.get("puzzles")
    if not entries or not isinstance(entries, list):
        raise ValueError(f"{source_name}: 'puzzles' has no entries")

    puzzles = []
    seen = set()
    for entry in entries:
        try:
            puzzle = Puzzle.from_dict(entry)
        except ValueError as e:
            raise ValueError(f"{source_name}: {e}") from None
        if puzzle.id in seen:
            raise ValueError(f"{source_name}: duplicate puzzle id {puzzle.id!r}")
        seen.add(puzzle.id)
        puzzles.append(puzzle)

    return Pack(
        id=pack_id,
        name=name.strip(),
        puzzles=tuple(puzzles),
        description=str(raw.get("description") or "").strip(),
        icon=str(raw.get("icon") or "📦"),
        color=str(raw.get("color") or "#3B82F6"),
        order=int(raw.get("order", UNORDERED)),
        published=bool(raw.get("published", True)),
        is_event=bool(raw.get("is_event", False)),
        event_start=_parse_event_date(raw.get("event_start"), source_name),
        event_end=_parse_event_date(raw.get("event_end"), source_name),
        unlock=_parse_unlock(raw.get("unlock"), source_name),
    )


class PackRepository:
    """Puzzle packs bundled as ``data/packs/pack*.yaml``."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or Path(__file__).resolve().parent.parent / "data" / "packs"
        self._packs = self._load_packs()

    def all(self, include_inactive: bool = False, today: Optional[date] = None) -> List[Pack]:
        """Packs in display order; unpublished and out-of-window event packs are hidden by default."""
        packs = list(self._packs.values())
        if not include_inactive:
            packs = [p for p in packs if p.published and p.is_active(today)]
        return sorted(packs, key=lambda p: p.order)

    def get(self, pack_id: str) -> Pack:
        return self._packs[pack_id]

    def get_puzzle(self, pack_id: str, puzzle_id: str) -> Optional[Puzzle]:
        pack = self._packs.get(pack_id)
        if pack is None:
            return None
        return pack.puzzle(puzzle_id)

    def _load_packs(self) -> Dict[str, Pack]:
        if not self._base_dir.exists():
            raise FileNotFoundError(f"Packs directory not found: {self._base_dir}")

        def _sort_key(p: Path) -> tuple[int, str]:
            m = re.match(r"^pack(\d+)", p.stem)
            if m:
                return (int(m.group(1)), p.stem)
            return (10**9, p.stem)

        packs: Dict[str, Pack] = {}
        for pack_path in sorted(self._base_dir.glob("pack*.yaml"), key=_sort_key):
            raw = yaml.safe_load(pack_path.read_text(encoding="utf-8"))
            pack = parse_pack(raw, pack_path.name)
            if pack.id in packs:
                raise ValueError(f"{pack_path.name}: duplicate pack id {pack.id!r}")
            packs[pack.id] = pack

        if not packs:
            raise ValueError(f"No pack files (pack*.yaml) found in {self._base_dir}")
        logger.info("Loaded %d puzzle packs from %s", len(packs), self._base_dir)
        return packs
