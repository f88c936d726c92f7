"""Theme colors and color utilities for the UI."""

from nonogram.core.game import CellState


class HomeColors:
    """Light theme palette shared by the home and play screens."""

    BG_TOP = "#eef2ff"
    BG_MIDDLE = "#e0e7ff"
    BG_BOTTOM = "#c7d2fe"

    PRIMARY = "#4f46e5"
    PRIMARY_LIGHT = "#818cf8"
    PRIMARY_DARK = "#3730a3"

    CORAL = "#ff8a65"
    AMBER = "#ffb74d"
    MINT = "#69f0ae"

    CARD_BG = "rgba(255, 255, 255, 0.85)"
    CARD_BORDER = "rgba(255, 255, 255, 0.6)"

    TEXT_PRIMARY = "#1e1b4b"
    TEXT_SECONDARY = "#4a5072"
    TEXT_MUTED = "#78809c"


class GridColors:
    """Cell and clue colours for the puzzle grid."""

    CELL_EMPTY = "#ffffff"
    CELL_MARKED = "#f1f5f9"
    CELL_WRONG = "#fee2e2"
    GRID_LINE = "#cbd5e1"
    GRID_LINE_MAJOR = "#64748b"
    MARK_CROSS = "#94a3b8"
    WRONG_CROSS = "#dc2626"
    CLUE_TEXT = "#1e293b"
    CLUE_DONE = "#a5b4c8"


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a


def cell_background(state: CellState, fill_color: str, highlight: bool = False) -> str:
    """Background for a cell; *highlight* tints cells of a completed line."""
    if state == CellState.FILLED:
        return fill_color
    if state == CellState.WRONG:
        return GridColors.CELL_WRONG
    base = GridColors.CELL_MARKED if state == CellState.MARKED else GridColors.CELL_EMPTY
    if highlight:
        return blend_hex(base, fill_color, 0.12)
    return base


def format_elapsed(ms: float) -> str:
    """Render milliseconds as ``MM:SS``."""
    total_seconds = int(ms // 1000)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"
