"""Column color palette."""

COLORS: dict[str, str] = {
    "red": "#ef4444",
    "amber": "#f59e0b",
    "violet": "#8b5cf6",
    "emerald": "#10b981",
    "cyan": "#06b6d4",
    "orange": "#f97316",
}

# Order matters: new columns take the first color not already in use.
COLUMN_COLORS: list[str] = list(COLORS.values())


def next_column_color(used: list[str] | set[str]) -> str:
    """Pick the first palette color not in used, else the first color."""
    used = set(used)
    for color in COLUMN_COLORS:
        if color not in used:
            return color
    return COLUMN_COLORS[0]
