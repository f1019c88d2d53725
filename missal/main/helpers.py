"""Presentation helpers for the day page."""

from ..liturgical import LiturgicalColor

# The UI shows liturgical white as gold; the engine never sees this name.
DISPLAY_COLORS = {
    LiturgicalColor.RED: "red",
    LiturgicalColor.WHITE: "gold",
    LiturgicalColor.GREEN: "green",
    LiturgicalColor.PURPLE: "purple",
    LiturgicalColor.ROSE: "rose",
    LiturgicalColor.BLACK: "black",
}


def display_color(color):
    return DISPLAY_COLORS.get(color, "green")


def previous_month(year, month):
    return (year - 1, 12) if month == 1 else (year, month - 1)


def next_month(year, month):
    return (year + 1, 1) if month == 12 else (year, month + 1)


def grid_weeks(cells):
    """Split a flat grid into rows of seven."""
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]
