"""Fixed-date celebrations and rank precedence."""

from types import MappingProxyType

from .models import Celebration, LiturgicalColor, Rank

# Higher weight wins when several observances share a date.
RANK_WEIGHTS = MappingProxyType({
    Rank.SOLEMNITY: 4,
    Rank.FEAST: 3,
    Rank.MEMORIAL: 2,
    Rank.OPTIONAL_MEMORIAL: 1,
    Rank.WEEKDAY: 0,
    Rank.SUNDAY: 0,
})

# Ranks whose color replaces the season's color for the day.
COLOR_OVERRIDE_RANKS = frozenset({Rank.SOLEMNITY, Rank.FEAST})

_W = LiturgicalColor.WHITE
_R = LiturgicalColor.RED

# Keyed by (month, day).  Only a handful of major observances are modeled;
# there are no transfer rules and no movable feasts in this table.
FIXED_CELEBRATIONS = MappingProxyType({
    (1, 1): (
        Celebration("Mary, the Holy Mother of God", Rank.SOLEMNITY, _W, "Solemnity of Mary, Mother of God"),
    ),
    (1, 6): (
        Celebration("The Epiphany of the Lord", Rank.SOLEMNITY, _W, "The manifestation of Christ to the Gentiles"),
    ),
    (2, 2): (
        Celebration("The Presentation of the Lord", Rank.FEAST, _W, "Candlemas"),
    ),
    (3, 19): (
        Celebration("Saint Joseph, Spouse of the Blessed Virgin Mary", Rank.SOLEMNITY, _W),
    ),
    (3, 25): (
        Celebration("The Annunciation of the Lord", Rank.SOLEMNITY, _W),
    ),
    (6, 24): (
        Celebration("The Nativity of Saint John the Baptist", Rank.SOLEMNITY, _W),
    ),
    (6, 29): (
        Celebration("Saints Peter and Paul, Apostles", Rank.SOLEMNITY, _R),
    ),
    (8, 15): (
        Celebration("The Assumption of the Blessed Virgin Mary", Rank.SOLEMNITY, _W),
    ),
    (9, 21): (
        Celebration("Saint Matthew, Apostle and Evangelist", Rank.FEAST, _R),
    ),
    (11, 1): (
        Celebration("All Saints", Rank.SOLEMNITY, _W),
    ),
    (11, 2): (
        Celebration("The Commemoration of All the Faithful Departed", Rank.MEMORIAL, LiturgicalColor.PURPLE),
    ),
    (12, 8): (
        Celebration("The Immaculate Conception of the Blessed Virgin Mary", Rank.SOLEMNITY, _W),
    ),
    (12, 25): (
        Celebration("The Nativity of the Lord", Rank.SOLEMNITY, _W, "Christmas Day"),
    ),
})


def rank_weight(rank):
    return RANK_WEIGHTS[rank]


def order_by_precedence(celebrations):
    """Return *celebrations* sorted highest rank first.

    The sort is stable, so observances of equal rank keep their table order.
    """
    return tuple(sorted(celebrations, key=lambda c: rank_weight(c.rank), reverse=True))


def resolve_celebrations(day, table=FIXED_CELEBRATIONS):
    """Return the celebrations observed on *day*, ordered by precedence."""
    return order_by_precedence(table.get((day.month, day.day), ()))


def primary_celebration(celebrations):
    """Return the highest-ranking entry of an already ordered sequence, or None."""
    return celebrations[0] if celebrations else None


def day_color(season_color, primary):
    """Return the color of the day.

    A Solemnity or Feast imposes its own color; anything lower leaves the
    season's color in place.
    """
    if primary is not None and primary.rank in COLOR_OVERRIDE_RANKS:
        return primary.color
    return season_color
