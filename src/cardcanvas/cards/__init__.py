"""Card templates."""

from cardcanvas.cards.satire_news import SatireNewsCard

__all__ = ["SatireNewsCard"]
