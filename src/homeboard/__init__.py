"""homeboard: personal dashboard (clock, weather, to-do list, vocabulary cards)."""

__version__ = "0.1.0"
