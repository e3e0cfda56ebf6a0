"""Fridge Check: recipe suggestions with an environmental impact estimate."""

__version__ = "1.0.0"
