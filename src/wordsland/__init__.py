"""WordsLand: a tile-placement word game engine."""

__version__ = "0.1.0"
