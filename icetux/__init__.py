"""Game-logic core of a penguin platformer: bitmasks, tile-map collision, enemy kinds, levels and settings files."""

__version__ = "0.1.1"