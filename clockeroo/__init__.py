"""clockeroo: a terminal timer, stopwatch and alarm."""

__version__ = "0.1.0"
