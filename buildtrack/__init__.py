# Rev 0.1.0
"""buildtrack: construction schedule tracker with a Gantt timeline engine."""

__version__ = "0.1.0"
