"""Turn-based tank battle on a wrapping grid, with offensive and defensive players."""

__version__ = "0.1.0"

__all__ = [
    "algorithm",
    "board",
    "defensive",
    "direction",
    "manager",
    "objects",
    "offensive",
    "tiles",
]