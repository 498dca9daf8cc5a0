"""First-person raycasting engine that parses, renders and plays .cub scene files."""

__version__ = "0.1.0"