"""Lead intake API: debt lead normalization, scoring and persistence."""

__version__ = "1.0.0"
