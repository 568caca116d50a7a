"""poolstat: zpool health and topology parsing."""

__version__ = "1.0.0"
