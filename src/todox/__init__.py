"""todox — track tagged comments across git revisions and gate them in CI."""

__version__ = "0.4.0"
