"""Houston comedy listings: fetch, normalize, dedupe and publish."""

__version__ = "1.0.0"
