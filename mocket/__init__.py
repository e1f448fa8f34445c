"""A fake SQL database for tests: canned replies matched by query and arguments."""

__version__ = "0.1.0"