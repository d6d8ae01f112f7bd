"""demon — live operation-trace summary for a wrapped child process."""

__version__ = "0.1.0"
