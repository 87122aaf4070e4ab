"""fitness-tracker: client for a fitness tracking backend, with a web UI and CLI."""

__version__ = "0.1.0"
