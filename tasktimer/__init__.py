"""Personal task tracker: timestamped tasks, completion and duration statistics."""

__version__ = "0.1.0"
