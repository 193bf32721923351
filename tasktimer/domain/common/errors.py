from __future__ import annotations


class TaskError(Exception):
    """Base for every error raised by the task domain and its adapters."""


class InvalidInputError(TaskError):
    pass


class NotFoundError(TaskError):
    pass


class StoreUnavailableError(TaskError):
    """The record store could not be reached or rejected the call."""
