# app/services/exceptions.py
"""Errors raised by the court reminder services"""


class StoreFailure(Exception):
    """A database write was rejected; the session has been rolled back"""


class DispatchError(Exception):
    """A notification channel failed to deliver a reminder"""

    def __init__(self, channel: str, message: str):
        super().__init__(f"{channel}: {message}")
        self.channel = channel


class ReminderNotFound(LookupError):
    pass


class ReminderStateError(Exception):
    """Transition not allowed from the reminder's current state"""
