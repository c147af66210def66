from typing import Optional


class NotificationError(Exception):
    """Raised when the notification collaborator fails to deliver a signup."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self):
        if self.status_code is not None:
            return f"{self.message} (status {self.status_code})"
        return self.message
