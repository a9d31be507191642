"""
Exceptions raised when persisted data cannot be turned back into a game.

Moderator commands never raise; they report failures through ActionResult.
"""


class SerializationError(Exception):
    """Raised when a serialized game cannot be reconstructed."""

    def __init__(self, message: str, field_name: str = ""):
        self.field_name = field_name
        self.message = message
        super().__init__(self.message)


class UnknownActionTypeError(SerializationError):
    """Raised when a serialized action names no known action class."""

    def __init__(self, action_type: str):
        self.action_type = action_type
        super().__init__(f"Unknown action type: {action_type}", field_name="type")
