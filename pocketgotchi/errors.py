class PocketgotchiError(Exception):
    """Base class for errors raised by the pet core."""


class InvalidSaveError(PocketgotchiError):
    """A save payload could not be decoded or is missing required fields."""


class PreconditionNotMet(PocketgotchiError):
    """An action was refused. No state was changed.

    `message` is the text to show the player, or None when the refusal is silent
    (e.g. the buttons are greyed out while the pet sleeps).
    """

    def __init__(self, message=None):
        super().__init__(message or "precondition not met")
        self.message = message
