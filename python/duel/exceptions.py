"""Custom exceptions for duel engine errors."""


class DuelEngineError(Exception):
    """Base class for errors raised by the duel engine."""


class DataIntegrityError(DuelEngineError):
    """Exception raised when move template data cannot be resolved.

    Damaging moves must always resolve to a base power. A damaging move with no
    power is a broken template, so resolution stops instead of guessing.

    Attributes:
        move_name: Identifier of the offending move
        effect: Effect identifier of the offending move
    """

    def __init__(self, move_name: str, effect: int):
        """Initialize the DataIntegrityError.

        Args:
            move_name: Identifier of the offending move
            effect: Effect identifier of the offending move
        """
        self.move_name = move_name
        self.effect = effect
        super().__init__(
            f"Damaging move {move_name} (effect {effect}) has no resolvable power"
        )


class ItemNotRemovableError(DuelEngineError):
    """Exception raised when an unremovable held item would be taken or used up.

    Attributes:
        item_name: The item that could not be removed
    """

    def __init__(self, item_name: str):
        self.item_name = item_name
        super().__init__(f"{item_name} cannot be removed")


class RedirectDepthExceededError(DuelEngineError):
    """Exception raised when a chain of move redirects exceeds its bound.

    Only raised when the engine runs with strict redirects enabled.

    Attributes:
        move_name: The move that would have been resolved next
        depth: The configured maximum depth
    """

    def __init__(self, move_name: str, depth: int):
        self.move_name = move_name
        self.depth = depth
        super().__init__(f"Redirect to {move_name} exceeds maximum depth {depth}")
