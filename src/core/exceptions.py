"""
Custom exceptions shared by all layers.

Everything raised on purpose by the game derives from `GameError`, so the Service (and whatever transport sits on top of it)
can catch a single type and decide how to notify the player.
"""


class GameError(Exception):
    """Top-level exception for anything going wrong in a game."""


# --- VALIDATION: bad input for a single step. Nothing has been mutated when these are raised ---
class ValidationError(GameError):
    pass


class PlacementError(ValidationError):
    """Target cell is occupied or not on the board."""


class InvalidPieceError(ValidationError):
    """Piece is not in the player's hand, or its size/owner do not match the stored piece."""


class InvalidReplacementError(ValidationError):
    """Chosen replacement candidate id is not one of the offered candidates."""


class InvalidRequestError(ValidationError):
    """Payload from an external collaborator could not be interpreted."""


# --- STATE: caller misuse. Fatal to the offending call only ---
class GameStateError(GameError):
    pass


class RollbackError(GameStateError):
    """Nothing left on the snapshot stack."""


class UnknownStrategyError(GameStateError):
    """Requested bot strategy does not exist."""


class ProviderUnavailableError(GameStateError):
    """Player has no move provider (e.g. reconstructed from a snapshot)."""


# --- PERSISTENCE / LOOKUP ---
class RepositoryError(GameError):
    pass
