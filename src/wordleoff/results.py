"""
wordleoff.results — Operation outcome enums
============================================

Every session operation that can fail returns one of these values instead
of raising. The transport layer turns them into client-visible messages;
``join_error_for`` gives the join-error code for an admission outcome.
"""

from enum import Enum
from typing import Optional


class AddPlayerResult(Enum):
    """Outcome of ``GameSession.add_player``."""
    SUCCESS = "Success"
    CONNECTION_RESTORED = "ConnectionRestored"
    PLAYER_NAME_EXIST = "PlayerNameExist"
    PLAYER_MAXED = "PlayerMaxed"
    GAME_ALREADY_STARTED = "GameAlreadyStarted"
    CANNOT_RESTORE = "CannotRestore"


class EnterWordResult(Enum):
    """Outcome of ``GameSession.enter_guess``."""
    SUCCESS = "Success"
    MAX_GUESSES = "MaxGuesses"
    PLAYER_NOT_FOUND = "PlayerNotFound"


class ServerJoinError(Enum):
    """Join failures reported back to a client."""
    SESSION_NOT_FOUND = "SessionNotFound"
    NAME_TAKEN = "NameTaken"
    SESSION_FULL = "SessionFull"
    SESSION_IN_PROGRESS = "SessionInProgress"
    CANNOT_RESTORE = "CannotRestore"


_JOIN_ERRORS = {
    AddPlayerResult.SUCCESS: None,
    AddPlayerResult.CONNECTION_RESTORED: None,
    AddPlayerResult.PLAYER_NAME_EXIST: ServerJoinError.NAME_TAKEN,
    AddPlayerResult.PLAYER_MAXED: ServerJoinError.SESSION_FULL,
    AddPlayerResult.GAME_ALREADY_STARTED: ServerJoinError.SESSION_IN_PROGRESS,
    AddPlayerResult.CANNOT_RESTORE: ServerJoinError.CANNOT_RESTORE,
}


def join_error_for(result: AddPlayerResult) -> Optional[ServerJoinError]:
    """Map an admission outcome to a join error, or None if the join worked."""
    return _JOIN_ERRORS[result]
