"""
Match errors

Every rejected client request raises one of these before any room state is
touched. The socket layer turns them into a direct ``game:error`` reply.
"""


class MatchError(Exception):
    """Base class for all client-facing match errors"""

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class InvalidInput(MatchError):
    """Missing or malformed request field (room id, cell index)"""
    pass


class NotFound(MatchError):
    """Room or player does not exist"""
    pass


class Conflict(MatchError):
    """Room full, already joined, cell occupied"""
    pass


class IllegalState(MatchError):
    """Game not in progress, or not the sender's turn"""
    pass
