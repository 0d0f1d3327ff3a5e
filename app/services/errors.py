"""Error taxonomy shared by the scoreboard services and the row stores."""


class ScoreboardError(Exception):
    """Base class for errors raised by the scoreboard services."""


class ValidationError(ScoreboardError):
    """Input rejected before any write is attempted."""


class ConflictError(ScoreboardError):
    """A frame number already exists for the match."""

    def __init__(self, match_id: object, frame_no: int) -> None:
        super().__init__(f"Frame {frame_no} already exists for match {match_id}")
        self.match_id = match_id
        self.frame_no = frame_no


class NotFoundError(ScoreboardError):
    """The requested match, frame or break does not exist."""


class TransportError(ScoreboardError):
    """The row store is unreachable or reported a backend fault."""
