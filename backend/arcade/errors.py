"""Error types shared by the services and mapped to HTTP responses by the blueprints."""


class ArcadeError(Exception):
    status_code = 400

    def __init__(self, message: str = ''):
        super().__init__(message)
        self.message = message or self.__class__.__name__

    def to_dict(self):
        return {'error': self.message}


class ConfigurationError(ArcadeError):
    """Required session input is missing or out of range."""
    status_code = 400


class InvalidTransition(ArcadeError):
    """The action is not allowed in the session's current state."""
    status_code = 409


class SessionNotFound(ArcadeError):
    status_code = 404


class PlayerNotFound(ArcadeError):
    status_code = 404


class LeaderboardUnavailable(ArcadeError):
    status_code = 503

    def to_dict(self):
        return {'error': self.message, 'retry': True}


class GenerationError(ArcadeError):
    """The generation collaborator failed; callers always fall back to built-in content."""
    status_code = 502
