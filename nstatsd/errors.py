class StatsdError(Exception):
    """
    Base class of every error raised by the statsd client.
    """
    pass


class ConfigurationError(StatsdError):
    """
    Raised when the client settings are missing or invalid.
    """
    pass


class TransportConstructionError(StatsdError):
    """
    Raised when the collector address cannot be resolved or the socket
    cannot be created.
    """
    pass


class SendError(StatsdError):
    """
    Raised when the underlying send primitive fails.
    """
    pass


class TransportClosedError(SendError):
    """
    Raised when sending through a transport that was already closed.
    """
    pass


class ClientDisposedError(StatsdError):
    """
    Raised when a metric is sent through a disposed client.
    """
    pass


class ValidationError(StatsdError, ValueError):
    pass


class InvalidStatError(ValidationError):
    pass


class InvalidSampleRateError(ValidationError):
    pass


class InvalidValueError(ValidationError):
    pass
