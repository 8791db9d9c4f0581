# eolia_errors.py

from enum import Enum


class ErrorKind(Enum):
    AUTHENTICATION = "AUTHENTICATION"
    TRANSPORT = "TRANSPORT"
    CONFLICT = "CONFLICT"
    TEMPERATURE_RANGE = "TEMPERATURE_RANGE"
    NOT_IN_OPERATION = "NOT_IN_OPERATION"
    DISPATCH = "DISPATCH"
    CONFIGURATION = "CONFIGURATION"


class EoliaError(Exception):
    """Basisklasse aller fachlichen Fehler. `kind` ist der Diskriminator."""
    kind = None

    def __init__(self, message=""):
        super().__init__(message)
        self.message = message


class AuthenticationError(EoliaError):
    """Login fehlgeschlagen oder zweimal hintereinander 401."""
    kind = ErrorKind.AUTHENTICATION


class TransportError(EoliaError):
    """Netzwerkfehler oder unerwarteter HTTP-Status der Eolia API."""
    kind = ErrorKind.TRANSPORT

    def __init__(self, message="", http_status=None):
        super().__init__(message)
        self.http_status = http_status


class ConflictError(EoliaError):
    """HTTP 409: eine vorherige Operation läuft noch."""
    kind = ErrorKind.CONFLICT


class TemperatureRangeError(EoliaError):
    kind = ErrorKind.TEMPERATURE_RANGE

    def __init__(self, value, minimum, maximum):
        super().__init__(f"Temperatur {value} liegt außerhalb von [{minimum}, {maximum}]")
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class NotInOperationError(EoliaError):
    """Detail-Einstellungen sind nur bei eingeschaltetem Gerät möglich."""
    kind = ErrorKind.NOT_IN_OPERATION


class DispatchError(EoliaError):
    kind = ErrorKind.DISPATCH


class ConfigurationError(EoliaError):
    kind = ErrorKind.CONFIGURATION
