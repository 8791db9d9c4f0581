# alexa_errors.py

import logging

from alexa_response import AlexaResponse
from eolia_errors import EoliaError, ErrorKind

logger = logging.getLogger(__name__)


def _celsius(value):
    return {"value": value, "scale": "CELSIUS"}


def _simple(error_type):
    def build(error):
        return {"type": error_type, "message": error.message}
    return build


def _temperature_range(error):
    return {
        "type": "TEMPERATURE_VALUE_OUT_OF_RANGE",
        "message": error.message,
        "validRange": {
            "minimumValue": _celsius(error.minimum),
            "maximumValue": _celsius(error.maximum)
        }
    }


# ErrorKind -> Payload der Alexa ErrorResponse
PAYLOAD_BUILDERS = {
    ErrorKind.AUTHENTICATION: _simple("INTERNAL_ERROR"),
    ErrorKind.TRANSPORT: _simple("INTERNAL_ERROR"),
    ErrorKind.CONFIGURATION: _simple("INTERNAL_ERROR"),
    ErrorKind.CONFLICT: _simple("ALREADY_IN_OPERATION"),
    ErrorKind.TEMPERATURE_RANGE: _temperature_range,
    ErrorKind.NOT_IN_OPERATION: _simple("NOT_IN_OPERATION"),
    ErrorKind.DISPATCH: _simple("INVALID_DIRECTIVE"),
}

_missing = set(ErrorKind) - set(PAYLOAD_BUILDERS)
if _missing:
    raise RuntimeError(f"ErrorKind ohne Alexa-Fehler: {sorted(k.name for k in _missing)}")


def build_error_payload(error):
    if isinstance(error, EoliaError):
        return PAYLOAD_BUILDERS[error.kind](error)
    return {"type": "INTERNAL_ERROR", "message": str(error) or error.__class__.__name__}


def handle_error(request, error):
    """Übersetzt einen Fehler in eine Alexa ErrorResponse."""
    directive = request.get("directive", {})
    header = directive.get("header", {})
    endpoint_id = directive.get("endpoint", {}).get("endpointId")

    payload = build_error_payload(error)
    logger.info(f"[error] {payload['type']}: {payload['message']}")

    adr = AlexaResponse(
        name="ErrorResponse",
        namespace="Alexa",
        correlation_token=header.get("correlationToken"),
        endpoint_id=endpoint_id
    )
    adr.set_payload(payload)
    return adr.get()
