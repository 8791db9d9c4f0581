import pytest

from alexa_errors import PAYLOAD_BUILDERS, build_error_payload, handle_error
from eolia_config import EoliaConfig
from eolia_errors import (
    AuthenticationError, ConfigurationError, ConflictError, DispatchError, ErrorKind,
    NotInOperationError, TemperatureRangeError, TransportError
)


def test_every_kind_has_a_payload():
    assert set(PAYLOAD_BUILDERS) == set(ErrorKind)


@pytest.mark.parametrize("error, expected", [
    (AuthenticationError("login"), "INTERNAL_ERROR"),
    (TransportError("timeout"), "INTERNAL_ERROR"),
    (ConfigurationError("empty"), "INTERNAL_ERROR"),
    (ConflictError("busy"), "ALREADY_IN_OPERATION"),
    (NotInOperationError("off"), "NOT_IN_OPERATION"),
    (DispatchError("unknown"), "INVALID_DIRECTIVE"),
    (KeyError("directive"), "INTERNAL_ERROR"),
])
def test_error_types(error, expected):
    assert build_error_payload(error)["type"] == expected


def test_temperature_range_payload():
    payload = build_error_payload(TemperatureRangeError(32, 16, 30))

    assert payload["type"] == "TEMPERATURE_VALUE_OUT_OF_RANGE"
    assert payload["validRange"]["minimumValue"] == {"value": 16, "scale": "CELSIUS"}
    assert payload["validRange"]["maximumValue"] == {"value": 30, "scale": "CELSIUS"}


def test_error_response_envelope():
    request = {"directive": {
        "header": {"namespace": "Alexa.PowerController", "name": "TurnOn", "correlationToken": "corr-9"},
        "endpoint": {"endpointId": "AC-0001"}
    }}

    response = handle_error(request, ConflictError("busy"))

    event = response["event"]
    assert (event["header"]["namespace"], event["header"]["name"]) == ("Alexa", "ErrorResponse")
    assert event["header"]["correlationToken"] == "corr-9"
    assert event["endpoint"]["endpointId"] == "AC-0001"
    assert event["payload"] == {"type": "ALREADY_IN_OPERATION", "message": "busy"}
    assert "context" not in response


def test_config_requires_credentials():
    with pytest.raises(ConfigurationError):
        EoliaConfig("", "secret")


def test_config_from_env():
    config = EoliaConfig.from_env({
        "USER_ID": "user",
        "PASSWORD": "pass",
        "STATUS_CACHE": "off",
        "OPERATION_TOKEN_LIFETIME": "45",
        "COOLING_MONTHS": "7,8",
        "STATUS_TABLE": "status",
    })

    assert config.status_cache_enabled is False
    assert config.operation_token_lifetime == 45
    assert config.status_table == "status"
    assert config.token_table == "tokens"
    assert config.mode_policy.cooling_months == {7, 8}
    assert config.mode_policy.heating_months == {11, 12, 1, 2, 3}
