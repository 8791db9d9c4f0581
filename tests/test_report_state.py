import pytest

import lambda_function
from conftest import APPLIANCE_ID, make_status
from eolia_status import EoliaStatus


@pytest.fixture(autouse=True)
def active_session(monkeypatch, session):
    monkeypatch.setattr(lambda_function, "_session", session)
    return session


def report_state(endpoint_id=APPLIANCE_ID):
    return {
        "directive": {
            "header": {
                "namespace": "Alexa",
                "name": "ReportState",
                "messageId": "msg-1",
                "correlationToken": "corr-1",
                "payloadVersion": "3"
            },
            "endpoint": {
                "scope": {"type": "BearerToken", "token": "user-token"},
                "endpointId": endpoint_id,
                "cookie": {}
            },
            "payload": {}
        }
    }


def by_name(response):
    return {p["name"]: p for p in response["context"]["properties"]}


def test_live_state_of_stopped_device(eolia):
    response = lambda_function.lambda_handler(report_state(), None)

    assert response["event"]["header"]["name"] == "StateReport"
    assert response["event"]["header"]["correlationToken"] == "corr-1"
    props = by_name(response)
    assert props["thermostatMode"]["value"] == "OFF"
    assert props["targetSetpoint"]["value"] == {"value": 0, "scale": "CELSIUS"}
    assert props["powerState"]["value"] == "OFF"
    assert props["temperature"]["value"] == {"value": 27.5, "scale": "CELSIUS"}
    assert props["connectivity"]["value"] == {"value": "OK"}
    assert props["powerState"]["uncertaintyInMilliseconds"] == 0
    assert eolia.status_reads == 1


def test_cached_state_carries_its_age(eolia, session, clock):
    session.sync.update_status(EoliaStatus(make_status(
        operation_status=True, operation_mode="Heating", temperature=21)))
    clock.advance(seconds=12)

    response = lambda_function.lambda_handler(report_state(), None)

    props = by_name(response)
    assert props["thermostatMode"]["value"] == "HEAT"
    assert props["targetSetpoint"]["value"]["value"] == 21
    assert props["thermostatMode"]["uncertaintyInMilliseconds"] == 12000
    assert eolia.status_reads == 0


def test_missing_inside_temperature(eolia):
    eolia.statuses[APPLIANCE_ID] = make_status(inside_temp=None)

    props = by_name(lambda_function.lambda_handler(report_state(), None))

    assert "temperature" not in props
    assert "powerState" in props


def test_setting_endpoint(eolia):
    eolia.statuses[APPLIANCE_ID] = make_status(
        operation_status=True, operation_mode="Cooling", temperature=25,
        wind_volume=0, air_flow="powerful", wind_direction=4,
        wind_direction_horizon="front", ai_control="comfortable", nanoex=True)

    response = lambda_function.lambda_handler(report_state(APPLIANCE_ID + "@Setting"), None)

    values = {p.get("instance"): p["value"] for p in response["context"]["properties"]}
    assert values == {
        "Eolia.WindVolume": "AirFlow.powerful",
        "Eolia.WindDirection": "WindDirection.4",
        "Eolia.WindDirectionHorizon": "WindDirectionHorizon.front",
        "Eolia.AiControl": "AiControl.comfortable",
        "Eolia.Nanoex": "ON",
        None: {"value": "OK"},
    }


def test_scene_endpoint_has_no_state(eolia):
    response = lambda_function.lambda_handler(report_state(APPLIANCE_ID + "@Cleaning"), None)

    assert response["event"]["header"]["name"] == "StateReport"
    assert response["context"]["properties"] == []
    assert eolia.status_reads == 0


def test_unknown_sub_endpoint():
    response = lambda_function.lambda_handler(report_state(APPLIANCE_ID + "@Garage"), None)

    assert response["event"]["payload"]["type"] == "INVALID_DIRECTIVE"
