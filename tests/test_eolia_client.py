import json
import urllib.error

import pytest

from conftest import FakeOpener, FakeResponse, http_error, make_status
from eolia_client import EoliaClient
from eolia_errors import (
    AuthenticationError, ConflictError, TemperatureRangeError, TransportError
)
from eolia_status import EoliaStatus

URL = "https://eolia.test/v2"


def make_client(opener, access_token="old-token"):
    return EoliaClient("user", "pass", access_token=access_token, base_url=URL, opener=opener)


def login_ok(token="new-token"):
    return FakeResponse({}, cookies=[f"atkn={token}; Path=/; HttpOnly"])


def test_login_stores_session_cookie():
    opener = FakeOpener(login_ok("abc"))
    client = make_client(opener, access_token=None)

    client.login()

    assert client.access_token == "abc"
    body = json.loads(opener.requests[0].data.decode("utf-8"))
    assert body["idpw"]["id"] == "user"
    assert body["idpw"]["pass"] == "pass"
    assert opener.requests[0].full_url == URL + "/auth/login"


def test_login_without_cookie_fails():
    client = make_client(FakeOpener(FakeResponse({})), access_token=None)

    with pytest.raises(AuthenticationError):
        client.login()


def test_login_rejected():
    client = make_client(FakeOpener(http_error(URL + "/auth/login", 401)))

    with pytest.raises(AuthenticationError):
        client.login()


def test_session_cookie_is_sent():
    opener = FakeOpener(FakeResponse({"ac_list": []}))
    client = make_client(opener)

    client.get_devices()

    assert opener.requests[0].get_header("Cookie") == "atkn=old-token"


def test_get_devices():
    opener = FakeOpener(FakeResponse({"ac_list": [
        {"appliance_id": "A1", "nickname": "リビング", "product_code": "CS-X", "product_name": "Eolia"}
    ]}))

    devices = make_client(opener).get_devices()

    assert [d.appliance_id for d in devices] == ["A1"]
    assert devices[0].nickname == "リビング"


def test_get_device_status_drops_operation_token():
    opener = FakeOpener(FakeResponse(make_status(operation_token="stale")))

    status = make_client(opener).get_device_status("AC-0001")

    assert status.operation_token is None
    assert opener.requests[0].full_url == URL + "/devices/AC-0001/status"


def test_expired_session_relogin_and_replay():
    status_url = URL + "/devices/AC-0001/status"
    opener = FakeOpener(
        http_error(status_url, 401),
        login_ok("fresh"),
        FakeResponse(make_status(operation_mode="Cooling")),
    )
    client = make_client(opener)

    status = client.get_device_status("AC-0001")

    assert status.operation_mode == "Cooling"
    assert [r.full_url for r in opener.requests] == [status_url, URL + "/auth/login", status_url]
    assert opener.requests[2].get_header("Cookie") == "atkn=fresh"
    assert client.access_token == "fresh"


def test_second_401_is_fatal_without_further_retry():
    status_url = URL + "/devices/AC-0001/status"
    opener = FakeOpener(
        http_error(status_url, 401),
        login_ok(),
        http_error(status_url, 401),
        FakeResponse(make_status()),
    )

    with pytest.raises(AuthenticationError):
        make_client(opener).get_device_status("AC-0001")

    # Aufruf, Login, Wiederholung - danach nichts mehr
    assert len(opener.requests) == 3


def test_conflict_is_not_retried():
    opener = FakeOpener(http_error(URL + "/devices/AC-0001/status", 409, b'{"code": "busy"}'))
    client = make_client(opener)
    operation = client.create_operation(EoliaStatus(make_status(operation_mode="Cooling", temperature=25)))

    with pytest.raises(ConflictError):
        client.set_device_status(operation)
    assert len(opener.requests) == 1


def test_server_error_and_network_error():
    client = make_client(FakeOpener(http_error(URL + "/devices", 503)))
    with pytest.raises(TransportError) as excinfo:
        client.get_devices()
    assert excinfo.value.http_status == 503

    client = make_client(FakeOpener(urllib.error.URLError("timed out")))
    with pytest.raises(TransportError):
        client.get_devices()


def test_set_device_status_returns_new_token():
    opener = FakeOpener(FakeResponse(make_status(
        operation_status=True, operation_mode="Heating", temperature=22, operation_token="op-9")))
    client = make_client(opener)
    operation = client.create_operation(EoliaStatus(make_status(
        operation_status=True, operation_mode="Heating", temperature=22)))

    updated = client.set_device_status(operation)

    assert updated.operation_token == "op-9"
    assert operation["operation_token"] == "op-9"
    assert opener.requests[0].get_method() == "PUT"
    sent = json.loads(opener.requests[0].data.decode("utf-8"))
    assert sent["operation_mode"] == "Heating"
    assert sent["temperature"] == 22


def test_renewed_cookie_updates_token():
    opener = FakeOpener(FakeResponse({"ac_list": []}, cookies=["atkn=renewed; Path=/"]))
    client = make_client(opener)

    client.get_devices()

    assert client.access_token == "renewed"


def test_create_operation_rewrites_stop():
    operation = EoliaClient.create_operation(EoliaStatus(make_status(operation_mode="Stop", temperature=0)))

    assert operation["operation_mode"] == "Auto"
    assert "inside_temp" not in operation


@pytest.mark.parametrize("mode", ["Auto", "Cooling", "Heating", "CoolDehumidifying"])
@pytest.mark.parametrize("temperature", [15, 30.5, 45])
def test_create_operation_rejects_out_of_range(mode, temperature):
    status = EoliaStatus(make_status(operation_status=True, operation_mode=mode, temperature=temperature))

    with pytest.raises(TemperatureRangeError) as excinfo:
        EoliaClient.create_operation(status)

    assert excinfo.value.value == temperature
    assert (excinfo.value.minimum, excinfo.value.maximum) == (16, 30)


@pytest.mark.parametrize("mode", ["Nanoe", "ClothesDryer", "Cleaning", "NanoexCleaning"])
def test_create_operation_ignores_temperature_of_other_modes(mode):
    status = EoliaStatus(make_status(operation_mode=mode, temperature=0))

    operation = EoliaClient.create_operation(status)

    assert operation["operation_mode"] == mode
    assert 16 <= operation["temperature"] <= 30


def test_logout_drops_session():
    opener = FakeOpener(FakeResponse({}))
    client = make_client(opener)

    client.logout()

    assert client.access_token is None
    assert opener.requests[0].full_url == URL + "/auth/logout"
    assert opener.requests[0].get_method() == "POST"
    assert opener.requests[0].get_header("Cookie") == "atkn=old-token"
