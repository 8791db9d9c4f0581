# eolia_client.py

import json
import logging
import re
import urllib.error
import urllib.request
from datetime import datetime

from eolia_config import API_BASE_URL
from eolia_errors import (
    AuthenticationError, ConflictError, EoliaError, TemperatureRangeError, TransportError
)
from eolia_status import (
    AUTO, MAX_TEMPERATURE, MIN_TEMPERATURE, STOP, EoliaDevice, EoliaStatus, is_temperature_mode
)

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"atkn=(.+?)(;|$)")

# Felder, die bei PUT /devices/{id}/status übertragen werden
OPERATION_FIELDS = (
    "appliance_id", "operation_status", "nanoex", "wind_volume", "air_flow",
    "wind_direction", "wind_direction_horizon", "timer_value", "operation_mode",
    "temperature", "ai_control", "airquality", "operation_token"
)


class SessionExpiredError(AuthenticationError):
    """HTTP 401 der Eolia API. Wird intern mit einem Re-Login beantwortet."""


class EoliaClient:
    """
    Client für die Eolia Cloud API.
    Die Session steckt im Cookie `atkn`; jede Antwort mit neuem Cookie erneuert sie.
    """

    def __init__(self, user_id, password, access_token=None, base_url=API_BASE_URL,
                 timeout=30, opener=None):
        self.user_id = user_id
        self.password = password
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.opener = opener or urllib.request.build_opener()

    def login(self):
        logger.info("Eolia Login für %s", self.user_id)
        self.access_token = None
        body = {
            "idpw": {
                "id": self.user_id,
                "pass": self.password,
                "terminal_type": 3,
                "next_easy": True
            }
        }
        try:
            data = self._send("POST", "/auth/login", body)
        except EoliaError as e:
            raise AuthenticationError(f"Eolia Login fehlgeschlagen: {e.message}") from e

        if not self.access_token:
            raise AuthenticationError("Eolia Login lieferte kein Session-Token.")
        return data

    def logout(self):
        data = self._request("POST", "/auth/logout")
        self.access_token = None
        return data

    def get_devices(self):
        data = self._request("GET", "/devices")
        return [EoliaDevice(record) for record in data.get("ac_list", [])]

    def get_device_status(self, appliance_id):
        data = self._request("GET", f"/devices/{appliance_id}/status")
        data.setdefault("appliance_id", appliance_id)
        # Ein gelesenes Token ist nicht bestätigt und darf nie für ein Update benutzt werden
        data["operation_token"] = None
        return EoliaStatus(data)

    def set_device_status(self, operation):
        appliance_id = operation["appliance_id"]
        data = self._request("PUT", f"/devices/{appliance_id}/status", operation)
        operation["operation_token"] = data.get("operation_token")
        return EoliaStatus(dict(operation, **data))

    @staticmethod
    def create_operation(status):
        """Baut den PUT-Payload aus einem Status. Stop wird von der API abgelehnt."""
        temperature = status.temperature
        if is_temperature_mode(status.operation_mode):
            if temperature is None or not MIN_TEMPERATURE <= temperature <= MAX_TEMPERATURE:
                raise TemperatureRangeError(temperature, MIN_TEMPERATURE, MAX_TEMPERATURE)
        else:
            # Kein Temperatur-Modus: der mitgeführte Wert ist bedeutungslos, muss aber gültig sein
            temperature = min(max(temperature or MIN_TEMPERATURE, MIN_TEMPERATURE), MAX_TEMPERATURE)

        operation = {field: getattr(status, field) for field in OPERATION_FIELDS}
        operation["temperature"] = temperature

        if operation["operation_mode"] == STOP:
            operation["operation_mode"] = AUTO

        return operation

    def _request(self, method, path, body=None):
        try:
            return self._send(method, path, body)
        except SessionExpiredError:
            logger.info("Eolia Session abgelaufen, melde neu an.")

        self.login()

        try:
            return self._send(method, path, body)
        except SessionExpiredError as e:
            # Kein weiterer Versuch, sonst Endlosschleife bei gesperrten Zugangsdaten
            raise AuthenticationError("Eolia API antwortet auch nach Re-Login mit 401.") from e

    def _send(self, method, path, body=None):
        data = json.dumps(body).encode("utf-8") if body is not None else None
        req = urllib.request.Request(self.base_url + path, data=data, method=method)
        req.add_header("Accept", "application/json")
        req.add_header("Content-Type", "application/json; charset=UTF-8")
        req.add_header("Accept-Language", "ja-jp")
        req.add_header("X-Eolia-Date", datetime.now().strftime("%Y-%m-%dT%H:%M:%S"))
        if self.access_token:
            req.add_header("Cookie", f"atkn={self.access_token}")

        logger.info(f"Eolia {method} {path}")
        try:
            with self.opener.open(req, timeout=self.timeout) as response:
                self._update_token(response.headers)
                raw = response.read()
        except urllib.error.HTTPError as e:
            raise self._http_error(method, path, e) from e
        except urllib.error.URLError as e:
            raise TransportError(f"Eolia API nicht erreichbar: {e.reason}") from e

        if not raw:
            return {}
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as e:
            raise TransportError(f"Ungültiges JSON von {method} {path}") from e

    def _update_token(self, headers):
        for cookie in headers.get_all("Set-Cookie") or []:
            match = TOKEN_PATTERN.search(cookie)
            if match:
                self.access_token = match.group(1)

    @staticmethod
    def _http_error(method, path, error):
        try:
            detail = error.read().decode("utf-8", errors="replace")
        except (OSError, AttributeError):
            detail = ""
        message = f"{method} {path}: HTTP {error.code} {detail}".strip()

        if error.code == 401:
            return SessionExpiredError(message)
        if error.code == 409:
            return ConflictError(message)
        return TransportError(message, http_status=error.code)
