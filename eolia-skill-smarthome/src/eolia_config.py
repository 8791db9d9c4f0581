# eolia_config.py

import os

from eolia_errors import ConfigurationError
from eolia_status import AUTO, COOLING, HEATING

API_BASE_URL = "https://app.rac.apws.panasonic.com/eolia/v2"


def _parse_months(raw):
    return frozenset(int(m) for m in raw.split(",") if m.strip())


def _parse_flag(raw):
    return raw.strip().lower() not in ("0", "off", "false", "no")


class DefaultModePolicy:
    """
    Wählt den Betriebsmodus, wenn das Gerät aus dem Stillstand eingeschaltet wird.
    In den Kühl- bzw. Heizmonaten entscheidet die Jahreszeit, sonst die Zieltemperatur.
    """

    def __init__(self, cooling_months=(6, 7, 8, 9), heating_months=(11, 12, 1, 2, 3),
                 cool_threshold=24):
        self.cooling_months = frozenset(cooling_months)
        self.heating_months = frozenset(heating_months)
        self.cool_threshold = cool_threshold

    def choose(self, now, temperature=None):
        if now.month in self.cooling_months:
            return COOLING
        if now.month in self.heating_months:
            return HEATING
        if temperature is None:
            return AUTO
        return COOLING if temperature >= self.cool_threshold else HEATING


class EoliaConfig:
    def __init__(self, user_id, password, base_url=API_BASE_URL, http_timeout=30,
                 status_table="eolia_report_status", token_table="tokens",
                 cleaning_table="eolia_cleaning", session_token_key="eolia_access_token",
                 operation_token_lifetime=60, status_cache_enabled=True, mode_policy=None):
        if not user_id or not password:
            raise ConfigurationError("User ID or Password is empty.")
        self.user_id = user_id
        self.password = password
        self.base_url = base_url
        self.http_timeout = http_timeout
        self.status_table = status_table
        self.token_table = token_table
        self.cleaning_table = cleaning_table
        self.session_token_key = session_token_key
        # Sekunden, die ein Status mit Operation-Token aus dem Cache gilt
        self.operation_token_lifetime = operation_token_lifetime
        # Bei Bedienung per Infrarot-Fernbedienung ist der Cache nie verlässlich
        self.status_cache_enabled = status_cache_enabled
        self.mode_policy = mode_policy or DefaultModePolicy()

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ
        policy = DefaultModePolicy(
            cooling_months=_parse_months(env.get("COOLING_MONTHS", "6,7,8,9")),
            heating_months=_parse_months(env.get("HEATING_MONTHS", "11,12,1,2,3")),
            cool_threshold=float(env.get("COOL_THRESHOLD", "24")),
        )
        return cls(
            user_id=env.get("USER_ID"),
            password=env.get("PASSWORD"),
            base_url=env.get("EOLIA_API_URL", API_BASE_URL),
            http_timeout=float(env.get("EOLIA_HTTP_TIMEOUT", "30")),
            status_table=env.get("STATUS_TABLE", "eolia_report_status"),
            token_table=env.get("TOKEN_TABLE", "tokens"),
            cleaning_table=env.get("CLEANING_TABLE", "eolia_cleaning"),
            session_token_key=env.get("SESSION_TOKEN_KEY", "eolia_access_token"),
            operation_token_lifetime=float(env.get("OPERATION_TOKEN_LIFETIME", "60")),
            status_cache_enabled=_parse_flag(env.get("STATUS_CACHE", "on")),
            mode_policy=policy,
        )
