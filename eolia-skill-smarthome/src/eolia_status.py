# eolia_status.py

from decimal import Decimal

# Betriebsmodi der Eolia API (geschlossene Menge)
STOP = "Stop"
AUTO = "Auto"
COOLING = "Cooling"
HEATING = "Heating"
COOL_DEHUMIDIFYING = "CoolDehumidifying"
COMFORTABLE_DEHUMIDIFICATION = "ComfortableDehumidification"
CLOTHES_DRYER = "ClothesDryer"
NANOE = "Nanoe"
CLEANING = "Cleaning"
NANOEX_CLEANING = "NanoexCleaning"

OPERATION_MODES = (
    STOP, AUTO, COOLING, HEATING, COOL_DEHUMIDIFYING, COMFORTABLE_DEHUMIDIFICATION,
    CLOTHES_DRYER, NANOE, CLEANING, NANOEX_CLEANING
)

# Nur in diesen Modi ist eine Zieltemperatur sinnvoll
TEMPERATURE_MODES = (AUTO, COOLING, HEATING, COOL_DEHUMIDIFYING)
CLEANING_MODES = (CLEANING, NANOEX_CLEANING)

MIN_TEMPERATURE = 16
MAX_TEMPERATURE = 30

# Standard-Zieltemperatur beim Wechsel in einen Modus
DEFAULT_TEMPERATURE = {
    AUTO: 24,
    COOLING: 26,
    COOL_DEHUMIDIFYING: 26,
    HEATING: 20,
}

AIR_FLOW_NOT_SET = "not_set"


def is_temperature_mode(mode):
    return mode in TEMPERATURE_MODES


def is_cleaning_mode(mode):
    return mode in CLEANING_MODES


def to_number(value):
    """DynamoDB liefert Decimal, die Eolia API und Alexa wollen int/float."""
    if isinstance(value, Decimal):
        return int(value) if value % 1 == 0 else float(value)
    return value


class EoliaStatus:
    """Zustand einer Klimaanlage, wie von der Eolia API geliefert oder zuletzt gesetzt."""

    FIELDS = (
        "appliance_id", "operation_status", "operation_mode", "temperature",
        "inside_temp", "inside_humidity", "outside_temp", "wind_volume", "air_flow",
        "wind_direction", "wind_direction_horizon", "timer_value", "nanoex",
        "ai_control", "airquality", "operation_token"
    )

    def __init__(self, record):
        self.appliance_id = record.get("appliance_id")
        self.operation_status = bool(record.get("operation_status", False))
        self.operation_mode = record.get("operation_mode", STOP)
        self.temperature = to_number(record.get("temperature", 0))
        self.inside_temp = to_number(record.get("inside_temp"))
        self.inside_humidity = to_number(record.get("inside_humidity"))
        self.outside_temp = to_number(record.get("outside_temp"))
        self.wind_volume = to_number(record.get("wind_volume", 0))
        self.air_flow = record.get("air_flow", AIR_FLOW_NOT_SET)
        self.wind_direction = to_number(record.get("wind_direction", 0))
        self.wind_direction_horizon = record.get("wind_direction_horizon", "auto")
        self.timer_value = to_number(record.get("timer_value", 0))
        self.nanoex = bool(record.get("nanoex", False))
        self.ai_control = record.get("ai_control", "off")
        self.airquality = bool(record.get("airquality", False))
        self.operation_token = record.get("operation_token")

    @property
    def is_cleaning(self):
        return is_cleaning_mode(self.operation_mode)

    def to_dict(self):
        return {field: getattr(self, field) for field in self.FIELDS}

    def __eq__(self, other):
        return isinstance(other, EoliaStatus) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"EoliaStatus({self.appliance_id}, status={self.operation_status}, "
                f"mode={self.operation_mode}, temperature={self.temperature})")


class EoliaDevice:
    """Eintrag aus der Geräteliste (`ac_list`)."""

    def __init__(self, record):
        self.appliance_id = record["appliance_id"]
        self.nickname = record.get("nickname", self.appliance_id)
        self.product_code = record.get("product_code", "")
        self.product_name = record.get("product_name", "")
