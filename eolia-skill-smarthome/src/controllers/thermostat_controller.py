# controllers/thermostat_controller.py

import logging

from eolia_errors import DispatchError
from eolia_status import (
    AUTO, COOL_DEHUMIDIFYING, COOLING, DEFAULT_TEMPERATURE, HEATING, NANOE, STOP,
    is_temperature_mode, to_number
)
from .alexa_controller import AlexaController
from .power_controller import PowerController

logger = logging.getLogger(__name__)

# Eolia-Modus -> Alexa thermostatMode, alles andere ist CUSTOM
ALEXA_THERMOSTAT_MODES = {
    AUTO: "AUTO",
    COOLING: "COOL",
    COOL_DEHUMIDIFYING: "COOL",
    HEATING: "HEAT",
    STOP: "OFF",
}

EOLIA_OPERATION_MODES = {
    "AUTO": AUTO,
    "COOL": COOLING,
    "HEAT": HEATING,
    "OFF": STOP,
}

EOLIA_CUSTOM_MODES = {
    "DEHUMIDIFY": COOL_DEHUMIDIFYING,
    "FAN": NANOE,
}


def get_alexa_thermostat_mode(operation_status, operation_mode):
    # Aus ist immer OFF, egal welcher Modus gespeichert ist
    if not operation_status:
        return "OFF"
    return ALEXA_THERMOSTAT_MODES.get(operation_mode, "CUSTOM")


def get_eolia_operation_mode(thermostat_mode, custom_name=None):
    """Gibt None zurück, wenn es für den Alexa-Modus keinen Eolia-Modus gibt."""
    if thermostat_mode == "CUSTOM":
        return EOLIA_CUSTOM_MODES.get(custom_name)
    return EOLIA_OPERATION_MODES.get(thermostat_mode)


def to_celsius(setpoint, delta=False):
    value = to_number(setpoint["value"])
    scale = setpoint.get("scale", "CELSIUS")
    if scale == "FAHRENHEIT":
        value = value * 5 / 9 if delta else (value - 32) * 5 / 9
        value = round(value * 2) / 2
    elif scale == "KELVIN" and not delta:
        value = round(value - 273.15, 1)
    return value


class ThermostatController(AlexaController):
    namespace = "Alexa.ThermostatController"

    @staticmethod
    def get_capability(proactive=True, retrievable=True):
        return {
            "type": "AlexaInterface",
            "interface": "Alexa.ThermostatController",
            "version": "3",
            "properties": {
                "supported": [
                    {"name": "targetSetpoint"},
                    {"name": "thermostatMode"}
                ],
                "retrievable": retrievable,
                "proactivelyReported": proactive
            },
            "configuration": {
                "supportedModes": ["AUTO", "COOL", "HEAT", "OFF", "CUSTOM"],
                "supportsScheduling": False
            }
        }

    @staticmethod
    def get_properties(status):
        # 0 heißt "keine Zieltemperatur"; ohne Wert ist das Gerät in der Alexa-App nicht bedienbar
        target = status.temperature if is_temperature_mode(status.operation_mode) else 0

        return [
            {
                "namespace": "Alexa.ThermostatController",
                "name": "thermostatMode",
                "value": get_alexa_thermostat_mode(status.operation_status, status.operation_mode)
            },
            {
                "namespace": "Alexa.ThermostatController",
                "name": "targetSetpoint",
                "value": {
                    "value": target,
                    "scale": "CELSIUS"
                }
            }
        ]

    @staticmethod
    def handle_directive(name, payload, status, session):
        logger.info(f"ThermostatController: Handling '{name}'")

        # 1. Zieltemperatur direkt setzen
        if name == "SetTargetTemperature":
            target = to_celsius(payload["targetSetpoint"])
            if not status.operation_status:
                status.operation_status = True
                status.operation_mode = session.default_mode(target)
                status.temperature = target
                return True
            if not is_temperature_mode(status.operation_mode) or status.temperature == target:
                return False
            status.temperature = target
            return True

        # 2. Temperatur relativ anpassen ("Alexa, stell die Klimaanlage 2 Grad höher")
        if name == "AdjustTargetTemperature":
            delta = to_celsius(payload["targetSetpointDelta"], delta=True)
            if not status.operation_status:
                previous_mode = status.operation_mode
                base = status.temperature if is_temperature_mode(previous_mode) else None
                status.operation_status = True
                status.operation_mode = session.default_mode(base)
                if base is None:
                    base = DEFAULT_TEMPERATURE[status.operation_mode]
                status.temperature = base + delta
                return True
            if not is_temperature_mode(status.operation_mode):
                return False
            status.temperature += delta
            return True

        # 3. Modus ändern (AUTO, COOL, HEAT, OFF, CUSTOM)
        if name == "SetThermostatMode":
            thermostat_mode = payload["thermostatMode"]
            alexa_mode = thermostat_mode.get("value")
            target = get_eolia_operation_mode(alexa_mode, thermostat_mode.get("customName"))
            if target is None:
                logger.info(f"ThermostatController: Modus '{alexa_mode}' nicht abbildbar")
                return False

            if target == STOP:
                return PowerController.turn_off(status)

            if status.operation_status and status.operation_mode == target:
                return False

            status.operation_mode = target
            status.operation_status = True
            if target in DEFAULT_TEMPERATURE:
                status.temperature = DEFAULT_TEMPERATURE[target]
                # AI快適 einschalten
                status.ai_control = "comfortable"
            return True

        raise DispatchError(f"ThermostatController: Directive '{name}' not supported.")
