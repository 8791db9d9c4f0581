# controllers/power_controller.py

import logging

from eolia_errors import DispatchError
from eolia_status import (
    AUTO, CLEANING_MODES, DEFAULT_TEMPERATURE, MAX_TEMPERATURE, MIN_TEMPERATURE, STOP,
    is_temperature_mode
)
from .alexa_controller import AlexaController

# Logger konfigurieren
logger = logging.getLogger(__name__)


class PowerController(AlexaController):
    namespace = "Alexa.PowerController"

    @staticmethod
    def get_capability(proactive=True, retrievable=True):
        return {
            "type": "AlexaInterface",
            "interface": "Alexa.PowerController",
            "version": "3",
            "properties": {
                "supported": [{"name": "powerState"}],
                "retrievable": retrievable,
                "proactivelyReported": proactive
            }
        }

    @staticmethod
    def get_properties(status):
        return [{
            "namespace": "Alexa.PowerController",
            "name": "powerState",
            "value": "ON" if status.operation_status else "OFF"
        }]

    @staticmethod
    def handle_directive(name, payload, status, session):
        logger.info(f"PowerController: Handling '{name}'")

        if name == "TurnOn":
            return PowerController.turn_on(status, session)
        if name == "TurnOff":
            return PowerController.turn_off(status)

        raise DispatchError(f"PowerController: Directive '{name}' not supported.")

    @staticmethod
    def turn_on(status, session):
        # Bereits an: nur Antwort
        if status.operation_status:
            return False

        # Die gespeicherte Temperatur zählt nur, wenn der letzte Modus eine hatte
        previous = status.temperature if is_temperature_mode(status.operation_mode) else None

        status.operation_status = True
        status.operation_mode = session.default_mode(previous)
        logger.info(f"PowerController: Modus {status.operation_mode}")

        if is_temperature_mode(status.operation_mode) \
                and (previous is None or not MIN_TEMPERATURE <= previous <= MAX_TEMPERATURE):
            status.temperature = DEFAULT_TEMPERATURE[status.operation_mode]
        return True

    @staticmethod
    def turn_off(status):
        # operation_status=false kann auch eine laufende Reinigung sein, daher zählt nur Stop als aus
        if status.operation_mode == STOP:
            return False

        status.operation_status = False
        if status.operation_mode in CLEANING_MODES:
            # Ohne Moduswechsel läuft die Reinigung weiter
            status.operation_mode = AUTO
        return True
