# controllers/toggle_controller.py

import logging

from eolia_errors import DispatchError, NotInOperationError
from .alexa_controller import AlexaController, text_name

# Logger konfigurieren
logger = logging.getLogger(__name__)


class NanoexController(AlexaController):
    namespace = "Alexa.ToggleController"
    # Eine Instanz ist bei ToggleController PFLICHT
    instance = "Eolia.Nanoex"

    @staticmethod
    def get_capability(proactive=True, retrievable=True):
        return {
            "type": "AlexaInterface",
            "interface": "Alexa.ToggleController",
            "version": "3",
            "instance": NanoexController.instance,
            "properties": {
                "supported": [{"name": "toggleState"}],
                "retrievable": retrievable,
                "proactivelyReported": proactive,
                "nonControllable": False
            },
            "capabilityResources": {
                "friendlyNames": [text_name("ナノイーX")]
            }
        }

    @staticmethod
    def get_properties(status):
        return [{
            "namespace": "Alexa.ToggleController",
            "instance": NanoexController.instance,
            "name": "toggleState",
            "value": "ON" if status.nanoex else "OFF"
        }]

    @staticmethod
    def handle_directive(name, payload, status, session):
        logger.info(f"NanoexController: Handling '{name}'")

        if name not in ("TurnOn", "TurnOff"):
            raise DispatchError(f"NanoexController: Directive '{name}' not supported.")
        if not status.operation_status:
            raise NotInOperationError(f"{status.appliance_id} ist ausgeschaltet")

        nanoex = name == "TurnOn"
        if status.nanoex == nanoex:
            return False
        status.nanoex = nanoex
        return True
