# controllers/scene_controller.py

import logging

from eolia_errors import DispatchError
from .alexa_controller import AlexaController

logger = logging.getLogger(__name__)

EVENT_NAMES = {
    "Activate": "ActivationStarted",
    "Deactivate": "DeactivationStarted",
}


class SceneController(AlexaController):
    """Reinigungs-Szenen. Ob die Reinigung wirklich startet, entscheidet der CleaningScheduler."""
    namespace = "Alexa.SceneController"

    @staticmethod
    def get_capability(proactive=False, retrievable=False):
        # Szenen sind nicht abfragbar, sie stellen einen Aktions-Trigger dar
        return {
            "type": "AlexaInterface",
            "interface": "Alexa.SceneController",
            "version": "3",
            "supportsDeactivation": True,
            "proactivelyReported": proactive
        }

    @staticmethod
    def get_properties(status):
        return []

    @staticmethod
    def handle_scene(name, appliance_id, cleaning_mode, session):
        logger.info(f"SceneController: Handling '{name}' ({cleaning_mode})")

        if name == "Activate":
            return session.cleaning.activate(appliance_id, cleaning_mode)
        if name == "Deactivate":
            return session.cleaning.deactivate(appliance_id)

        raise DispatchError(f"SceneController: Directive '{name}' not supported.")

    @staticmethod
    def event_name(name):
        return EVENT_NAMES[name]
