# controllers/mode_controller.py

import logging

from eolia_errors import DispatchError, NotInOperationError
from eolia_status import AIR_FLOW_NOT_SET
from .alexa_controller import AlexaController, asset_name, text_name

# Logger konfigurieren
logger = logging.getLogger(__name__)


class ModeController(AlexaController):
    """
    Basis für die Detail-Einstellungen (Endpunkt `<applianceId>@Setting`).
    Modus-Werte haben die Form `<Key>.<Wert>`, z.B. "WindDirection.3".
    """
    namespace = "Alexa.ModeController"
    instance = None
    friendly_names = []
    # Liste von (Wert, friendlyNames)
    supported_modes = []

    @classmethod
    def get_capability(cls, proactive=True, retrievable=True):
        return {
            "type": "AlexaInterface",
            "interface": "Alexa.ModeController",
            "instance": cls.instance,
            "version": "3",
            "properties": {
                "supported": [{"name": "mode"}],
                "retrievable": retrievable,
                "proactivelyReported": proactive,
                "nonControllable": False
            },
            "capabilityResources": {
                "friendlyNames": cls.friendly_names
            },
            "configuration": {
                "ordered": False,
                "supportedModes": [
                    {"value": value, "modeResources": {"friendlyNames": names}}
                    for value, names in cls.supported_modes
                ]
            }
        }

    @classmethod
    def get_properties(cls, status):
        return [{
            "namespace": "Alexa.ModeController",
            "instance": cls.instance,
            "name": "mode",
            "value": cls.current_mode(status)
        }]

    @classmethod
    def handle_directive(cls, name, payload, status, session):
        logger.info(f"{cls.instance}: Handling '{name}' {payload}")

        if name != "SetMode":
            raise DispatchError(f"{cls.instance}: Directive '{name}' not supported.")
        if not status.operation_status:
            raise NotInOperationError(f"{status.appliance_id} ist ausgeschaltet")

        mode = payload.get("mode", "")
        if mode not in [value for value, _ in cls.supported_modes]:
            raise DispatchError(f"{cls.instance}: unbekannter Modus '{mode}'")

        key, value = mode.split(".", 1)
        return cls.apply_mode(status, key, value)

    @staticmethod
    def current_mode(status):
        raise NotImplementedError

    @staticmethod
    def apply_mode(status, key, value):
        raise NotImplementedError


class WindVolumeController(ModeController):
    instance = "Eolia.WindVolume"
    friendly_names = [text_name("風量")]
    supported_modes = [
        ("WindVolume.0", [asset_name("Alexa.Setting.Auto"), text_name("おまかせ")]),
        ("WindVolume.2", [text_name("1")]),
        ("WindVolume.3", [text_name("2")]),
        ("WindVolume.4", [text_name("3")]),
        ("WindVolume.5", [text_name("4")]),
        ("AirFlow.powerful", [text_name("パワフル"), asset_name("Alexa.Value.Maximum")]),
        ("AirFlow.long", [text_name("ロング")]),
        ("AirFlow.quiet", [text_name("静か"), asset_name("Alexa.Value.Minimum")]),
    ]

    @staticmethod
    def current_mode(status):
        if status.air_flow != AIR_FLOW_NOT_SET:
            return f"AirFlow.{status.air_flow}"
        return f"WindVolume.{status.wind_volume}"

    @staticmethod
    def apply_mode(status, key, value):
        # Luftstrom und Windstärke schließen sich gegenseitig aus
        if key == "AirFlow":
            if status.air_flow == value:
                return False
            status.wind_volume = 0
            status.air_flow = value
            return True

        wind_volume = int(value)
        if status.wind_volume == wind_volume and status.air_flow == AIR_FLOW_NOT_SET:
            return False
        status.wind_volume = wind_volume
        status.air_flow = AIR_FLOW_NOT_SET
        return True


class WindDirectionController(ModeController):
    instance = "Eolia.WindDirection"
    # "風向" wird nicht erkannt
    friendly_names = [text_name("風向き")]
    supported_modes = [
        ("WindDirection.0", [asset_name("Alexa.Setting.Auto"), text_name("おまかせ")]),
        ("WindDirection.1", [text_name("↑ (1)"), text_name("1"), text_name("一番上")]),
        ("WindDirection.2", [text_name("↖ (2)"), text_name("2")]),
        ("WindDirection.3", [text_name("← (3)"), text_name("3"), text_name("真ん中"), text_name("中央")]),
        ("WindDirection.4", [text_name("↙ (4)"), text_name("4")]),
        ("WindDirection.5", [text_name("↓ (5)"), text_name("5"), text_name("一番下")]),
    ]

    @staticmethod
    def current_mode(status):
        return f"WindDirection.{status.wind_direction}"

    @staticmethod
    def apply_mode(status, key, value):
        wind_direction = int(value)
        if status.wind_direction == wind_direction:
            return False
        status.wind_direction = wind_direction
        return True


class WindDirectionHorizonController(ModeController):
    instance = "Eolia.WindDirectionHorizon"
    friendly_names = [text_name("水平風向き"), text_name("すいへいかざむき")]
    supported_modes = [
        ("WindDirectionHorizon.auto", [asset_name("Alexa.Setting.Auto"), text_name("おまかせ")]),
        ("WindDirectionHorizon.to_left", [text_name("↙ ↙ (1)"), text_name("1")]),
        ("WindDirectionHorizon.nearby_left", [text_name("↙ ↓ (2)"), text_name("2")]),
        ("WindDirectionHorizon.front", [text_name("↓ ↓ (3)"), text_name("3")]),
        ("WindDirectionHorizon.nearby_right", [text_name("↓ ↘ (4)"), text_name("4")]),
        ("WindDirectionHorizon.to_right", [text_name("↘ ↘ (5)"), text_name("5")]),
    ]

    @staticmethod
    def current_mode(status):
        return f"WindDirectionHorizon.{status.wind_direction_horizon}"

    @staticmethod
    def apply_mode(status, key, value):
        if status.wind_direction_horizon == value:
            return False
        status.wind_direction_horizon = value
        return True


class AiControlController(ModeController):
    instance = "Eolia.AiControl"
    friendly_names = [text_name("AIコントロール"), text_name("エーアイ")]
    supported_modes = [
        ("AiControl.off", [text_name("オフ")]),
        ("AiControl.comfortable", [text_name("快適")]),
        ("AiControl.comfortable_econavi", [text_name("快適エコナビ"), text_name("エコナビ")]),
    ]

    @staticmethod
    def current_mode(status):
        return f"AiControl.{status.ai_control}"

    @staticmethod
    def apply_mode(status, key, value):
        if status.ai_control == value:
            return False
        status.ai_control = value
        return True
