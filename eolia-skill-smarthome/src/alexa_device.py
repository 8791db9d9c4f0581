# alexa_device.py

import logging
from collections import namedtuple

from controllers import (
    ThermostatController, PowerController, TemperatureSensor, EndpointHealth,
    WindVolumeController, WindDirectionController, WindDirectionHorizonController,
    AiControlController, NanoexController, SceneController
)
from eolia_errors import DispatchError
from eolia_status import CLEANING, NANOEX_CLEANING

logger = logging.getLogger(__name__)

MANUFACTURER_NAME = "Eolia Client"

SETTING = "Setting"

# Unter-Endpunkt -> Reinigungsmodus
SCENE_MODES = {
    "Cleaning": CLEANING,
    "NanoexCleaning": NANOEX_CLEANING,
}

ENDPOINT_CONTROLLERS = {
    None: [ThermostatController, TemperatureSensor, PowerController, EndpointHealth],
    SETTING: [
        WindVolumeController, WindDirectionController, WindDirectionHorizonController,
        AiControlController, NanoexController, EndpointHealth
    ],
    "Cleaning": [SceneController],
    "NanoexCleaning": [SceneController],
}

EndpointRef = namedtuple("EndpointRef", ["appliance_id", "sub_endpoint"])


def parse_endpoint_id(endpoint_id):
    """`<applianceId>` oder `<applianceId>@<Unter-Endpunkt>` -> EndpointRef."""
    appliance_id, separator, sub_endpoint = (endpoint_id or "").partition("@")
    if not appliance_id:
        raise DispatchError(f"Ungültige endpointId: {endpoint_id!r}")

    sub_endpoint = sub_endpoint if separator else None
    if sub_endpoint not in ENDPOINT_CONTROLLERS:
        raise DispatchError(f"Unbekannter Unter-Endpunkt: {sub_endpoint}")
    return EndpointRef(appliance_id, sub_endpoint)


def format_endpoint_id(appliance_id, sub_endpoint=None):
    return f"{appliance_id}@{sub_endpoint}" if sub_endpoint else appliance_id


class AlexaDevice:
    def __init__(self, endpoint, session):
        self.endpoint = endpoint
        self.endpoint_id = format_endpoint_id(endpoint.appliance_id, endpoint.sub_endpoint)
        self.session = session
        self.controllers = ENDPOINT_CONTROLLERS[endpoint.sub_endpoint]

    @property
    def is_scene(self):
        return self.endpoint.sub_endpoint in SCENE_MODES

    def find_controller(self, namespace, instance=None):
        for controller in self.controllers:
            if controller.namespace == namespace and controller.instance in (None, instance):
                return controller
        raise DispatchError(f"{self.endpoint_id} unterstützt {namespace} ({instance}) nicht")

    def read_status(self):
        """Gibt (EoliaStatus, Unsicherheit in ms) zurück."""
        return self.session.sync.get_status(self.endpoint.appliance_id)

    def execute_directive(self, directive):
        """
        Sucht den passenden Controller, wendet die Direktive auf den aktuellen
        Status an und schreibt ihn zurück, falls er sich geändert hat.
        """
        header = directive.get("header", {})
        payload = directive.get("payload", {})
        controller = self.find_controller(header.get("namespace"), header.get("instance"))

        status, uncertainty = self.read_status()
        if controller.handle_directive(header.get("name"), payload, status, self.session):
            # Der von der API bestätigte Status ist die Quelle für die Antwort
            status = self.session.sync.update_status(status)
            uncertainty = 0
        else:
            logger.info(f"{self.endpoint_id}: keine Änderung, nur Antwort")

        return status, uncertainty

    def execute_scene(self, name):
        cleaning_mode = SCENE_MODES[self.endpoint.sub_endpoint]
        return SceneController.handle_scene(name, self.endpoint.appliance_id, cleaning_mode, self.session)

    def get_all_properties(self, status, uncertainty=0):
        all_props = []
        for controller in self.controllers:
            for prop in controller.get_properties(status):
                all_props.append(dict(prop, uncertainty=uncertainty))
        return all_props

    @staticmethod
    def get_discovery_capabilities(controllers):
        """Erstellt die Liste aller Capabilities für die Discovery."""
        caps = [controller.get_capability() for controller in controllers]
        # Jedes Smart Home Gerät braucht das Basis-Interface
        caps.append({
            "type": "AlexaInterface",
            "interface": "Alexa",
            "version": "3"
        })
        return caps

    @staticmethod
    def get_discovery_payloads(device):
        """Erzeugt die Endpunkte einer Klimaanlage: Thermostat, Detail-Einstellungen, Reinigung."""
        description = f"{device.product_code} {device.product_name}".strip()
        attributes = {
            "manufacturer": "Panasonic",
            "model": device.product_code or "Eolia"
        }

        def endpoint(sub_endpoint, friendly_name, suffix, categories):
            return {
                "endpointId": format_endpoint_id(device.appliance_id, sub_endpoint),
                "manufacturerName": MANUFACTURER_NAME,
                "friendlyName": friendly_name,
                "description": f"{description} {suffix}".strip(),
                "displayCategories": categories,
                "additionalAttributes": attributes,
                "capabilities": AlexaDevice.get_discovery_capabilities(ENDPOINT_CONTROLLERS[sub_endpoint]),
                "cookie": {}
            }

        return [
            endpoint(None, device.nickname, "", ["THERMOSTAT", "TEMPERATURE_SENSOR"]),
            # リビングエアコン -> 詳細設定リビングエアコン (über die Gerätegruppe ansprechbar)
            endpoint(SETTING, "詳細設定" + device.nickname, "の詳細設定", ["OTHER"]),
            endpoint("Cleaning", device.nickname + "おそうじ", "おそうじ機能", ["SCENE_TRIGGER"]),
            endpoint("NanoexCleaning", device.nickname + "おでかけクリーン", "おでかけクリーン機能",
                     ["SCENE_TRIGGER"]),
        ]
