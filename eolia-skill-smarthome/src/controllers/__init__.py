# controllers/__init__.py

from .thermostat_controller import ThermostatController
from .power_controller import PowerController
from .temperature_sensor import TemperatureSensor
from .endpoint_health import EndpointHealth
from .mode_controller import (
    WindVolumeController, WindDirectionController, WindDirectionHorizonController,
    AiControlController
)
from .toggle_controller import NanoexController
from .scene_controller import SceneController

__all__ = [
    "ThermostatController",
    "PowerController",
    "TemperatureSensor",
    "EndpointHealth",
    "WindVolumeController",
    "WindDirectionController",
    "WindDirectionHorizonController",
    "AiControlController",
    "NanoexController",
    "SceneController"
]
