# controllers/temperature_sensor.py

from .alexa_controller import AlexaController


class TemperatureSensor(AlexaController):
    namespace = "Alexa.TemperatureSensor"

    @staticmethod
    def get_capability(proactive=True, retrievable=True):
        return {
            "type": "AlexaInterface",
            "interface": "Alexa.TemperatureSensor",
            "version": "3",
            "properties": {
                "supported": [{"name": "temperature"}],
                # Sensoren sind fast immer retrievable (Zustand abfragbar)
                "retrievable": retrievable,
                "proactivelyReported": proactive
            }
        }

    @staticmethod
    def get_properties(status):
        # Raumtemperatur; ohne Messwert keine Property
        if status.inside_temp is None:
            return []

        return [{
            "namespace": "Alexa.TemperatureSensor",
            "name": "temperature",
            "value": {
                "value": status.inside_temp,
                "scale": "CELSIUS"
            }
        }]
