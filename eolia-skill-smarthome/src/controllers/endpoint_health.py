# controllers/endpoint_health.py

from .alexa_controller import AlexaController


class EndpointHealth(AlexaController):
    namespace = "Alexa.EndpointHealth"

    @staticmethod
    def get_capability(proactive=True, retrievable=True):
        return {
            "type": "AlexaInterface",
            "interface": "Alexa.EndpointHealth",
            "version": "3",
            "properties": {
                "supported": [{"name": "connectivity"}],
                "retrievable": retrievable,
                "proactivelyReported": proactive
            }
        }

    @staticmethod
    def get_properties(status):
        # Ein Status liegt vor, also ist das Gerät über die Cloud erreichbar
        return [{
            "namespace": "Alexa.EndpointHealth",
            "name": "connectivity",
            "value": {"value": "OK"}
        }]
