# controllers/alexa_controller.py

from abc import ABC, abstractmethod


def text_name(text, locale="ja-JP"):
    return {"@type": "text", "value": {"text": text, "locale": locale}}


def asset_name(asset_id):
    return {"@type": "asset", "value": {"assetId": asset_id}}


class AlexaController(ABC):
    instance = None

    @property
    @abstractmethod
    def namespace(self):
        pass

    @staticmethod
    @abstractmethod
    def get_capability(proactive=True, retrievable=True):
        """Gibt das Discovery-JSON zurück."""
        pass

    @staticmethod
    @abstractmethod
    def get_properties(status):
        """Gibt die Liste der Properties für StateReports zurück."""
        pass

    @staticmethod
    def handle_directive(name, payload, status, session):
        """
        Wendet eine Direktive auf den Status an.
        Gibt True zurück, wenn sich der Status geändert hat und geschrieben werden muss.
        """
        return False
