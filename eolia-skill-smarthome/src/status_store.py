# status_store.py

import logging
from datetime import datetime
from decimal import Decimal

import boto3

from eolia_status import EoliaStatus

logger = logging.getLogger(__name__)


def float_to_decimal(obj):
    """Konvertiert Floats/Dicts rekursiv für DynamoDB."""
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: float_to_decimal(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [float_to_decimal(i) for i in obj]
    return obj


class StatusStore:
    """
    Zugriff auf die drei DynamoDB-Tabellen:
    Status je Gerät, Tokens (Session + Operation-Token je Gerät) und letzte Reinigung.
    Jedes get/put ist für sich atomar, Transaktionen über mehrere Items gibt es nicht.
    """

    def __init__(self, config, dynamodb=None):
        self.session_token_key = config.session_token_key
        dynamodb = dynamodb or boto3.resource("dynamodb")
        self.status_table = dynamodb.Table(config.status_table)
        self.token_table = dynamodb.Table(config.token_table)
        self.cleaning_table = dynamodb.Table(config.cleaning_table)

    # --- Status ---

    def get_status(self, appliance_id):
        """Gibt (EoliaStatus, Zeitstempel) zurück oder None."""
        item = self.status_table.get_item(Key={"id": appliance_id}).get("Item")
        if not item:
            return None
        return EoliaStatus(item["status"]), datetime.fromisoformat(item["timestamp"])

    def put_status(self, status, timestamp):
        self.status_table.put_item(Item={
            "id": status.appliance_id,
            "timestamp": timestamp.isoformat(),
            "status": float_to_decimal(status.to_dict())
        })

    # --- Tokens ---

    def get_session_token(self):
        return self._get_token(self.session_token_key)

    def put_session_token(self, token, timestamp):
        self._put_token(self.session_token_key, token, timestamp)

    def get_operation_token(self, appliance_id):
        return self._get_token(appliance_id)

    def put_operation_token(self, appliance_id, token, timestamp):
        self._put_token(appliance_id, token, timestamp)

    def _get_token(self, key):
        item = self.token_table.get_item(Key={"id": key}).get("Item")
        return item.get("token") if item else None

    def _put_token(self, key, token, timestamp):
        self.token_table.put_item(Item={
            "id": key,
            "timestamp": timestamp.isoformat(),
            "token": token
        })

    # --- Reinigung ---

    def get_last_cleaning(self, appliance_id):
        item = self.cleaning_table.get_item(Key={"id": appliance_id}).get("Item")
        if not item:
            return None
        return datetime.fromisoformat(item["lastCleaning"])

    def put_last_cleaning(self, appliance_id, timestamp):
        self.cleaning_table.put_item(Item={"id": appliance_id, "lastCleaning": timestamp.isoformat()})
