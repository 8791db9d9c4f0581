# status_sync.py

import logging
from datetime import datetime

from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


def local_now():
    return datetime.now().astimezone()


def persist(label, put, *args):
    """Best effort: Fehler werden nur geloggt. Gibt zurück, ob gespeichert wurde."""
    try:
        put(*args)
    except (BotoCoreError, ClientError) as e:
        logger.warning(f"{label} konnte nicht gespeichert werden: {e}")
        return False
    return True


class StatusSynchronizer:
    """
    Entscheidet, wann der gecachte Status gilt und wann live gelesen wird,
    und schreibt Änderungen über die Eolia API zurück.
    """

    def __init__(self, client, store, config, clock=local_now):
        self.client = client
        self.store = store
        self.cache_enabled = config.status_cache_enabled
        self.token_lifetime = config.operation_token_lifetime
        self.clock = clock
        # Das Token, mit dem der Client gestartet ist, liegt bereits im Store
        self.stored_session_token = client.access_token

    def get_status(self, appliance_id):
        """Gibt (EoliaStatus, Alter in Millisekunden) zurück."""
        if self.cache_enabled:
            cached = self.store.get_status(appliance_id)
            if cached:
                status, timestamp = cached
                age = (self.clock() - timestamp).total_seconds()
                if status.operation_token and 0 <= age < self.token_lifetime:
                    logger.info(f"Status {appliance_id} aus dem Cache ({age:.1f}s alt)")
                    return status, int(age * 1000)

        # Nur Schreibvorgänge aktualisieren den Cache
        logger.info(f"Status {appliance_id} live von der Eolia API")
        status = self.client.get_device_status(appliance_id)
        self.persist_session_token()
        return status, 0

    def update_status(self, status):
        """Schreibt den Status und gibt den von der API bestätigten Status zurück."""
        operation = self.client.create_operation(status)

        # Das letzte Token zuerst lesen, erst dann senden
        token = self.store.get_operation_token(status.appliance_id)
        if token:
            operation["operation_token"] = token

        updated = self.client.set_device_status(operation)
        if not updated.appliance_id:
            updated.appliance_id = status.appliance_id

        now = self.clock()
        persist("Status", self.store.put_status, updated, now)
        if updated.operation_token:
            persist("Operation-Token", self.store.put_operation_token,
                    updated.appliance_id, updated.operation_token, now)
        self.persist_session_token(force=True)

        return updated

    def persist_session_token(self, force=False):
        """Speichert das Session-Token nach einem Schreibvorgang oder einem Re-Login."""
        token = self.client.access_token
        if not token or (token == self.stored_session_token and not force):
            return
        if persist("Session-Token", self.store.put_session_token, token, self.clock()):
            self.stored_session_token = token
