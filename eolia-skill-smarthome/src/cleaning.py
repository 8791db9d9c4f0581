# cleaning.py

import logging

from eolia_status import AUTO, CLEANING_MODES
from status_sync import persist

logger = logging.getLogger(__name__)


class CleaningScheduler:
    """Reinigung (おそうじ / おでかけクリーン) höchstens einmal pro Kalendertag."""

    def __init__(self, sync, store, clock):
        self.sync = sync
        self.store = store
        self.clock = clock

    def activate(self, appliance_id, cleaning_mode):
        """Startet die Reinigung. Gibt False zurück, wenn nichts geschrieben wurde."""
        if cleaning_mode not in CLEANING_MODES:
            raise ValueError(f"Kein Reinigungsmodus: {cleaning_mode}")

        status, _ = self.sync.get_status(appliance_id)
        if status.is_cleaning:
            logger.info(f"{appliance_id}: Reinigung läuft bereits ({status.operation_mode})")
            return False

        now = self.clock()
        last_cleaning = self.store.get_last_cleaning(appliance_id)
        if last_cleaning and last_cleaning.date() == now.date():
            logger.info(f"{appliance_id}: heute bereits gereinigt ({last_cleaning.isoformat()})")
            return False

        status.operation_status = False
        status.operation_mode = cleaning_mode
        self.sync.update_status(status)

        # Die Reinigung läuft bereits, der Eintrag ist best effort
        persist("Letzte Reinigung", self.store.put_last_cleaning, appliance_id, now)
        logger.info(f"{appliance_id}: {cleaning_mode} gestartet")
        return True

    def deactivate(self, appliance_id):
        status, _ = self.sync.get_status(appliance_id)
        if not status.is_cleaning:
            return False

        # Ohne Moduswechsel läuft die Reinigung am Gerät weiter
        status.operation_mode = AUTO
        status.operation_status = False
        self.sync.update_status(status)
        logger.info(f"{appliance_id}: Reinigung beendet")
        return True
