# eolia_session.py

import logging

from cleaning import CleaningScheduler
from eolia_client import EoliaClient
from status_store import StatusStore
from status_sync import StatusSynchronizer, local_now

logger = logging.getLogger(__name__)


class EoliaSession:
    """
    Alles, was eine Direktive braucht: Client, Store, Synchronizer, Reinigung.
    Wird vom Aufrufer einmal pro Cold Start gebaut, bei warmen Aufrufen
    wiederverwendet und nach einem AuthenticationError verworfen.
    """

    def __init__(self, config, client=None, store=None, clock=local_now):
        self.config = config
        self.clock = clock
        self.mode_policy = config.mode_policy
        self.store = store or StatusStore(config)

        if client is None:
            # Letztes Session-Token übernehmen, spart den Login
            client = EoliaClient(config.user_id, config.password,
                                 access_token=self.store.get_session_token(),
                                 base_url=config.base_url, timeout=config.http_timeout)
        self.client = client

        self.sync = StatusSynchronizer(self.client, self.store, config, clock=clock)
        self.cleaning = CleaningScheduler(self.sync, self.store, clock)
        logger.info("Eolia Session erstellt (Cache %s)",
                    "aktiv" if config.status_cache_enabled else "deaktiviert")

    def default_mode(self, temperature=None):
        return self.mode_policy.choose(self.clock(), temperature)
