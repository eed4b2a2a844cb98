"""Smart Wardrobe app bootstrap."""

import logging
from pathlib import Path
from typing import Optional

from memory.accounts import AccountService, User
from tools.capabilities import CapabilitySet
from tools.gemini_capabilities import build_gemini_capabilities
from tools.kv_store import JSONFileKeyValueStore, KeyValueStore, SQLiteKeyValueStore
from wardrobe_app.config import WardrobeConfig
from wardrobe_app.logging_config import configure_logging, get_logger, log_event
from wardrobe_app.session import WardrobeSession

LOGGER = get_logger(__name__)


class SmartWardrobeApp:
    """Wires together storage, accounts and the generative capabilities."""

    def __init__(
        self,
        config: WardrobeConfig | None = None,
        backend: KeyValueStore | None = None,
        capabilities: CapabilitySet | None = None,
    ) -> None:
        self.config = config or WardrobeConfig.from_env()
        configure_logging(self.config.log_level, self.config.environment)

        self.backend = backend or self._build_backend()
        self.capabilities = capabilities or self._build_capabilities()
        self.accounts = AccountService(self.backend)
        self._session: Optional[WardrobeSession] = None

    def _build_backend(self) -> KeyValueStore:
        if self.config.storage_backend.lower() == "sqlite":
            return SQLiteKeyValueStore(self.config.storage_path or "data/wardrobe.db")
        return JSONFileKeyValueStore(Path(self.config.storage_path or "data/wardrobe"))

    def _build_capabilities(self) -> CapabilitySet:
        if not self.config.api_key:
            LOGGER.warning("GOOGLE_API_KEY is not set; Gemini calls will fail until it is configured")
        return build_gemini_capabilities(self.config)

    def _open(self, user: User) -> WardrobeSession:
        self._session = WardrobeSession(user.username, self.backend, self.capabilities, self.config)
        log_event(LOGGER, logging.INFO, "wardrobe_session_opened", item_count=len(self._session.store))
        return self._session

    def register(self, username: str, password: str) -> WardrobeSession:
        return self._open(self.accounts.register(username, password))

    def login(self, username: str, password: str) -> WardrobeSession:
        return self._open(self.accounts.login(username, password))

    def logout(self) -> None:
        self.accounts.logout()
        self._session = None

    def current_session(self) -> Optional[WardrobeSession]:
        """Return the session for the signed-in user, restoring it if needed."""

        user = self.accounts.current_user()
        if user is None:
            self._session = None
            return None
        if self._session is None or self._session.username != user.username:
            return self._open(user)
        return self._session


__all__ = ["SmartWardrobeApp"]
