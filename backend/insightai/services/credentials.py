"""
API key resolution and selection for the generative model service.
"""
import logging
from typing import Optional

from insightai.constants import PLACEHOLDER_API_KEYS

logger = logging.getLogger("insightai.services.credentials")

_PLACEHOLDERS = {key.lower() for key in PLACEHOLDER_API_KEYS}


def is_usable_key(api_key: Optional[str]) -> bool:
    """Return True if the key is non-empty and not a placeholder."""
    if not api_key or not api_key.strip():
        return False
    return api_key.strip().lower() not in _PLACEHOLDERS


class CredentialManager:
    """
    Holds the configured API key and any key selected during the session.

    Selecting a key is optimistic: ``open_select_key`` marks the selection
    as made as soon as the flow completes, even when no key came back, since
    the hosting flow gives no confirmation. A user who cancels the flow may
    therefore appear connected until the first call fails.
    """

    def __init__(self, api_key: Optional[str] = None):
        self._configured_key = api_key
        self._selected_key: Optional[str] = None
        self._selected = False
        self._stale = False

    @property
    def configured(self) -> bool:
        return is_usable_key(self._configured_key)

    @property
    def _active_configured_key(self) -> Optional[str]:
        # A configured key reported stale stays unused until a new selection
        return None if self._stale else self._configured_key

    def resolve(self) -> Optional[str]:
        """
        Get the key to use for the next call.

        Returns:
            The session-selected key if usable, else the configured key if
            usable and not reported stale, else None
        """
        for candidate in (self._selected_key, self._active_configured_key):
            if is_usable_key(candidate):
                return candidate.strip()
        return None

    async def has_selected_api_key(self) -> bool:
        return self._selected or is_usable_key(self._active_configured_key)

    async def open_select_key(self, api_key: Optional[str] = None) -> None:
        if api_key is not None:
            self._selected_key = api_key
        self._selected = True
        self._stale = False
        logger.info("API key selection completed")

    def reset_selection(self) -> None:
        """Forget the selection after the current key was reported stale."""
        self._selected_key = None
        self._selected = False
        self._stale = True
        logger.info("API key selection reset")
