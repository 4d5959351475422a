"""Decides whether a 401 means "credential expired" (refreshable) or not."""

import logging
import re
from typing import Iterable, Tuple

from ...config.constants import (
    DEFAULT_EXPIRY_ERROR_CODES,
    DEFAULT_EXPIRY_MARKERS,
    DEFAULT_NON_REFRESHABLE_MARKERS,
)
from ...core.value_objects import Unauthorized

logger = logging.getLogger(__name__)

_WWW_AUTH_ERROR = re.compile(r'error="?([A-Za-z_]+)"?')
_WWW_AUTH_DESCRIPTION = re.compile(r'error_description="([^"]*)"')


class ExpiryClassifier:
    """Classifies an ``Unauthorized`` outcome as refresh-eligible or terminal.

    Checks structured signals first: a backend error code, then an RFC 6750
    ``WWW-Authenticate`` challenge. Substring markers on the diagnostic text
    are only a fallback. A diagnostic that talks about a missing or malformed
    credential is never eligible.
    """

    def __init__(
        self,
        expiry_error_codes: Iterable[str] = DEFAULT_EXPIRY_ERROR_CODES,
        expiry_markers: Iterable[str] = DEFAULT_EXPIRY_MARKERS,
        non_refreshable_markers: Iterable[str] = DEFAULT_NON_REFRESHABLE_MARKERS,
    ):
        self._codes = frozenset(code.lower() for code in expiry_error_codes)
        self._markers: Tuple[str, ...] = tuple(m.lower() for m in expiry_markers)
        self._blockers: Tuple[str, ...] = tuple(m.lower() for m in non_refreshable_markers)

    def is_refresh_eligible(self, outcome: Unauthorized) -> bool:
        if outcome.error_code:
            eligible = outcome.error_code.lower() in self._codes
            logger.debug(f"Classified 401 by error code {outcome.error_code!r}: eligible={eligible}")
            return eligible

        if outcome.www_authenticate:
            challenge = self._classify_challenge(outcome.www_authenticate)
            if challenge is not None:
                return challenge

        return self._classify_text(outcome.diagnostic)

    def _classify_challenge(self, header: str):
        error = _WWW_AUTH_ERROR.search(header)
        if not error or error.group(1).lower() != "invalid_token":
            return None
        description = _WWW_AUTH_DESCRIPTION.search(header)
        if description:
            return "expired" in description.group(1).lower()
        return None

    def _classify_text(self, diagnostic: str) -> bool:
        text = (diagnostic or "").lower()
        if not text:
            return False
        if any(blocker in text for blocker in self._blockers):
            return False
        return any(marker in text for marker in self._markers)
