"""
==============================================================================
Security Module - Admin Code Verification
==============================================================================

Shared-secret gating for catalog writes and image uploads.

The storefront has no user accounts: every write carries the admin code,
which is compared against the configured value before anything else about
the request is looked at.

==============================================================================
"""

from __future__ import annotations

import hmac
import logging
from typing import Optional

from storefront.core.exceptions import invalid_admin_code


# Module logger
logger = logging.getLogger(__name__)


class AdminGate:
    """
    Verifies the shared admin code.

    Attributes:
        _admin_code: Configured secret

    Example:
        >>> gate = AdminGate("1234")
        >>> gate.is_valid("1234")
        True
        >>> gate.verify("0000")  # raises AuthorizationError
    """

    def __init__(self, admin_code: str) -> None:
        self._admin_code = admin_code

    def is_valid(self, code: Optional[str]) -> bool:
        """Constant-time comparison of a presented code."""
        if not isinstance(code, str):
            return False
        return hmac.compare_digest(code.encode("utf-8"), self._admin_code.encode("utf-8"))

    def verify(self, code: Optional[str]) -> None:
        """
        Raise AuthorizationError unless the code matches.

        Args:
            code: Code presented by the caller (may be missing)
        """
        if not self.is_valid(code):
            logger.warning("🔒 Rejected write with incorrect admin code")
            raise invalid_admin_code()
