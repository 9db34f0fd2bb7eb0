"""Identity claims extracted from a verified bearer token.

Created per request by the credential verifier and discarded afterwards;
never persisted.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentityClaims:
    """Verified token payload.

    Attributes:
        user_id: Canonical text form of the user identifier.
        expires_at: Expiry instant (UTC) from the ``exp`` claim.
        issued_at: Issue instant (UTC) from the ``iat`` claim, if present.
        token_id: JWT ID (``jti``), if present.
    """

    user_id: str
    expires_at: datetime
    issued_at: datetime | None = None
    token_id: str | None = None
