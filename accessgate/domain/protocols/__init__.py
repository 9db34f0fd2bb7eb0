"""Domain protocols (ports).

Infrastructure adapters implement these structurally (PEP 544); nothing
inherits from them.
"""

from accessgate.domain.protocols.authorization_protocol import AuthorizationProtocol
from accessgate.domain.protocols.logger_protocol import LoggerProtocol
from accessgate.domain.protocols.policy_store_protocol import PolicyStoreProtocol
from accessgate.domain.protocols.token_verification_protocol import (
    TokenVerificationProtocol,
)

__all__ = [
    "AuthorizationProtocol",
    "LoggerProtocol",
    "PolicyStoreProtocol",
    "TokenVerificationProtocol",
]
