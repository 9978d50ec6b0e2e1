"""Identity bounded context — who is using the storefront.

Owns the Buyer/Admin session identity variants, the session identity
manager, and the administrator accounts the admin sign-in checks against.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging(log_file_prefix="storefront")

logger = get_logger(__name__)

identity = Domain(name="identity")
