"""Catalogue bounded context — the products offered by the store.

Owns the Product aggregate, the administrator maintenance commands, the
catalogue store used by the storefront, and the client-side catalogue filter.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_file_prefix="storefront")

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
catalogue = Domain(name="catalogue")
