from storefront.api.routes import (
    admin_router,
    cart_router,
    catalogue_router,
    checkout_router,
    session_router,
)

__all__ = ["session_router", "catalogue_router", "cart_router", "checkout_router", "admin_router"]
