"""FastAPI routes for the Storefront — session, catalogue, cart, checkout and admin."""

import os

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from protean.exceptions import InvalidOperationError, ValidationError

from catalogue.filtering import CATEGORY_ALL, CATEGORY_LABELS
from identity.session.identity import to_payload
from identity.session.manager import SubmissionOutcome, SubmissionStatus
from storefront.api.schemas import (
    AddToCartRequest,
    AdminSignInRequest,
    BuyerIdentityRequest,
    CartResponse,
    CatalogueResponse,
    CategoryResponse,
    CheckoutResponse,
    CreateProductRequest,
    ProductResponse,
    SessionResponse,
    StatusResponse,
    UpdateCartQuantityRequest,
    UpdateProductRequest,
)
from shared.logging import add_context, clear_context
from storefront.registry import get_registry
from storefront.session import StorefrontSession

SESSION_COOKIE = os.environ.get("STOREFRONT_SESSION_COOKIE", "storefront_session")


def current_session(request: Request, response: Response) -> StorefrontSession:
    """Resolve the caller's storefront session from its cookie."""
    cookie = request.cookies.get(SESSION_COOKIE)
    session = get_registry().open(cookie)
    clear_context()
    add_context(session_id=session.session_id)
    if session.session_id != cookie:
        response.set_cookie(SESSION_COOKIE, session.session_id, httponly=True, samesite="lax")
    return session


def _session_response(session: StorefrontSession) -> SessionResponse:
    actor = session.identity.identity
    return SessionResponse(
        state=session.identity.state.value,
        identity=to_payload(actor) if actor is not None else None,
    )


def _forbidden(exc: InvalidOperationError) -> HTTPException:
    return HTTPException(status_code=403, detail=str(exc))


def _unprocessable(exc: ValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail={"errors": exc.messages})


_OUTCOME_STATUS_CODES = {
    SubmissionStatus.INVALID: 422,
    SubmissionStatus.REJECTED: 401,
    SubmissionStatus.FAILED: 503,
    SubmissionStatus.BUSY: 409,
}


def _outcome_response(session: StorefrontSession, outcome: SubmissionOutcome) -> SessionResponse:
    if outcome.succeeded:
        return _session_response(session)
    if outcome.status == SubmissionStatus.INVALID:
        raise HTTPException(status_code=422, detail={"errors": outcome.field_errors})
    raise HTTPException(status_code=_OUTCOME_STATUS_CODES[outcome.status], detail={"message": outcome.message})


# ---------------------------------------------------------------------------
# Session Router
# ---------------------------------------------------------------------------
session_router = APIRouter(prefix="/session", tags=["session"])


@session_router.get("", response_model=SessionResponse)
async def get_session(session: StorefrontSession = Depends(current_session)) -> SessionResponse:
    return _session_response(session)


@session_router.post("/buyer", response_model=SessionResponse)
async def identify_buyer(
    body: BuyerIdentityRequest, session: StorefrontSession = Depends(current_session)
) -> SessionResponse:
    outcome = session.identity.submit_buyer(body.name, body.address)
    return _outcome_response(session, outcome)


@session_router.post("/admin", response_model=SessionResponse)
async def sign_in_admin(
    body: AdminSignInRequest, session: StorefrontSession = Depends(current_session)
) -> SessionResponse:
    outcome = session.identity.submit_admin(body.username, body.password)
    return _outcome_response(session, outcome)


# ---------------------------------------------------------------------------
# Catalogue Router
# ---------------------------------------------------------------------------
catalogue_router = APIRouter(prefix="/catalogue", tags=["catalogue"])


@catalogue_router.get("", response_model=CatalogueResponse)
async def browse_catalogue(
    search: str = "",
    category: str = CATEGORY_ALL,
    session: StorefrontSession = Depends(current_session),
) -> CatalogueResponse:
    try:
        products = session.browse(search, category)
    except InvalidOperationError as exc:
        raise _forbidden(exc) from exc
    return CatalogueResponse(products=[ProductResponse.from_product(p) for p in products], count=len(products))


@catalogue_router.get("/categories", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    return [CategoryResponse(key=key, label=label) for key, label in CATEGORY_LABELS.items()]


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def view_cart(session: StorefrontSession = Depends(current_session)) -> CartResponse:
    try:
        session.identity.require_identified()
    except InvalidOperationError as exc:
        raise _forbidden(exc) from exc
    return CartResponse.from_ledger(session.ledger)


@cart_router.post("/items", status_code=201, response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, session: StorefrontSession = Depends(current_session)) -> CartResponse:
    try:
        ledger = session.add_to_cart(body.product_id, body.quantity)
    except InvalidOperationError as exc:
        raise _forbidden(exc) from exc
    except ValidationError as exc:
        raise _unprocessable(exc) from exc
    return CartResponse.from_ledger(ledger)


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_quantity(
    product_id: str, body: UpdateCartQuantityRequest, session: StorefrontSession = Depends(current_session)
) -> CartResponse:
    try:
        ledger = session.update_quantity(product_id, body.quantity)
    except InvalidOperationError as exc:
        raise _forbidden(exc) from exc
    return CartResponse.from_ledger(ledger)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(product_id: str, session: StorefrontSession = Depends(current_session)) -> CartResponse:
    try:
        ledger = session.remove_from_cart(product_id)
    except InvalidOperationError as exc:
        raise _forbidden(exc) from exc
    return CartResponse.from_ledger(ledger)


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", response_model=CheckoutResponse)
async def place_order(session: StorefrontSession = Depends(current_session)) -> CheckoutResponse:
    receipt = session.checkout()
    if receipt is None:
        raise HTTPException(status_code=409, detail="Checkout requires a buyer and a non-empty cart")
    return CheckoutResponse(
        message_id=receipt.get("message_id"),
        status=receipt["status"],
        url=receipt.get("url"),
    )


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin/products", tags=["admin"])


def _mutation_failed(reason: str | None) -> HTTPException:
    return HTTPException(status_code=502, detail=reason or "Catalogue update failed")


@admin_router.get("", response_model=list[ProductResponse])
async def list_admin_products(session: StorefrontSession = Depends(current_session)) -> list[ProductResponse]:
    try:
        products = session.admin_products()
    except InvalidOperationError as exc:
        raise _forbidden(exc) from exc
    return [ProductResponse.from_product(p) for p in products]


@admin_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(
    body: CreateProductRequest, session: StorefrontSession = Depends(current_session)
) -> ProductResponse:
    try:
        result = session.admin_add_product(body.model_dump())
    except InvalidOperationError as exc:
        raise _forbidden(exc) from exc
    if not result.success:
        raise _mutation_failed(result.failure_reason)
    return ProductResponse.from_product(result.product)


@admin_router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, session: StorefrontSession = Depends(current_session)
) -> ProductResponse:
    try:
        result = session.admin_update_product(product_id, body.model_dump(exclude_none=True))
    except InvalidOperationError as exc:
        raise _forbidden(exc) from exc
    if not result.success:
        raise _mutation_failed(result.failure_reason)
    return ProductResponse.from_product(result.product)


@admin_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, session: StorefrontSession = Depends(current_session)) -> StatusResponse:
    try:
        result = session.admin_delete_product(product_id)
    except InvalidOperationError as exc:
        raise _forbidden(exc) from exc
    if not result.success:
        raise _mutation_failed(result.failure_reason)
    return StatusResponse(status="deleted")
