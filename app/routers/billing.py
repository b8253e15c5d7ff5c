# app/routers/billing.py
from fastapi import APIRouter, Depends, Header, Request
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool

from app.core.auth import require_auth
from app.core.config import get_settings
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.billing import SubscriptionInit, WebhookAck
from app.services.billing_service import BillingService, StripeGateway, construct_event

settings = get_settings()

router = APIRouter(tags=["Billing"])

service = BillingService(
    UserRepository(),
    StripeGateway(settings.STRIPE_SECRET_KEY, settings.STRIPE_PRICE_ID),
)


@router.post("/create-subscription", response_model=SubscriptionInit)
def create_subscription(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Start the premium subscription, or resume the one already stored.

    Returns the payment intent client secret for the browser to confirm.
    The user's status turns "premium" only after Stripe reports payment.
    """
    return service.create_subscription(session, current_user)


@router.post("/stripe/webhook", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
    session: Session = Depends(get_session),
):
    """
    Stripe webhook endpoint (no bearer token; verified by signature).

    Async only to read the raw body for signature checks; the DB work
    runs in the threadpool like the sync routes.
    """
    payload = await request.body()
    event = construct_event(payload, stripe_signature)
    await run_in_threadpool(service.handle_event, session, event)
    return WebhookAck()
