# app/services/billing_service.py
"""Stripe billing: subscription initiation and webhook-driven status changes."""

import logging
from typing import Any

import stripe
from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.config import get_settings
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.billing import SubscriptionInit

logger = logging.getLogger(__name__)
settings = get_settings()


class StripeGateway:
    """
    Thin wrapper over the Stripe SDK calls we make.

    Kept separate so tests can swap in a fake without patching the
    `stripe` module.
    """

    def __init__(self, api_key: str | None, price_id: str | None):
        self.api_key = api_key
        self.price_id = price_id

    def _require_configured(self) -> None:
        if not self.api_key or not self.price_id:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Billing is not configured",
            )

    def retrieve_subscription(self, subscription_id: str) -> Any:
        self._require_configured()
        return stripe.Subscription.retrieve(subscription_id, api_key=self.api_key)

    def retrieve_invoice(self, invoice_id: str) -> Any:
        self._require_configured()
        return stripe.Invoice.retrieve(
            invoice_id,
            expand=["payment_intent"],
            api_key=self.api_key,
        )

    def create_customer(self, email: str, name: str) -> Any:
        self._require_configured()
        return stripe.Customer.create(email=email, name=name, api_key=self.api_key)

    def create_subscription(self, customer_id: str) -> Any:
        self._require_configured()
        return stripe.Subscription.create(
            customer=customer_id,
            items=[{"price": self.price_id}],
            payment_behavior="default_incomplete",
            expand=["latest_invoice.payment_intent"],
            api_key=self.api_key,
        )


def _client_secret(invoice: Any) -> str | None:
    """Pull payment_intent.client_secret out of an (expanded) invoice."""
    if not invoice or isinstance(invoice, str):
        return None
    payment_intent = invoice.get("payment_intent")
    if not payment_intent or isinstance(payment_intent, str):
        return None
    return payment_intent.get("client_secret")


class BillingService:
    """
    Orchestrates Stripe subscriptions for users.

    Initiation stores the customer/subscription references but does not
    change `subscription_status`; that only happens from webhook events.
    """

    def __init__(self, repo: UserRepository, gateway: StripeGateway):
        self.repo = repo
        self.gateway = gateway

    def create_subscription(self, session: Session, user: User) -> SubscriptionInit:
        """
        Idempotently start (or resume) the user's subscription.

        Flow:
          1. Stored subscription id => retrieve it and its latest invoice,
             return the same subscription's client secret.
          2. Otherwise require an email, create customer + subscription,
             persist both ids on the user.

        Raises:
            HTTPException(400): user has no email on file.
            HTTPException(502): Stripe rejected a call.
            HTTPException(503): Stripe keys are missing.
        """
        try:
            if user.stripe_subscription_id:
                subscription = self.gateway.retrieve_subscription(user.stripe_subscription_id)
                latest_invoice = subscription.get("latest_invoice")
                if isinstance(latest_invoice, str):
                    latest_invoice = self.gateway.retrieve_invoice(latest_invoice)

                return SubscriptionInit(
                    subscription_id=subscription["id"],
                    client_secret=_client_secret(latest_invoice),
                )

            if not user.email:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="No user email on file",
                )

            name = f"{user.first_name or ''} {user.last_name or ''}".strip()
            customer = self.gateway.create_customer(email=user.email, name=name)
            subscription = self.gateway.create_subscription(customer["id"])

        except stripe.StripeError as e:
            logger.error(f"Stripe error creating subscription for user {user.id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Payment processing error: {e.user_message or str(e)}",
            )

        user.stripe_customer_id = customer["id"]
        user.stripe_subscription_id = subscription["id"]
        self.repo.update(session, user)
        logger.info(f"Created subscription {subscription['id']} for user {user.id}")

        return SubscriptionInit(
            subscription_id=subscription["id"],
            client_secret=_client_secret(subscription.get("latest_invoice")),
        )

    # ----- Webhook events -----

    def handle_event(self, session: Session, event: dict[str, Any]) -> None:
        """
        Apply a verified Stripe event.

        - invoice.payment_succeeded      -> subscription_status = premium
        - customer.subscription.deleted  -> free, subscription ref cleared
        Other event types are logged and ignored.
        """
        event_type = event["type"]
        data = event["data"]["object"]
        logger.info(f"Received Stripe webhook: {event_type}")

        if event_type == "invoice.payment_succeeded":
            self._set_status(session, data.get("subscription"), "premium")
        elif event_type == "customer.subscription.deleted":
            self._set_status(session, data.get("id"), "free", clear_subscription=True)
        else:
            logger.info(f"Unhandled event type: {event_type}")

    def _set_status(
        self,
        session: Session,
        subscription_id: str | None,
        new_status: str,
        clear_subscription: bool = False,
    ) -> None:
        if not subscription_id:
            return

        user = self.repo.get_by_subscription_id(session, subscription_id)
        if user is None:
            logger.warning(f"No user found for Stripe subscription {subscription_id}")
            return

        user.subscription_status = new_status
        if clear_subscription:
            user.stripe_subscription_id = None
        self.repo.update(session, user)
        logger.info(f"User {user.id} subscription status -> {new_status}")


def construct_event(payload: bytes, sig_header: str | None) -> dict[str, Any]:
    """
    Verify a webhook payload with the configured signing secret.

    Raises:
        HTTPException(503): webhook secret missing.
        HTTPException(400): bad payload or signature.
    """
    if not settings.STRIPE_WEBHOOK_SECRET:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Billing is not configured",
        )
    try:
        return stripe.Webhook.construct_event(
            payload, sig_header, settings.STRIPE_WEBHOOK_SECRET
        )
    except ValueError:
        logger.error("Invalid webhook payload")
        raise HTTPException(status_code=400, detail="Invalid payload")
    except stripe.SignatureVerificationError:
        logger.error("Invalid webhook signature")
        raise HTTPException(status_code=400, detail="Invalid signature")
