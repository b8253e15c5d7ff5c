# app/schemas/billing.py
from sqlmodel import SQLModel


class SubscriptionInit(SQLModel):
    """
    Returned by POST /create-subscription.

    client_secret is the payment intent secret the browser uses to
    confirm the first payment; it can be None once the invoice is paid.
    """

    subscription_id: str
    client_secret: str | None = None


class WebhookAck(SQLModel):
    status: str = "success"
