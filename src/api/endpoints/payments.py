from typing import Optional, Union

from fastapi import APIRouter, Depends, Header, Query, Request
from pydantic import BaseModel, Field

from src.api.dependencies import get_payment_service
from src.integrations.policy.payment_service import PaymentRelayService
from src.utils.signature import SIGNATURE_HEADER

api = APIRouter()
payments_api = api


class PayRequest(BaseModel):
    phone: Optional[str] = Field(default=None, description="Customer phone, e.g. 07XXXXXXXX")
    amount: Optional[Union[float, str]] = Field(default=None, description="Amount in major units, e.g. 100")
    email: Optional[str] = None


@api.post("/pay", tags=["Payments"])
async def pay(body: Optional[PayRequest] = None, service: PaymentRelayService = Depends(get_payment_service)):
    """Start a mobile money charge and record its reference."""
    body = body or PayRequest()
    return await service.initiate_charge(body.phone, body.amount, body.email)


@api.get("/verify", tags=["Payments"])
async def verify(
    reference: Optional[str] = Query(default=None),
    service: PaymentRelayService = Depends(get_payment_service),
):
    """Ask the gateway for the current status of a charge."""
    return await service.verify_charge(reference)


@api.post("/webhook", tags=["Payments"])
async def webhook(
    request: Request,
    signature: Optional[str] = Header(default=None, alias=SIGNATURE_HEADER),
    service: PaymentRelayService = Depends(get_payment_service),
):
    """Gateway callback. The raw body is read before parsing so the signature covers the exact bytes sent."""
    body = await request.body()
    return service.handle_webhook(body, signature)


@api.get("/check", tags=["Payments"])
async def check(
    reference: Optional[str] = Query(default=None),
    service: PaymentRelayService = Depends(get_payment_service),
):
    return service.lookup(reference)
