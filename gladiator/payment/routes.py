"""
gladiator/payment/routes.py

Payment Routes
- Wallet instructions and QR data for paying a professional
- Recording a client's payment intent
- Listing the caller's sent and received payment intents
"""

from uuid import UUID

from fastapi import APIRouter, Request, status

from gladiator.core.dependencies import CurrentUserDep, StoreDep
from gladiator.core.limiter import limiter
from gladiator.payment.schemas import PaymentInstructions, PaymentIntentWrite, TransactionRead
from gladiator.payment.services import PaymentService

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.get(
    "/instructions/{professional_id}",
    response_model=PaymentInstructions,
    status_code=status.HTTP_200_OK,
    summary="Get Payment Instructions",
    description="Wallet address, network and QR code for paying a professional in USDT (TRC20).",
)
@limiter.limit("30/minute")
async def get_payment_instructions(
    request: Request,
    professional_id: UUID,
    store: StoreDep,
) -> PaymentInstructions:
    return await PaymentService(store).payment_instructions(professional_id)


@router.get(
    "/my",
    response_model=list[TransactionRead],
    status_code=status.HTTP_200_OK,
    summary="List My Payments",
)
@limiter.limit("30/minute")
async def list_my_payments(
    request: Request,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> list[TransactionRead]:
    return await PaymentService(store).list_transactions(current_user)


@router.post(
    "/{professional_id}",
    response_model=TransactionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Payment Intent",
    description="Record an unverified crypto payment. A transaction hash marks it as confirming.",
)
@limiter.limit("10/minute")
async def create_payment_intent(
    request: Request,
    professional_id: UUID,
    data: PaymentIntentWrite,
    store: StoreDep,
    current_user: CurrentUserDep,
) -> TransactionRead:
    return await PaymentService(store).create_payment_intent(
        current_user,
        professional_id,
        data.amount,
        recipient_wallet=data.recipient_wallet,
        tx_hash=data.tx_hash,
        description=data.description,
    )
