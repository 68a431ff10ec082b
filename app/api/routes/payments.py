"""
Payments API endpoint.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import get_current_user
from app.schemas.transaction import PaymentRequest, PaymentResponse, TransactionResponse
from app.services import ledger

router = APIRouter(
    prefix="/payments",
    tags=["Payments"],
    dependencies=[Depends(get_current_user)]
)


@router.post("", response_model=PaymentResponse)
async def create_payment(
    payment: PaymentRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Pay against a sale transaction.

    - **amount**: In the transaction's currency, at most the outstanding total
    - **transactionId**: The sale being paid
    - **customerId**: The paying customer
    """
    result = await ledger.record_payment(
        db,
        amount=payment.amount,
        transaction_id=payment.transaction_id,
        customer_id=payment.customer_id
    )
    return PaymentResponse(
        success=result["success"],
        remaining_amount=result["remaining_amount"],
        amount=result["amount"],
        message=result["message"],
        transaction=TransactionResponse.model_validate(result["transaction"]),
        collection=TransactionResponse.model_validate(result["collection"])
    )
