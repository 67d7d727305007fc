# routers/payments.py
"""
Payment record API.

Each write re-bills the following month's rent through the ledger engine:
the next record's rent bill becomes base rent plus whatever is left unpaid
on the record before it.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import User
from schemas.payment import PaymentCreate, PaymentUpdate, PaymentResponse, PaymentListResponse
from services.payment_service import PaymentService

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post(
     "",
     response_model=PaymentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record a monthly payment"
)
def create_payment(
     payment_data: PaymentCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """
     Record rent and utilities for one property and month.

     - **rent_bill_amount**: optional; defaults to base rent plus the balance
       carried from the nearest earlier record
     - **utilities**: optional; defaults to the property's tracked categories at 0/0

     Returns 409 if the month is already recorded for the property.
     """
     payment = PaymentService.create_payment(db, user.id, payment_data)
     db.commit()
     db.refresh(payment)
     return PaymentResponse.model_validate(payment)


@router.get(
     "",
     response_model=PaymentListResponse,
     summary="List payments for a property"
)
def list_payments(
     property_id: int = Query(..., gt=0, description="Property to list records for"),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """Records newest month first."""
     payments = PaymentService.list_payments(db, user.id, property_id)
     return PaymentListResponse(
          payments=[PaymentResponse.model_validate(p) for p in payments],
          total=len(payments),
     )


@router.get(
     "/{payment_id}",
     response_model=PaymentResponse,
     summary="Get payment by ID"
)
def get_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     payment = PaymentService.get_payment(db, user.id, payment_id)
     return PaymentResponse.model_validate(payment)


@router.put(
     "/{payment_id}",
     response_model=PaymentResponse,
     summary="Update payment"
)
def update_payment(
     payment_id: int,
     payment_data: PaymentUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """
     Edit a record. Only provided fields change; provided utilities replace
     the existing lines. Later rent bills are recalculated.
     """
     payment = PaymentService.update_payment(db, user.id, payment_id, payment_data)
     db.commit()
     db.refresh(payment)
     return PaymentResponse.model_validate(payment)


@router.delete(
     "/{payment_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete payment"
)
def delete_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user)
):
     """
     Delete a record. The record that followed it is re-billed against its
     new nearest predecessor (base rent only if none is left).
     """
     PaymentService.delete_payment(db, user.id, payment_id)
     db.commit()
     return None
