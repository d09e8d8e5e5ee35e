# marketplace/api/routers/payments.py
from fastapi import APIRouter, Depends, HTTPException

from marketplace.api.deps import get_current_user, get_payment_gateway, get_storage
from marketplace.domain.schemas import PaymentInitIn, PaymentInitOut, PaymentVerifyOut, User
from marketplace.repos.storage import Storage
from marketplace.services.payment_service import PaymentService

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post("/initialize", response_model=PaymentInitOut)
def initialize_payment(
    payload: PaymentInitIn,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    gateway=Depends(get_payment_gateway),
):
    svc = PaymentService(storage, gateway)
    try:
        return svc.initialize(user, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/verify/{reference}", response_model=PaymentVerifyOut)
def verify_payment(
    reference: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    gateway=Depends(get_payment_gateway),
):
    svc = PaymentService(storage, gateway)
    try:
        return svc.verify(user, reference)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))
