"""
Deposit API Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database import get_db
from schemas import DepositResponse
from core.room_manager import RoomManager

router = APIRouter(prefix="/api/deposits", tags=["deposits"])


@router.get("/{account}", response_model=DepositResponse)
def get_deposit(account: str, db: Session = Depends(get_db)):
    amount = RoomManager.get_deposit(db, account)
    if amount is None:
        raise HTTPException(status_code=404, detail="Deposit not found")
    return DepositResponse(account=account, amount=amount)
