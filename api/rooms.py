"""
Room API Endpoints

職責：
1. 建立房間
2. 查詢房間資訊與事件紀錄
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
import logging

from database import get_db
from schemas import RoomCreate, RoomCreateResponse, RoomResponse, EventResponse
from core.room_manager import RoomManager
from core.exceptions import RoomNotExist, RoomIdExhausted, ValueOutOfRange
from api.identity import get_caller

router = APIRouter(prefix="/api/rooms", tags=["rooms"])
logger = logging.getLogger(__name__)


@router.post("", response_model=RoomCreateResponse, status_code=201)
def create_room(
    room_data: RoomCreate,
    caller: str = Depends(get_caller),
    db: Session = Depends(get_db)
):
    """
    建立房間

    效果：
    - caller 成為房間第一位成員，押金登記為 deposit_amount
    - 房間狀態為 created，activation_end = 0
    """
    try:
        room_id = RoomManager.create_room(
            db, caller, room_data.term_days, room_data.deposit_amount
        )
        return RoomCreateResponse(room_id=room_id)

    except ValueOutOfRange as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RoomIdExhausted as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create room: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(room_id: int, db: Session = Depends(get_db)):
    try:
        return RoomManager.get_room(db, room_id)
    except RoomNotExist:
        raise HTTPException(status_code=404, detail="Room not found")


@router.get("/{room_id}/events", response_model=List[EventResponse])
def get_room_events(room_id: int, db: Session = Depends(get_db)):
    """
    取得房間的 CreateRoom / JoinRoom 事件（依發生順序）
    """
    try:
        return RoomManager.get_events(db, room_id)
    except RoomNotExist:
        raise HTTPException(status_code=404, detail="Room not found")
