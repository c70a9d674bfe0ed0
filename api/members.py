"""
Member API Endpoints

職責：
1. 參與者加入房間
2. 查詢房間成員
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from database import get_db
from schemas import RoomJoin, RoomJoinResponse, RoomMembersResponse
from core.room_manager import RoomManager
from core.exceptions import (
    RoomNotExist,
    RoomOverload,
    RoomAlreadyStarted,
    RoomAlreadyEnded,
    UserAlreadyJoined,
    ValueOutOfRange
)
from services.clock_service import Clock, get_clock
from api.identity import get_caller

router = APIRouter(prefix="/api/rooms", tags=["members"])
logger = logging.getLogger(__name__)


@router.post("/{room_id}/join", response_model=RoomJoinResponse)
def join_room(
    room_id: int,
    join_data: RoomJoin,
    caller: str = Depends(get_caller),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db)
):
    """
    加入房間

    前置條件：
    - 房間必須存在
    - caller 尚未加入任何房間
    - 房間狀態必須是 created

    效果：
    - 第 4 位成員加入時房間自動啟動（status=active，activation_end 確定）
    """
    try:
        room = RoomManager.join_room(
            db, caller, room_id, join_data.deposit_amount, now_ms=clock
        )
        members = RoomManager.get_members(db, room_id)

        return RoomJoinResponse(
            room_id=room.id,
            member_count=len(members),
            status=room.status,
            activation_end=room.activation_end
        )

    except RoomNotExist:
        raise HTTPException(status_code=404, detail="Room not found")
    except (UserAlreadyJoined, RoomAlreadyStarted, RoomAlreadyEnded, RoomOverload) as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueOutOfRange as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to join room: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/{room_id}/members", response_model=RoomMembersResponse)
def get_room_members(room_id: int, db: Session = Depends(get_db)):
    """依加入順序列出成員，index 0 為建立者"""
    try:
        members = RoomManager.get_members(db, room_id)
        return RoomMembersResponse(room_id=room_id, members=members)
    except RoomNotExist:
        raise HTTPException(status_code=404, detail="Room not found")
