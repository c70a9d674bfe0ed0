"""
事件服務：CreateRoom / JoinRoom 通知

事件寫入呼叫者所在的 transaction：
- 被拒絕或 rollback 的操作不會留下任何通知
- 不等待任何接收端確認
"""
from typing import List

from sqlalchemy.orm import Session

from models import EventLog

CREATE_ROOM = "CreateRoom"
JOIN_ROOM = "JoinRoom"


def emit_create_room(db: Session, room_id: int, creator: str) -> None:
    db.add(EventLog(
        room_id=room_id,
        event_type=CREATE_ROOM,
        data={"room_id": room_id, "creator": creator}
    ))


def emit_join_room(db: Session, room_id: int, account: str, deposit_amount: int) -> None:
    db.add(EventLog(
        room_id=room_id,
        event_type=JOIN_ROOM,
        data={"room_id": room_id, "user": account, "deposit_amount": deposit_amount}
    ))


def get_room_events(db: Session, room_id: int) -> List[EventLog]:
    """
    取得房間的所有事件

    返回：
        EventLog 列表（依發生順序，最早的在前）
    """
    return (
        db.query(EventLog)
        .filter(EventLog.room_id == room_id)
        .order_by(EventLog.id)
        .all()
    )
