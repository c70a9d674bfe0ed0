"""
並發控制工具

提供 Database-level 的鎖定機制，讓同一筆資料上的操作彼此排隊

主要使用 PostgreSQL 的 SELECT ... FOR UPDATE 來實現悲觀鎖（Pessimistic Locking）；
SQLite 會忽略 FOR UPDATE，由單一寫入者的特性保證序列化
"""
from sqlalchemy.orm import Session, Query

from models import Room, RoomCounter


def with_counter_lock(db: Session) -> Query:
    """
    鎖定房間 id 計數器（單列）

    使用場景：
    - 分配新的房間 id 時，避免兩個 create_room 拿到同一個 id

    返回：
        Query object（需要呼叫 .first() 取得結果，可能為 None）
    """
    return db.query(RoomCounter).filter(
        RoomCounter.id == 1
    ).with_for_update(nowait=False)


def with_room_lock(room_id: int, db: Session) -> Query:
    """
    鎖定一個 Room（行級鎖）

    使用場景：
    - join_room 驗證狀態、追加成員、可能觸發啟動時
    - 需要確保 Room 在整個 transaction 期間不被其他請求修改

    範例：
        room = with_room_lock(room_id, db).first()
        if not room:
            raise RoomNotExist(room_id)

    注意：
        - nowait=False 表示如果鎖被佔用，會等待
        - 必須在 transaction 內使用（確保有 commit 或 rollback）
    """
    return db.query(Room).filter(
        Room.id == room_id
    ).with_for_update(nowait=False)
