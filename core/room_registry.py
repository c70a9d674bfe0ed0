"""
Room Registry：房間 id 分配與房間紀錄

職責：
1. 持有房間 id 計數器（只在 allocate_and_create 內遞增）
2. 建立 / 查詢 Room
3. 啟動 Room（僅供 RoomManager 內部使用）
"""
from typing import Optional
import logging

from sqlalchemy.orm import Session

from models import Room, RoomCounter, RoomStatus
from core.exceptions import RoomIdExhausted
from core.locks import with_counter_lock, with_room_lock
from services.numeric_service import U32_MAX

logger = logging.getLogger(__name__)


class RoomRegistry:
    """房間紀錄與 id 計數器"""

    def __init__(self, db: Session):
        self.db = db

    def last_id(self) -> int:
        """目前分配過的最大房間 id（尚未建立任何房間時為 0）"""
        counter = self.db.query(RoomCounter).filter(RoomCounter.id == 1).first()
        return counter.last_id if counter else 0

    def allocate_and_create(self, creator: str, term_days: int, initial_deposit: int) -> int:
        """
        分配新的房間 id 並建立 Room

        流程：
        1. 鎖定計數器（該列在建表時寫入，見 models._seed_room_counter）
        2. 計數器 +1（到 u32 上限時拋出 RoomIdExhausted，不會繞回）
        3. 建立 Room：status=CREATED、activation_end=0、accrued_value=initial_deposit

        返回：
            新房間的 id（從 1 開始，嚴格遞增）

        異常：
            RoomIdExhausted: 計數器已達 u32 上限
            RuntimeError: 計數器列不存在（tables 不是透過 Base.metadata.create_all 建立）
        """
        counter = with_counter_lock(self.db).first()
        if counter is None:
            raise RuntimeError("room_counter row is missing; create tables with Base.metadata.create_all")

        if counter.last_id >= U32_MAX:
            raise RoomIdExhausted(counter.last_id)

        counter.last_id += 1
        room = Room(
            id=counter.last_id,
            creator=creator,
            term_days=term_days,
            activation_end=0,
            accrued_value=initial_deposit,
            status=RoomStatus.CREATED
        )
        self.db.add(room)
        self.db.flush()

        logger.debug(f"Allocated room id {room.id} for {creator}")
        return room.id

    def get(self, room_id: int) -> Optional[Room]:
        return self.db.query(Room).filter(Room.id == room_id).first()

    def get_for_update(self, room_id: int) -> Optional[Room]:
        return with_room_lock(room_id, self.db).first()

    def activate(self, room: Room, activation_end: int) -> Room:
        """
        CREATED -> ACTIVE

        呼叫者必須先確認 room 仍是 CREATED，這裡不再檢查
        """
        room.status = RoomStatus.ACTIVE
        room.activation_end = activation_end
        self.db.flush()
        return room
