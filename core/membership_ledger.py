"""
Membership Ledger：每個房間的成員列表

加入順序即 position 順序，建立者永遠在 position 0
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from models import RoomMember


class MembershipLedger:
    """房間成員（有序）"""

    def __init__(self, db: Session):
        self.db = db

    def members_of(self, room_id: int) -> Optional[List[str]]:
        """
        依加入順序列出房間成員

        返回：
            account 列表；房間沒有任何成員紀錄時返回 None
        """
        rows = (
            self.db.query(RoomMember)
            .filter(RoomMember.room_id == room_id)
            .order_by(RoomMember.position)
            .all()
        )
        if not rows:
            return None
        return [row.account for row in rows]

    def append(self, room_id: int, account: str) -> None:
        """
        把 account 加到房間成員列表尾端

        注意：
            - 不做任何檢查（房間存在、人數、狀態都由呼叫者負責）
        """
        position = self.db.query(RoomMember).filter(RoomMember.room_id == room_id).count()
        self.db.add(RoomMember(room_id=room_id, position=position, account=account))
        self.db.flush()
