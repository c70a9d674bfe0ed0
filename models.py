"""
資料模型（Ledger Store 的 tables）

- RoomCounter：房間 id 計數器（單列），只由 RoomRegistry 修改
- Room：房間紀錄（狀態、期限、累積金額）
- RoomMember：房間成員，position 即加入順序
- Deposit：全域押金紀錄，每個 account 最多一筆
- EventLog：CreateRoom / JoinRoom 通知
"""
import enum
from datetime import datetime, timezone

from sqlalchemy import BigInteger, Column, DateTime, Enum, ForeignKey, Integer, JSON, String, event
from sqlalchemy.types import TypeDecorator

from database import Base
from services.numeric_service import U64_MAX, U128_MAX


class RoomStatus(str, enum.Enum):
    CREATED = "created"
    ACTIVE = "active"
    ENDED = "ended"


class UnsignedInteger(TypeDecorator):
    """
    超過 signed 64-bit 的 unsigned 整數欄位（u64 / u128）

    以十進位字串儲存，讀出時轉回 int；寫入超出範圍的值會拋出 ValueError
    """
    impl = String(39)
    cache_ok = True

    def __init__(self, limit: int, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.limit = limit

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = int(value)
        if not 0 <= value <= self.limit:
            raise ValueError(f"{value} does not fit in 0..{self.limit}")
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)


def _utcnow():
    return datetime.now(timezone.utc)


class RoomCounter(Base):
    __tablename__ = "room_counter"

    id = Column(Integer, primary_key=True, default=1)
    last_id = Column(BigInteger, nullable=False, default=0)


@event.listens_for(RoomCounter.__table__, "after_create")
def _seed_room_counter(target, connection, **kw):
    # 計數器唯一的一列在建表時就寫入，分配 id 時只需鎖定、不需插入
    connection.execute(target.insert().values(id=1, last_id=0))


class Room(Base):
    __tablename__ = "rooms"

    id = Column(BigInteger, primary_key=True, autoincrement=False)
    creator = Column(String(64), nullable=False, index=True)
    term_days = Column(UnsignedInteger(U64_MAX), nullable=False)
    activation_end = Column(UnsignedInteger(U64_MAX), nullable=False, default=0)
    accrued_value = Column(UnsignedInteger(U128_MAX), nullable=False)
    status = Column(Enum(RoomStatus), nullable=False, default=RoomStatus.CREATED)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class RoomMember(Base):
    __tablename__ = "room_members"

    room_id = Column(BigInteger, ForeignKey("rooms.id"), primary_key=True)
    position = Column(Integer, primary_key=True)
    account = Column(String(64), nullable=False)


class Deposit(Base):
    __tablename__ = "deposits"

    account = Column(String(64), primary_key=True)
    amount = Column(UnsignedInteger(U128_MAX), nullable=False)


class EventLog(Base):
    __tablename__ = "event_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    room_id = Column(BigInteger, ForeignKey("rooms.id"), nullable=False, index=True)
    event_type = Column(String(32), nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
