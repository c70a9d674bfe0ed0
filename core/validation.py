"""
前置條件檢查

每個檢查只讀不寫，失敗時拋出對應的 RoomLedgerException；
RoomManager 依固定順序呼叫，第一個失敗的檢查決定錯誤種類
"""
from models import Room, RoomStatus
from core.exceptions import (
    RoomNotExist,
    RoomAlreadyStarted,
    RoomAlreadyEnded,
    UserAlreadyJoined,
    ValueOutOfRange
)
from core.room_registry import RoomRegistry
from core.deposit_ledger import DepositLedger
from services.numeric_service import is_within


def ensure_within(field: str, value: int, limit: int) -> None:
    if not is_within(value, limit):
        raise ValueOutOfRange(field, value, limit)


def ensure_room_allocated(registry: RoomRegistry, room_id: int) -> None:
    """room_id 不可超過已分配的最大 id"""
    if room_id > registry.last_id():
        raise RoomNotExist(room_id)


def ensure_no_deposit(deposits: DepositLedger, account: str) -> None:
    """account 不可已有押金紀錄（不論是哪個房間）"""
    if deposits.has_deposit(account):
        raise UserAlreadyJoined(account)


def ensure_room_joinable(room: Room, room_id: int) -> Room:
    """
    房間必須存在且仍在 CREATED

    異常：
        RoomNotExist: 查無房間（例如 room_id == 0）
        RoomAlreadyStarted: status = ACTIVE
        RoomAlreadyEnded: status = ENDED
    """
    if room is None:
        raise RoomNotExist(room_id)
    if room.status == RoomStatus.ACTIVE:
        raise RoomAlreadyStarted(room_id)
    if room.status == RoomStatus.ENDED:
        raise RoomAlreadyEnded(room_id)
    return room
