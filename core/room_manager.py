"""
Room Manager：管理 Room 的完整生命週期

職責：
1. 建立 Room（建立者即第一位成員，並登記押金）
2. 加入 Room（依序驗證 → 原子寫入 → 滿 4 人自動啟動）
3. 查詢 Room / 成員 / 押金 / 事件

原則：
- 唯一入口：Registry / Membership / Deposit 只透過這裡修改
- 先驗證、後寫入：任何檢查失敗都不會留下部分狀態
- 一次呼叫 = 一個 transaction（@transactional）
"""
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from models import Room, EventLog
from core.room_registry import RoomRegistry
from core.membership_ledger import MembershipLedger
from core.deposit_ledger import DepositLedger
from core.exceptions import RoomNotExist
from core.validation import (
    ensure_within,
    ensure_room_allocated,
    ensure_no_deposit,
    ensure_room_joinable
)
from services.clock_service import Clock, current_time_ms
from services.event_service import emit_create_room, emit_join_room, get_room_events
from services.numeric_service import U32_MAX, U64_MAX, U128_MAX, activation_end_ms
from database import transactional

logger = logging.getLogger(__name__)

ROOM_CAPACITY = 4


class RoomManager:
    """Room 生命週期管理器"""

    @staticmethod
    @transactional
    def create_room(db: Session, caller: str, term_days: int, deposit_amount: int) -> int:
        """
        建立新房間

        流程：
        1. 檢查數值範圍（term_days: u64，deposit_amount: u128）
        2. Registry 分配 id 並建立 Room（accrued_value = deposit_amount）
        3. 成員列表初始化為 [caller]
        4. 登記 caller 的押金（不檢查是否已有押金）
        5. 發出 CreateRoom 事件

        參數：
            db: SQLAlchemy Session
            caller: 已驗證的呼叫者身分
            term_days: 房間期限（天）
            deposit_amount: 押金

        返回：
            新房間的 id

        異常：
            ValueOutOfRange: 數值超出範圍
            RoomIdExhausted: id 計數器已達上限
        """
        ensure_within("term_days", term_days, U64_MAX)
        ensure_within("deposit_amount", deposit_amount, U128_MAX)

        room_id = RoomRegistry(db).allocate_and_create(caller, term_days, deposit_amount)
        MembershipLedger(db).append(room_id, caller)
        DepositLedger(db).record(caller, deposit_amount)
        emit_create_room(db, room_id, caller)

        logger.info(f"Created room {room_id} by {caller} (term_days={term_days}, deposit={deposit_amount})")
        return room_id

    @staticmethod
    @transactional
    def join_room(
        db: Session,
        caller: str,
        room_id: int,
        deposit_amount: int,
        now_ms: Clock = current_time_ms
    ) -> Room:
        """
        加入房間，第 4 位成員加入時自動啟動（CREATED -> ACTIVE）

        前置條件（依序檢查，第一個失敗的決定錯誤）：
        1. room_id 不可超過已分配的最大 id
        2. caller 沒有任何押金紀錄
        3. Room 存在且 status = CREATED

        流程：
        1. 驗證前置條件
        2. 追加成員、登記押金
        3. 人數剛好 4 時：activation_end = now + term_days * 86_400_000（飽和運算）
        4. 發出 JoinRoom 事件

        參數：
            db: SQLAlchemy Session
            caller: 已驗證的呼叫者身分
            room_id: 房間 id
            deposit_amount: 押金
            now_ms: 時間來源（epoch 毫秒），只在啟動時呼叫

        返回：
            更新後的 Room

        異常：
            ValueOutOfRange: 數值超出範圍
            RoomNotExist: 房間不存在
            UserAlreadyJoined: caller 已加入某個房間
            RoomAlreadyStarted: 房間已啟動
            RoomAlreadyEnded: 房間已結束
        """
        ensure_within("room_id", room_id, U32_MAX)
        ensure_within("deposit_amount", deposit_amount, U128_MAX)

        registry = RoomRegistry(db)
        membership = MembershipLedger(db)
        deposits = DepositLedger(db)

        # 1. 驗證（只讀）
        ensure_room_allocated(registry, room_id)
        ensure_no_deposit(deposits, caller)
        room = ensure_room_joinable(registry.get_for_update(room_id), room_id)

        # 2. 寫入
        membership.append(room_id, caller)
        deposits.record(caller, deposit_amount)

        member_count = len(membership.members_of(room_id))
        logger.info(f"{caller} joined room {room_id} ({member_count}/{ROOM_CAPACITY})")

        # 3. 滿員即啟動
        if member_count == ROOM_CAPACITY:
            end = activation_end_ms(now_ms(), room.term_days)
            registry.activate(room, end)
            logger.info(f"Room {room_id} activated, ends at {end}")

        # 4. 通知
        emit_join_room(db, room_id, caller, deposit_amount)

        return room

    @staticmethod
    def get_room(db: Session, room_id: int) -> Room:
        """
        透過 id 取得 Room

        異常：
            RoomNotExist: Room 不存在
        """
        room = RoomRegistry(db).get(room_id)
        if not room:
            raise RoomNotExist(room_id)
        return room

    @staticmethod
    def get_members(db: Session, room_id: int) -> List[str]:
        """
        依加入順序取得房間成員

        異常：
            RoomNotExist: Room 不存在
        """
        members = MembershipLedger(db).members_of(room_id)
        if members is None:
            raise RoomNotExist(room_id)
        return members

    @staticmethod
    def get_deposit(db: Session, account: str) -> Optional[int]:
        return DepositLedger(db).get(account)

    @staticmethod
    def get_events(db: Session, room_id: int) -> List[EventLog]:
        RoomManager.get_room(db, room_id)
        return get_room_events(db, room_id)
