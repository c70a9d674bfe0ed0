"""
Request / Response 模型（pydantic）
"""
from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from models import RoomStatus
from services.numeric_service import U64_MAX, U128_MAX


class RoomCreate(BaseModel):
    term_days: int = Field(ge=0, le=U64_MAX)
    deposit_amount: int = Field(ge=0, le=U128_MAX)


class RoomCreateResponse(BaseModel):
    room_id: int


class RoomJoin(BaseModel):
    deposit_amount: int = Field(ge=0, le=U128_MAX)


class RoomJoinResponse(BaseModel):
    room_id: int
    member_count: int
    status: RoomStatus
    activation_end: int


class RoomResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    creator: str
    term_days: int
    activation_end: int
    accrued_value: int
    status: RoomStatus


class RoomMembersResponse(BaseModel):
    room_id: int
    members: List[str]


class DepositResponse(BaseModel):
    account: str
    amount: int


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    room_id: int
    event_type: str
    data: Dict[str, Any]
    created_at: datetime
