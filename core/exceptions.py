"""
自定義異常類別

集中管理所有業務邏輯異常，方便 API 層統一處理

所有異常都在任何寫入之前拋出：被拒絕的操作不會留下任何部分狀態
"""


class RoomLedgerException(Exception):
    """所有房間帳本異常的基類"""
    pass


# ============ Room 相關異常 ============

class RoomNotExist(RoomLedgerException):
    """房間不存在（room_id 超過已分配的最大 id，或查無紀錄）"""
    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room {room_id} does not exist")


class RoomOverload(RoomLedgerException):
    """
    房間已達人數上限

    保留：人數上限目前由「第 4 人加入即啟動」隱式保證，
    之後的加入會得到 RoomAlreadyStarted，這個異常不會被拋出
    """
    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room {room_id} is full")


class RoomAlreadyStarted(RoomLedgerException):
    """房間已啟動（status = active），不再接受新成員"""
    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room {room_id} has already started")


class RoomAlreadyEnded(RoomLedgerException):
    """房間已結束（status = ended，只能由外部流程設定）"""
    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room {room_id} has already ended")


class RoomIdExhausted(RoomLedgerException):
    """房間 id 計數器已達 u32 上限"""
    def __init__(self, last_id):
        self.last_id = last_id
        super().__init__(f"Room id counter exhausted at {last_id}")


# ============ 參與者相關異常 ============

class UserAlreadyJoined(RoomLedgerException):
    """參與者已有押金紀錄（全域只能加入一個房間）"""
    def __init__(self, account):
        self.account = account
        super().__init__(f"Account {account} has already joined a room")


# ============ 數值相關異常 ============

class ValueOutOfRange(RoomLedgerException):
    """數值超出 unsigned 寬度（u32 / u64 / u128）"""
    def __init__(self, field, value, limit):
        self.field = field
        self.value = value
        self.limit = limit
        super().__init__(f"{field}={value} is outside 0..{limit}")
