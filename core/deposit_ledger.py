"""
Deposit Ledger：全域押金紀錄

每個 account 最多一筆紀錄，這就是「一個參與者同時只能在一個房間」的機制
"""
from typing import Optional

from sqlalchemy.orm import Session

from models import Deposit


class DepositLedger:
    """account -> 押金金額"""

    def __init__(self, db: Session):
        self.db = db

    def has_deposit(self, account: str) -> bool:
        return self.db.get(Deposit, account) is not None

    def get(self, account: str) -> Optional[int]:
        deposit = self.db.get(Deposit, account)
        return deposit.amount if deposit else None

    def record(self, account: str, amount: int) -> None:
        """
        設定 account 的押金（已存在時直接覆寫）

        注意：
            - 不會拒絕重複紀錄，呼叫者必須先確認 has_deposit 為 False
        """
        deposit = self.db.get(Deposit, account)
        if deposit is None:
            self.db.add(Deposit(account=account, amount=amount))
        else:
            deposit.amount = amount
        self.db.flush()
