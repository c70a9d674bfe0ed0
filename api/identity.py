"""
呼叫者身分

驗證由上游負責，這裡只讀取 X-Caller-Id 並無條件信任
"""
from typing import Optional

from fastapi import Header, HTTPException


def get_caller(x_caller_id: Optional[str] = Header(default=None)) -> str:
    """FastAPI dependency：取得已驗證的呼叫者身分"""
    if not x_caller_id:
        raise HTTPException(status_code=401, detail="Missing caller identity")
    if len(x_caller_id) > 64:
        raise HTTPException(status_code=400, detail="Caller identity too long")
    return x_caller_id
