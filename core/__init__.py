"""
核心業務邏輯層

這個 package 包含所有核心業務邏輯，包括：
- Ledgers：Room Registry / Membership Ledger / Deposit Ledger 的存取方法
- Manager：房間生命週期控制器（建立、加入、自動啟動）
- Validation：依序檢查的前置條件
- Locks：並發控制工具
"""
