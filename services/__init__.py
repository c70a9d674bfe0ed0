"""
服務層

這個 package 包含不負責狀態轉換的外部協作者與純計算邏輯：
- NumericService：unsigned 寬度與飽和運算
- ClockService：時間來源（epoch 毫秒）
- EventService：CreateRoom / JoinRoom 通知
"""
