"""
設定管理模組
統一管理 POM 產生器的預設值（輸出目錄、預設框架/語言、等待逾時、批次並行數）。
支援透過環境變數覆蓋預設值，方便 CI/CD 整合。
"""

import os
from pathlib import Path


class ConfigValidationError(Exception):
    """環境設定驗證失敗"""

    def __init__(self, errors: list[str]):
        self.errors = errors
        msg = "設定驗證失敗:\n" + "\n".join(f"  - {e}" for e in errors)
        super().__init__(msg)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigValidationError([f"{name} 必須是整數: {raw!r}"])


class Config:
    """產生器全域設定"""

    # 產出
    OUTPUT_DIR = Path(os.getenv("POM_OUTPUT_DIR", "generated-pom"))

    # 預設目標
    DEFAULT_FRAMEWORK = os.getenv("POM_FRAMEWORK", "playwright").lower()
    DEFAULT_LANGUAGE = os.getenv("POM_LANGUAGE", "typescript").lower()

    # 產出的 wait 方法預設逾時 (毫秒)
    WAIT_TIMEOUT_MS = _int_env("POM_WAIT_TIMEOUT_MS", 10000)

    # 批次產生的 thread 數
    BATCH_WORKERS = _int_env("POM_BATCH_WORKERS", 4)

    # 沒有提供頁面原始碼時，以 HTTP 取得頁面的逾時 (秒)
    FETCH_TIMEOUT_S = _int_env("POM_FETCH_TIMEOUT_S", 10)

    @classmethod
    def validate(cls) -> list[str]:
        """
        驗證目前設定。

        Returns:
            警告訊息列表

        Raises:
            ConfigValidationError: 數值不合理時拋出
        """
        errors: list[str] = []
        warnings: list[str] = []

        if cls.WAIT_TIMEOUT_MS <= 0:
            errors.append(f"POM_WAIT_TIMEOUT_MS 必須大於 0 (目前 {cls.WAIT_TIMEOUT_MS})")
        if cls.BATCH_WORKERS <= 0:
            errors.append(f"POM_BATCH_WORKERS 必須大於 0 (目前 {cls.BATCH_WORKERS})")
        if cls.FETCH_TIMEOUT_S <= 0:
            errors.append(f"POM_FETCH_TIMEOUT_S 必須大於 0 (目前 {cls.FETCH_TIMEOUT_S})")
        if cls.WAIT_TIMEOUT_MS > 120000:
            warnings.append(f"POM_WAIT_TIMEOUT_MS 偏大: {cls.WAIT_TIMEOUT_MS}ms")

        if errors:
            raise ConfigValidationError(errors)

        return warnings
