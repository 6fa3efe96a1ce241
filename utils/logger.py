"""
日誌模組
產生器共用的 logger：console 一律輸出，檔案輸出可關閉。

環境變數:
    LOG_LEVEL:   console 日誌等級 (預設 INFO)
    LOG_FILE:    設為 "0" 不寫日誌檔 (CLI 在唯讀目錄執行時使用)
    LOG_JSON:    設為 "1" 另寫一份 JSON lines 日誌檔
    POM_LOG_DIR: 日誌檔目錄 (預設專案根目錄下的 reports/)

注意：登入設定的帳密值絕不可傳進 logger，只能記錄欄位名稱。
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

LOGGER_NAME = "pom_generator"
DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "reports"

_FORMAT = "[%(asctime)s] %(levelname)-7s %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """一筆 log 一行 JSON，欄位固定，方便 grep / jq 過濾"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def log_dir() -> Path:
    return Path(os.getenv("POM_LOG_DIR") or DEFAULT_LOG_DIR)


def _create_logger(name: str = LOGGER_NAME) -> logging.Logger:
    _logger = logging.Logger(name)
    _logger.setLevel(logging.DEBUG)

    console_level = getattr(
        logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO
    )
    fmt = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)

    # stdout 留給 CLI 的 JSON 輸出
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    _logger.addHandler(console)

    if os.getenv("LOG_FILE", "1").strip() == "0":
        return _logger

    directory = log_dir()
    directory.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(directory / "generator.log", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(fmt)
    _logger.addHandler(file_handler)

    if os.getenv("LOG_JSON", "").strip() == "1":
        json_handler = logging.FileHandler(
            directory / "generator.json.log", encoding="utf-8"
        )
        json_handler.setLevel(logging.DEBUG)
        json_handler.setFormatter(JsonFormatter())
        _logger.addHandler(json_handler)

    return _logger


logger = _create_logger()
