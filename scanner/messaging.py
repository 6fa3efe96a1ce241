"""
SCAN_PAGE 請求 / 回應邊界

只有一種訊息：{"type": "SCAN_PAGE"}。
回應是扁平的 {名稱: selector} dict，可直接 json.dumps；
目標頁面無法取得時回傳 None。

每個請求都是獨立的函式呼叫，不依賴任何全域狀態。

用法：
    from scanner.messaging import handle_message
    selectors = handle_message({"type": "SCAN_PAGE"}, driver)
"""

from __future__ import annotations

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver

from scanner.element_scanner import scan, snapshot_from_driver
from scanner.name_generator import name_elements
from utils.logger import logger

SCAN_PAGE = "SCAN_PAGE"


def scan_page(source) -> dict[str, str]:
    """掃描頁面快照並回傳 {名稱: selector}，名稱已去重"""
    named = name_elements(scan(source))
    logger.info(f"[SCAN_PAGE] 掃描到 {len(named)} 個元素")
    return {el.name: el.selector for el in named}


def handle_message(message: dict, source) -> dict[str, str] | None:
    """
    處理單一訊息。

    Args:
        message: {"type": "SCAN_PAGE"}
        source: HTML 快照 / 解析好的文件樹 / Selenium WebDriver

    Returns:
        {名稱: selector}；訊息類型不符或頁面無法取得時為 None
    """
    if not isinstance(message, dict) or message.get("type") != SCAN_PAGE:
        logger.warning(f"[SCAN_PAGE] 忽略未知訊息: {message!r}")
        return None

    if source is None:
        logger.warning("[SCAN_PAGE] 沒有目標頁面")
        return None

    if isinstance(source, WebDriver):
        try:
            source = snapshot_from_driver(source)
        except WebDriverException as e:
            logger.error(f"[SCAN_PAGE] 無法取得頁面: {type(e).__name__}: {e.msg}")
            return None

    return scan_page(source)
