"""
Page Fetcher
沒有瀏覽器快照時，直接以 HTTP 取得頁面 HTML 交給 ElementScanner。

只抓一次靜態 HTML，不執行 JavaScript；需要渲染後 DOM 時請改傳
WebDriver (見 snapshot_from_driver)。
"""

import requests

from config.config import Config
from core.exceptions import PageFetchError
from utils.logger import logger


class PageFetcher:
    """以 requests 取得頁面原始碼"""

    def __init__(self, timeout: int | None = None, session: requests.Session | None = None):
        self.timeout = timeout or Config.FETCH_TIMEOUT_S
        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "text/html,application/xhtml+xml")

    def fetch(self, url: str) -> str:
        """
        取得頁面 HTML。

        Raises:
            PageFetchError: 連線失敗或 HTTP 狀態碼非 2xx
        """
        logger.info(f"[Fetch] GET {url}")
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"[Fetch] 失敗: {url} ({e})")
            raise PageFetchError(url, reason=str(e)) from e
        logger.info(f"[Fetch] Status: {resp.status_code}, {len(resp.text)} 字元")
        return resp.text


def fetch_page(url: str) -> str:
    return PageFetcher().fetch(url)
