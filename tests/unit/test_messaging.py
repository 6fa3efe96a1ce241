"""
scanner/messaging.py 單元測試

驗證 SCAN_PAGE 請求 / 回應邊界。
"""

import json
from unittest.mock import MagicMock, PropertyMock

import pytest
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver

from core.exceptions import InvalidRootError
from scanner.messaging import SCAN_PAGE, handle_message, scan_page


@pytest.mark.unit
class TestScanPage:
    """scan_page"""

    @pytest.mark.unit
    def test_flat_name_to_selector(self, login_html):
        result = scan_page(login_html)
        assert result["login_btn"] == "#login-btn"
        assert result["locale"] == '[data-test-id="locale"]'
        assert result["label9"] == '[aria-label="remember"]'
        assert result["a12"] == '[data-role="help-link"]'
        assert len(result) == 13

    @pytest.mark.unit
    def test_collisions_are_not_overwritten(self, colliding_html):
        """撞名的兩個元素都在結果裡"""
        result = scan_page(colliding_html)
        assert result["user_name"] == '[data-test-id="user-name"]'
        assert result["user_name_2"] == '[data-test-id="user.name"]'

    @pytest.mark.unit
    def test_json_serializable(self, login_html):
        assert json.loads(json.dumps(scan_page(login_html))) == scan_page(login_html)


@pytest.mark.unit
class TestHandleMessage:
    """handle_message"""

    @pytest.mark.unit
    def test_scan_page_message(self, login_html):
        result = handle_message({"type": SCAN_PAGE}, login_html)
        assert result == scan_page(login_html)

    @pytest.mark.unit
    @pytest.mark.parametrize("message", [{"type": "OTHER"}, {}, "SCAN_PAGE", None])
    def test_unknown_message_returns_none(self, message, login_html):
        assert handle_message(message, login_html) is None

    @pytest.mark.unit
    def test_no_target_returns_none(self):
        assert handle_message({"type": SCAN_PAGE}, None) is None

    @pytest.mark.unit
    def test_driver_source(self):
        """WebDriver 會先取快照再掃描"""
        driver = MagicMock(spec=WebDriver)
        type(driver).page_source = PropertyMock(return_value='<button id="go"></button>')
        assert handle_message({"type": SCAN_PAGE}, driver) == {"go": "#go"}

    @pytest.mark.unit
    def test_unreachable_driver_returns_none(self):
        """無法取得頁面 → None"""
        driver = MagicMock(spec=WebDriver)
        type(driver).page_source = PropertyMock(side_effect=WebDriverException("tab closed"))
        assert handle_message({"type": SCAN_PAGE}, driver) is None

    @pytest.mark.unit
    def test_invalid_root_propagates(self):
        """不合法的快照直接拋錯，不回傳部分結果"""
        with pytest.raises(InvalidRootError):
            handle_message({"type": SCAN_PAGE}, 123)
