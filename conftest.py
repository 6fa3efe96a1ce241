"""
pytest 全域 fixtures

提供：
- 範例 HTML 頁面 (登入頁、撞名頁)
- 解析好的 BeautifulSoup 文件
- 預設產生選項 / 選項工廠
- 建好的登入頁 PageModel
"""

import pytest
from bs4 import BeautifulSoup

from config.config import Config
from generator.page_model_builder import PageModelBuilder
from generator.schema import GenerationOptions
from scanner.element_scanner import scan
from scanner.name_generator import name_elements
from utils.logger import logger


# ── 範例頁面 ──

# 掃描順序 (scan_index)：
#   0 html, 1 head, 2 title, 3 body, 4 form#login-form,
#   5 input#username, 6 input#password, 7 select[data-test-id=locale],
#   8 option, 9 label[aria-label=remember], 10 button#login-btn,
#   11 p, 12 a[data-role=help-link]
LOGIN_HTML = """\
<html>
<head><title>Login</title></head>
<body>
  <form id="login-form">
    <input id="username" type="text" name="username">
    <input id="password" type="password" name="password">
    <select data-test-id="locale"><option>en</option></select>
    <label aria-label="remember">記住我</label>
    <button id="login-btn" type="submit">登入</button>
  </form>
  <p>說明文字</p>
  <a data-role="help-link" href="/help">說明</a>
</body>
</html>
"""

# 兩個元素的 data-test-id 清理後都是 user_name
COLLIDING_HTML = """\
<div>
  <span data-test-id="user-name">A</span>
  <span data-test-id="user.name">B</span>
</div>
"""


# ── 框架初始化 ──

def pytest_configure(config):
    """pytest 啟動時：驗證產生器設定，不合理的值直接中止"""
    for warning in Config.validate():
        logger.warning(f"[Config] {warning}")


@pytest.fixture
def login_html() -> str:
    return LOGIN_HTML


@pytest.fixture
def colliding_html() -> str:
    return COLLIDING_HTML


@pytest.fixture
def login_soup() -> BeautifulSoup:
    return BeautifulSoup(LOGIN_HTML, "html.parser")


# ── 產生選項 ──

@pytest.fixture
def default_options() -> GenerationOptions:
    """所有開關關閉的選項"""
    return GenerationOptions()


@pytest.fixture
def make_options():
    """選項工廠：make_options(framework="cypress", include_tests=True)"""
    def _make(**overrides) -> GenerationOptions:
        return GenerationOptions.from_dict(overrides)
    return _make


@pytest.fixture
def login_elements():
    return name_elements(scan(LOGIN_HTML))


@pytest.fixture
def build_model(login_elements):
    """PageModel 工廠：build_model(options, page_name="login")"""
    def _build(options: GenerationOptions, page_name: str = "login",
               base_url: str = "https://example.com"):
        return PageModelBuilder(options).build(
            login_elements, page_name, base_url=base_url,
        )
    return _build
