"""
自訂 Exception 體系

統一的錯誤處理階層，讓每種失敗都有明確的分類與訊息。
上層可以 catch 大類別 (如 PomGeneratorError)，
也可以精準 catch 子類別 (如 EmptyPageError)。

Exception 樹：
    PomGeneratorError
    ├── ScanError
    │   ├── InvalidRootError
    │   └── PageFetchError
    ├── PageModelError
    │   ├── EmptyPageError
    │   └── InvalidPageNameError
    ├── EmitterError
    │   ├── UnsupportedFrameworkOrLanguageError
    │   └── EmissionError
    └── ConfigError
        └── InvalidConfigError
"""


class PomGeneratorError(Exception):
    """產生器所有例外的基底，catch 這個就能攔截一切產生器錯誤"""

    def __init__(self, message: str = "", context: dict | None = None):
        self.context = context or {}
        super().__init__(message)


# ── Scanner 相關 ──

class ScanError(PomGeneratorError):
    """頁面掃描相關錯誤"""


class InvalidRootError(ScanError):
    """傳入的根節點不是可走訪的樹"""

    def __init__(self, root: object = None):
        type_name = type(root).__name__
        super().__init__(
            f"無法走訪的根節點: {type_name}",
            context={"root_type": type_name},
        )


class PageFetchError(ScanError):
    """以 HTTP 取得頁面失敗"""

    def __init__(self, url: str = "", reason: str = ""):
        msg = f"無法取得頁面: {url}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, context={"url": url})


# ── Page Model 相關 ──

class PageModelError(PomGeneratorError):
    """建立 Page Model 的前置條件不成立"""


class EmptyPageError(PageModelError):
    """頁面上沒有掃描到任何元素"""

    def __init__(self, page_name: str = ""):
        msg = f"頁面沒有任何元素: {page_name}" if page_name else "頁面沒有任何元素"
        super().__init__(msg, context={"page_name": page_name})


class InvalidPageNameError(PageModelError):
    """頁面名稱清理後為空字串"""

    def __init__(self, page_name: str = ""):
        super().__init__(
            f"頁面名稱無效: {page_name!r}",
            context={"page_name": page_name},
        )


# ── Emitter 相關 ──

class EmitterError(PomGeneratorError):
    """程式碼產出相關錯誤"""


class UnsupportedFrameworkOrLanguageError(EmitterError):
    """沒有註冊對應 (framework, language) 的 Emitter"""

    def __init__(self, framework: str = "", language: str = ""):
        super().__init__(
            f"不支援的組合: {framework} / {language}",
            context={"framework": framework, "language": language},
        )


class EmissionError(EmitterError):
    """Emitter 內部產出失敗 (例如方法名稱無法轉成合法識別字)"""

    def __init__(self, message: str = "", name: str = ""):
        msg = f"產出失敗 [{name}]: {message}" if name else message
        super().__init__(msg, context={"name": name})


# ── Config 相關 ──

class ConfigError(PomGeneratorError):
    """設定相關錯誤"""


class InvalidConfigError(ConfigError):
    """設定值無效"""

    def __init__(self, key: str = "", value: str = "", reason: str = ""):
        msg = f"設定值無效: {key}={value}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, context={"key": key, "value": value})
