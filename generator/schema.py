"""
資料結構定義
產生選項、Page Model (中介表示)、產出物與結果的統一格式。
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum

from config.config import Config
from core.exceptions import InvalidConfigError
from scanner.name_generator import NamedElement


class Framework(Enum):
    PLAYWRIGHT = "playwright"
    SELENIUM = "selenium"
    CYPRESS = "cypress"


class Language(Enum):
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    JAVA = "java"
    CSHARP = "csharp"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]


_EXTENSIONS = {
    Language.TYPESCRIPT: "ts",
    Language.JAVASCRIPT: "js",
    Language.PYTHON: "py",
    Language.JAVA: "java",
    Language.CSHARP: "cs",
}


class LoginType(Enum):
    BASIC = "basic"
    OAUTH2 = "oauth2"
    SAML = "saml"


class ActionKind(Enum):
    """互動元素會產生的動作方法"""
    CLICK = "click"      # click<Name>()
    TYPE = "type"        # type<Name>(value)
    SELECT = "select"    # select<Name>(option)


# camelCase 選項名稱 → 欄位名稱
_OPTION_ALIASES = {
    "includeTests": "include_tests",
    "includeComments": "include_comments",
    "includeWaitStrategies": "include_wait_strategies",
    "includeErrorHandling": "include_error_handling",
    "loginConfig": "login_config",
    "pageName": "page_name",
}


@dataclass(frozen=True)
class LoginConfig:
    """登入設定；credentials 的值只在記憶體中，不會寫進產出或日誌"""
    type: LoginType
    credentials: dict = field(default_factory=dict, repr=False)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self.credentials.keys())

    def __repr__(self) -> str:
        return f"LoginConfig(type={self.type.value!r}, fields={list(self.field_names)!r})"

    @classmethod
    def from_dict(cls, data: dict) -> "LoginConfig":
        if not isinstance(data, dict):
            raise InvalidConfigError(
                "login_config", type(data).__name__, reason="必須是 dict (type + credentials)",
            )
        raw_type = str(data.get("type", "")).lower()
        try:
            login_type = LoginType(raw_type)
        except ValueError:
            raise InvalidConfigError(
                "login_config.type", raw_type,
                reason=f"可用: {', '.join(t.value for t in LoginType)}",
            )
        credentials = data.get("credentials") or {}
        if not isinstance(credentials, dict):
            raise InvalidConfigError(
                "login_config.credentials", type(credentials).__name__,
                reason="必須是 dict",
            )
        return cls(type=login_type, credentials=dict(credentials))


@dataclass(frozen=True)
class BrowserConfig:
    """交給外部瀏覽器驅動使用，產生器本身不讀"""
    name: str = "chrome"
    headless: bool = True


@dataclass(frozen=True)
class GenerationOptions:
    """單次產生請求的選項"""
    framework: Framework = Framework.PLAYWRIGHT
    language: Language = Language.TYPESCRIPT
    include_tests: bool = False
    include_comments: bool = False
    include_wait_strategies: bool = False
    include_error_handling: bool = False
    login_config: LoginConfig | None = None
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    page_name: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "GenerationOptions":
        """從 dict 建立（讀取 JSON 設定 / CLI 用），接受 camelCase 別名"""
        data = {_OPTION_ALIASES.get(k, k): v for k, v in data.items()}

        framework = _parse_enum(
            Framework, "framework", data.get("framework") or Config.DEFAULT_FRAMEWORK
        )
        language = _parse_enum(
            Language, "language", data.get("language") or Config.DEFAULT_LANGUAGE
        )

        login = data.get("login_config")
        browser = data.get("browser") or {}
        if not isinstance(browser, dict):
            raise InvalidConfigError("browser", type(browser).__name__, reason="必須是 dict")

        return cls(
            framework=framework,
            language=language,
            include_tests=bool(data.get("include_tests", False)),
            include_comments=bool(data.get("include_comments", False)),
            include_wait_strategies=bool(data.get("include_wait_strategies", False)),
            include_error_handling=bool(data.get("include_error_handling", False)),
            login_config=LoginConfig.from_dict(login) if login else None,
            browser=BrowserConfig(
                name=browser.get("name", "chrome"),
                headless=bool(browser.get("headless", True)),
            ),
            page_name=data.get("page_name", ""),
        )

    def with_target(self, framework: Framework, language: Language) -> "GenerationOptions":
        return dataclasses.replace(self, framework=framework, language=language)


@dataclass(frozen=True)
class LoginField:
    """login() 要填的單一欄位：欄位名稱 + 對應的 selector"""
    name: str
    selector: str


@dataclass(frozen=True)
class LoginDescriptor:
    """登入描述：只有欄位名稱與 selector，沒有任何帳密值"""
    type: LoginType
    credential_field_names: tuple[str, ...]
    fields: tuple[LoginField, ...] = ()
    submit_selector: str = 'button[type="submit"]'


@dataclass(frozen=True)
class PageModel:
    """
    與框架無關的中介表示。

    由 PageModelBuilder 建立，交給 Emitter 後視為唯讀。
    interactive_flags / actions 以元素名稱為 key (名稱在同一頁唯一)。
    """
    class_name: str
    page_name: str
    visit_path: str
    elements: tuple[NamedElement, ...]
    interactive_flags: dict[str, bool] = field(default_factory=dict)
    actions: dict[str, ActionKind] = field(default_factory=dict)
    login_descriptor: LoginDescriptor | None = None
    imports: tuple[str, ...] = ()
    base_url: str = ""
    warnings: tuple[str, ...] = ()

    @property
    def interactive_elements(self) -> list[NamedElement]:
        return [e for e in self.elements if self.interactive_flags.get(e.name)]


@dataclass(frozen=True)
class ArtifactMetadata:
    element_count: int
    method_count: int
    generation_time_ms: float


@dataclass(frozen=True)
class GeneratedArtifact:
    """單一 (framework, language) 的產出物，產生後不再變動"""
    framework: Framework
    language: Language
    class_name: str
    class_source: str
    imports: tuple[str, ...]
    methods: tuple[str, ...]
    metadata: ArtifactMetadata
    test_source: str | None = None


@dataclass
class GenerationResult:
    """generate_pom() 的回傳值；失敗時 success=False 並帶 errors，不會拋例外"""
    success: bool
    artifact: GeneratedArtifact | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    elapsed_ms: float = 0.0

    @property
    def metadata(self) -> ArtifactMetadata | None:
        return self.artifact.metadata if self.artifact else None

    def to_dict(self) -> dict:
        """轉為 dict (JSON 輸出用)，所有 Enum 轉為 .value"""
        data: dict = {"success": self.success}
        if self.artifact:
            meta = {
                "elementCount": self.artifact.metadata.element_count,
                "methodCount": self.artifact.metadata.method_count,
                "generationTimeMs": self.artifact.metadata.generation_time_ms,
            }
            data["pom"] = {
                "className": self.artifact.class_name,
                "framework": self.artifact.framework.value,
                "language": self.artifact.language.value,
                "imports": list(self.artifact.imports),
                "methods": list(self.artifact.methods),
                "metadata": meta,
            }
            data["metadata"] = meta
        if self.errors:
            data["errors"] = list(self.errors)
        if self.warnings:
            data["warnings"] = list(self.warnings)
        return data


def _parse_enum(enum_cls, key: str, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        raise InvalidConfigError(
            key, str(value),
            reason=f"可用: {', '.join(m.value for m in enum_cls)}",
        )
