"""
PageModelBuilder — 建立 Page Model (中介表示)

輸入：整頁的 NamedElement 序列 + 頁面名稱 + 產生選項
輸出：PageModel，交給 Emitter 產出程式碼

負責：
    1. class_name / visit_path
    2. 每個元素是否為互動元素，以及要產生哪種動作方法 (click / type / select)
    3. 有登入設定時建立 LoginDescriptor (只有欄位名稱，沒有帳密值)
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Sequence

from core.exceptions import EmptyPageError, InvalidPageNameError
from generator.schema import (
    ActionKind, GenerationOptions, LoginConfig, LoginDescriptor, LoginField, PageModel,
)
from scanner.element_scanner import ElementDescriptor
from scanner.name_generator import NamedElement
from scanner.selector_resolver import SelectorStrategy
from utils.logger import logger

_PAGE_NAME_UNSAFE = re.compile(r"[^A-Za-z0-9]")

# ── 互動判斷對照表 ──

_TEXT_INPUT_TYPES = {
    "text", "email", "password", "search", "tel", "url", "number",
    "date", "datetime-local", "month", "week", "time",
}
_CLICK_TAGS = {"button", "a"}
_CLICK_ROLES = {
    "button", "link", "menuitem", "checkbox", "radio", "tab", "switch", "option",
}
_TYPE_ROLES = {"textbox", "searchbox"}
_SELECT_ROLES = {"combobox", "listbox"}

# ── 登入欄位對照表 ──

_PASSWORD_HINTS = ("password", "passwd", "pwd")
_USER_HINTS = ("user", "email", "login", "account")
_SUBMIT_HINTS = ("login", "signin", "sign_in", "submit")

_PASSWORD_FALLBACK = 'input[type="password"]'
_USER_FALLBACK = 'input[type="email"], input[name="username"], input[type="text"]'
_SUBMIT_FALLBACK = 'button[type="submit"]'


def classify_action(descriptor: ElementDescriptor) -> ActionKind | None:
    """判斷元素的動作類型；None 表示純資訊元素"""
    tag = descriptor.tag_name
    aff = descriptor.affordances

    if tag == "select":
        return ActionKind.SELECT
    if tag == "textarea":
        return ActionKind.TYPE
    if tag == "input":
        if aff.input_type == "hidden":
            return None
        if aff.input_type is None or aff.input_type in _TEXT_INPUT_TYPES:
            return ActionKind.TYPE
        return ActionKind.CLICK

    if aff.role in _SELECT_ROLES:
        return ActionKind.SELECT
    if aff.role in _TYPE_ROLES:
        return ActionKind.TYPE
    if tag in _CLICK_TAGS or aff.role in _CLICK_ROLES or aff.has_click_handler:
        return ActionKind.CLICK
    return None


def derive_class_name(page_name: str) -> str:
    """清理頁面名稱後首字大寫並加上 Page；清理後為空時拋 InvalidPageNameError"""
    cleaned = _PAGE_NAME_UNSAFE.sub("", page_name)
    if not cleaned:
        raise InvalidPageNameError(page_name)
    return cleaned[0].upper() + cleaned[1:] + "Page"


def derive_visit_path(page_name: str) -> str:
    return "/" + page_name.lower().lstrip("/")


class PageModelBuilder:
    """產生與框架無關的 PageModel"""

    def __init__(self, options: GenerationOptions):
        self.options = options

    def build(
        self,
        elements: Sequence[NamedElement],
        page_name: str,
        imports: Sequence[str] = (),
        base_url: str = "",
    ) -> PageModel:
        """
        建立 PageModel。

        Raises:
            EmptyPageError: 沒有任何元素
            InvalidPageNameError: 頁面名稱清理後為空
        """
        class_name = derive_class_name(page_name)
        if not elements:
            raise EmptyPageError(page_name)

        actions: dict[str, ActionKind] = {}
        for el in elements:
            kind = classify_action(el.source)
            if kind is not None:
                actions[el.name] = kind
        flags = {el.name: el.name in actions for el in elements}

        warnings: list[str] = _duplicate_id_warnings(elements)
        login = None
        if self.options.login_config is not None:
            login = self._build_login(self.options.login_config, elements, actions, warnings)

        logger.info(
            f"[PageModel] {class_name}: {len(elements)} 元素, "
            f"{len(actions)} 互動元素"
        )

        return PageModel(
            class_name=class_name,
            page_name=page_name,
            visit_path=derive_visit_path(page_name),
            elements=tuple(elements),
            interactive_flags=flags,
            actions=actions,
            login_descriptor=login,
            imports=tuple(imports),
            base_url=base_url,
            warnings=tuple(warnings),
        )

    # ── 登入 ──

    def _build_login(
        self,
        config: LoginConfig,
        elements: Sequence[NamedElement],
        actions: dict[str, ActionKind],
        warnings: list[str],
    ) -> LoginDescriptor:
        field_names = config.field_names
        # 只記欄位名稱，帳密值不進日誌
        logger.debug(f"[PageModel] 登入 ({config.type.value}) 欄位: {list(field_names)}")

        typeable = [e for e in elements if actions.get(e.name) == ActionKind.TYPE]
        fields = []
        for name in field_names:
            match = _match_field(name, typeable) or _match_field(name, elements)
            if match is not None:
                fields.append(LoginField(name=name, selector=match.selector))
                continue
            fallback = _fallback_selector(name)
            warnings.append(f"登入欄位 {name!r} 找不到對應元素，使用預設 selector: {fallback}")
            fields.append(LoginField(name=name, selector=fallback))

        submit = _SUBMIT_FALLBACK
        clickable = [e for e in elements if actions.get(e.name) == ActionKind.CLICK]
        for el in clickable:
            if any(hint in el.name.lower() for hint in _SUBMIT_HINTS):
                submit = el.selector
                break
        else:
            warnings.append(f"找不到登入按鈕，使用預設 selector: {_SUBMIT_FALLBACK}")

        return LoginDescriptor(
            type=config.type,
            credential_field_names=field_names,
            fields=tuple(fields),
            submit_selector=submit,
        )


def _duplicate_id_warnings(elements: Sequence[NamedElement]) -> list[str]:
    """同一個 #id 出現多次時只提出警告，selector 照常產生"""
    counts = Counter(e.selector for e in elements if e.strategy == SelectorStrategy.ID)
    return [
        f"重複的 id selector: {selector} ({count} 個元素)"
        for selector, count in counts.items() if count > 1
    ]


def _match_field(field_name: str, candidates: Sequence[NamedElement]) -> NamedElement | None:
    key = field_name.lower()
    for el in candidates:
        if key in el.name.lower():
            return el
    return None


def _fallback_selector(field_name: str) -> str:
    key = field_name.lower()
    if any(hint in key for hint in _PASSWORD_HINTS):
        return _PASSWORD_FALLBACK
    if any(hint in key for hint in _USER_HINTS):
        return _USER_FALLBACK
    return f'[name="{field_name}"]'
