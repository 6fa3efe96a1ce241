"""
ElementScanner — 頁面元素掃描

以文件順序 (depth-first, pre-order) 走訪整棵元素樹，
每個元素只讀一次、只取固定幾個屬性，產生 ElementDescriptor。

支援的輸入：
    - HTML 字串 / bytes (以 BeautifulSoup 解析)
    - BeautifulSoup 文件或單一 Tag
    - xml.etree 的 Element / ElementTree
    - Selenium WebDriver → 先用 snapshot_from_driver() 取得 page_source 快照

掃描不會修改文件，也不會重讀 live DOM；
若頁面在掃描期間變動，結果視為未定義，呼叫端應提供穩定的快照。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator
from xml.etree import ElementTree

from bs4 import BeautifulSoup
from bs4.element import Tag

from core.exceptions import InvalidRootError

if TYPE_CHECKING:
    from selenium.webdriver.remote.webdriver import WebDriver


# data-test-id 的別名，依序取第一個有值的
_TEST_ID_ATTRS = ("data-test-id", "data-testid")

# onclick 類型的事件屬性
_CLICK_HANDLER_ATTRS = ("onclick", "onmousedown", "onmouseup")


@dataclass(frozen=True)
class SelectorAttributes:
    """決定 selector 用的四個屬性；不存在一律為 None，不是空字串"""
    id: str | None = None
    data_test_id: str | None = None
    data_role: str | None = None
    aria_label: str | None = None


@dataclass(frozen=True)
class Affordances:
    """判斷互動性用的附加資訊，掃描時一次取得"""
    role: str | None = None
    input_type: str | None = None
    has_click_handler: bool = False


@dataclass(frozen=True)
class ElementDescriptor:
    """單一元素的掃描結果"""
    scan_index: int
    tag_name: str
    attributes: SelectorAttributes = field(default_factory=SelectorAttributes)
    affordances: Affordances = field(default_factory=Affordances)


class ElementScanner:
    """
    可重複走訪的元素序列。

    每次 iter() 都從頭走一次，scan_index 在未變動的文件上保持穩定。
    根節點在建構時就驗證，不合法直接拋 InvalidRootError。
    """

    def __init__(self, root):
        self._root, self._is_etree = _normalize_root(root)

    def __iter__(self) -> Iterator[ElementDescriptor]:
        for index, node in enumerate(self._walk()):
            yield self._describe(node, index)

    def _walk(self) -> Iterator:
        if self._is_etree:
            for elem in self._root.iter():
                # Comment / ProcessingInstruction 的 tag 是函式
                if isinstance(elem.tag, str):
                    yield elem
            return

        if not isinstance(self._root, BeautifulSoup):
            yield self._root
        yield from self._root.find_all(True)

    def _describe(self, node, index: int) -> ElementDescriptor:
        get = _etree_getter(node) if self._is_etree else _soup_getter(node)

        test_id = None
        for name in _TEST_ID_ATTRS:
            test_id = get(name)
            if test_id is not None:
                break

        input_type = get("type")
        return ElementDescriptor(
            scan_index=index,
            tag_name=_tag_name(node, self._is_etree),
            attributes=SelectorAttributes(
                id=get("id"),
                data_test_id=test_id,
                data_role=get("data-role"),
                aria_label=get("aria-label"),
            ),
            affordances=Affordances(
                role=get("role"),
                input_type=input_type.lower() if input_type else None,
                has_click_handler=any(
                    _has_attr(node, a, self._is_etree) for a in _CLICK_HANDLER_ATTRS
                ),
            ),
        )


def scan(root) -> ElementScanner:
    """掃描入口：回傳可重複走訪的 ElementDescriptor 序列"""
    return ElementScanner(root)


def snapshot_from_driver(driver: "WebDriver") -> str:
    """
    從 Selenium WebDriver 取得目前頁面的 HTML 快照。

    只讀一次 page_source，之後的掃描都在快照上進行，
    避免 stale element 問題。
    """
    return driver.page_source


# ── 內部工具 ──

def _normalize_root(root) -> tuple[object, bool]:
    if isinstance(root, (str, bytes)):
        return BeautifulSoup(root, "html.parser"), False
    # BeautifulSoup 是 Tag 的子類別，一起處理
    if isinstance(root, Tag):
        return root, False
    if isinstance(root, ElementTree.ElementTree):
        element = root.getroot()
        if element is None:
            raise InvalidRootError(root)
        return element, True
    if isinstance(root, ElementTree.Element):
        return root, True
    raise InvalidRootError(root)


def _clean(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, list):
        value = " ".join(value)
    return value if value != "" else None


def _soup_getter(node: Tag):
    return lambda name: _clean(node.get(name))


def _etree_getter(node: ElementTree.Element):
    return lambda name: _clean(node.attrib.get(name))


def _has_attr(node, name: str, is_etree: bool) -> bool:
    if is_etree:
        return name in node.attrib
    return node.has_attr(name)


def _tag_name(node, is_etree: bool) -> str:
    if is_etree:
        # 去掉 namespace: {http://www.w3.org/1999/xhtml}div → div
        return node.tag.rsplit("}", 1)[-1].lower()
    return node.name.lower()
