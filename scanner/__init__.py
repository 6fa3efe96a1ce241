"""
scanner — 頁面掃描、selector 決策、元素命名

流程：
    頁面快照 → ElementScanner (文件順序走訪) →
    SelectorResolver (固定優先序) → NameGenerator (整頁去重) →
    NamedElement 序列，交給 generator 建立 Page Model

SCAN_PAGE 訊息邊界見 scanner.messaging。
"""

from scanner.element_scanner import (
    Affordances,
    ElementDescriptor,
    ElementScanner,
    SelectorAttributes,
    scan,
    snapshot_from_driver,
)
from scanner.messaging import SCAN_PAGE, handle_message, scan_page
from scanner.name_generator import NamedElement, name_elements, sanitize_name
from scanner.page_fetcher import PageFetcher, fetch_page
from scanner.selector_resolver import SelectorCandidate, SelectorStrategy, resolve_selector

__all__ = [
    "Affordances",
    "ElementDescriptor",
    "ElementScanner",
    "SelectorAttributes",
    "scan",
    "snapshot_from_driver",
    "SCAN_PAGE",
    "handle_message",
    "scan_page",
    "NamedElement",
    "name_elements",
    "sanitize_name",
    "PageFetcher",
    "fetch_page",
    "SelectorCandidate",
    "SelectorStrategy",
    "resolve_selector",
]
