"""
NameGenerator — 元素名稱產生與去重

名稱來源優先序：data-test-id → id → tag + scan_index，
再把 [A-Za-z0-9] 以外的字元全換成 "_"。

第二階段對整頁做去重：後出現且撞名的元素加上 "_<scan_index>"，
若仍撞名再加 "_2"、"_3"…，絕不讓後者覆蓋前者。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from scanner.element_scanner import ElementDescriptor
from scanner.selector_resolver import SelectorStrategy, resolve_selector

_UNSAFE = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True)
class NamedElement:
    """已命名、已決定 selector 的元素"""
    name: str
    selector: str
    strategy: SelectorStrategy
    source: ElementDescriptor


def sanitize_name(raw: str) -> str:
    """非英數字元換成底線；空字串回傳 "_"，保證結果符合 ^[A-Za-z0-9_]+$"""
    return _UNSAFE.sub("_", raw) or "_"


def raw_name(descriptor: ElementDescriptor) -> str:
    attrs = descriptor.attributes
    if attrs.data_test_id is not None:
        return attrs.data_test_id
    if attrs.id is not None:
        return attrs.id
    return f"{descriptor.tag_name}{descriptor.scan_index}"


def candidate_name(descriptor: ElementDescriptor) -> str:
    """單一元素的候選名稱 (尚未去重)"""
    return sanitize_name(raw_name(descriptor))


def name_elements(descriptors: Iterable[ElementDescriptor]) -> list[NamedElement]:
    """
    決定 selector + 名稱，並對整頁去重。

    回傳順序與掃描順序相同，每個元素一筆，不會遺漏。
    """
    named: list[NamedElement] = []
    used: set[str] = set()

    for descriptor in descriptors:
        selector = resolve_selector(descriptor)
        name = candidate_name(descriptor)
        if name in used:
            name = _disambiguate(name, descriptor.scan_index, used)
        used.add(name)
        named.append(NamedElement(
            name=name,
            selector=selector.value,
            strategy=selector.strategy,
            source=descriptor,
        ))

    return named


def _disambiguate(name: str, scan_index: int, used: set[str]) -> str:
    candidate = f"{name}_{scan_index}"
    counter = 2
    while candidate in used:
        candidate = f"{name}_{scan_index}_{counter}"
        counter += 1
    return candidate
