"""
SelectorResolver — 元素 selector 決策

固定優先序，由上而下第一個命中即採用，不做評分：
    1. id             → #<id>
    2. data-test-id   → [data-test-id="<value>"]   (含別名 data-testid)
    3. data-role      → [data-role="<value>"]
    4. aria-label     → [aria-label="<value>"]
    5. 以上皆無       → <tag>:nth-of-type(<scan_index + 1>)

第 5 項用的是「整份文件的掃描順序」，不是同層兄弟節點的位置，
在真實 selector 引擎中通常對不上；為了與既有產出相容，公式維持不變。

重複 id (不合法的 markup) 不偵測，每個元素各自得到同一個 #id。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from scanner.element_scanner import ElementDescriptor


class SelectorStrategy(Enum):
    ID = "id"
    DATA_TEST_ID = "data-test-id"
    DATA_ROLE = "data-role"
    ARIA_LABEL = "aria-label"
    POSITIONAL = "positional"


@dataclass(frozen=True)
class SelectorCandidate:
    """決策結果：(strategy, value)"""
    strategy: SelectorStrategy
    value: str


def resolve_selector(descriptor: ElementDescriptor) -> SelectorCandidate:
    """將單一元素對應到唯一一個 selector"""
    attrs = descriptor.attributes

    if attrs.id is not None:
        return SelectorCandidate(SelectorStrategy.ID, f"#{attrs.id}")
    if attrs.data_test_id is not None:
        return SelectorCandidate(
            SelectorStrategy.DATA_TEST_ID, f'[data-test-id="{attrs.data_test_id}"]'
        )
    if attrs.data_role is not None:
        return SelectorCandidate(
            SelectorStrategy.DATA_ROLE, f'[data-role="{attrs.data_role}"]'
        )
    if attrs.aria_label is not None:
        return SelectorCandidate(
            SelectorStrategy.ARIA_LABEL, f'[aria-label="{attrs.aria_label}"]'
        )
    return SelectorCandidate(
        SelectorStrategy.POSITIONAL,
        f"{descriptor.tag_name}:nth-of-type({descriptor.scan_index + 1})",
    )
