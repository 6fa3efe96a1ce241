"""
Scanner CLI 入口

用法:
    # 掃描 HTML 檔，輸出 {名稱: selector} JSON
    python -m scanner page.html

    # 從 stdin 讀
    cat page.html | python -m scanner -

    # 輸出每個元素的完整掃描結果
    python -m scanner page.html --detail
"""

import argparse
import json
import sys
from pathlib import Path

from core.exceptions import PomGeneratorError
from scanner.element_scanner import scan
from scanner.messaging import SCAN_PAGE, handle_message
from scanner.name_generator import name_elements


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="頁面掃描器：產生每個元素的 selector 與名稱",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "source",
        help="HTML 檔案路徑，'-' 表示從 stdin 讀取",
    )
    parser.add_argument(
        "--detail",
        action="store_true",
        help="輸出完整掃描結果 (scan_index / tag / strategy)",
    )

    args = parser.parse_args(argv)

    if args.source == "-":
        html = sys.stdin.read()
    else:
        path = Path(args.source)
        if not path.exists():
            print(f"找不到 {path}", file=sys.stderr)
            return 1
        html = path.read_text(encoding="utf-8")

    try:
        if args.detail:
            output = [_describe(el) for el in name_elements(scan(html))]
        else:
            output = handle_message({"type": SCAN_PAGE}, html)
    except PomGeneratorError as e:
        print(f"掃描失敗: {e}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


def _describe(el) -> dict:
    return {
        "name": el.name,
        "selector": el.selector,
        "strategy": el.strategy.value,
        "scan_index": el.source.scan_index,
        "tag": el.source.tag_name,
    }


if __name__ == "__main__":
    sys.exit(main())
