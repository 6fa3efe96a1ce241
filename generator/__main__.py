"""
CLI 入口

用法:
    # 從 HTML 檔產生 Cypress TypeScript Page Object
    python -m generator --html login.html --url https://example.com/login \\
        --framework cypress --language typescript --include-tests

    # 沒有 --html 時以 HTTP 取得頁面
    python -m generator --url https://example.com/login --framework selenium --language python

    # 一次產生所有支援的組合
    python -m generator --html login.html --url https://example.com/login --all-targets

    # 從 JSON 選項檔 (欄位同 generatePOM 的 options，可用 camelCase)
    python -m generator --html login.html --url https://example.com/login --options opts.json

    # 印出範例選項檔
    python -m generator --example > opts.json
"""

import argparse
import json
import sys
from pathlib import Path

from core.exceptions import PomGeneratorError
from generator.artifact_writer import ArtifactWriter
from generator.emitters import supported_targets
from generator.engine import GeneratorEngine
from generator.schema import Framework, GenerationOptions, Language, LoginType

EXAMPLE_OPTIONS = {
    "framework": "playwright",
    "language": "typescript",
    "includeTests": True,
    "includeComments": True,
    "includeWaitStrategies": True,
    "includeErrorHandling": False,
    "loginConfig": {
        "type": "basic",
        "credentials": {"username": "", "password": ""},
    },
    "browser": {"name": "chrome", "headless": True},
}


def _build_options(args) -> GenerationOptions:
    data: dict = {}
    if args.options:
        with open(args.options, encoding="utf-8") as f:
            data = json.load(f)

    # 命令列參數優先於選項檔
    if args.framework:
        data["framework"] = args.framework
    if args.language:
        data["language"] = args.language
    if args.page_name:
        data["page_name"] = args.page_name
    for flag in ("include_tests", "include_comments",
                 "include_wait_strategies", "include_error_handling"):
        if getattr(args, flag):
            data[flag] = True
    if args.login_type:
        # 只帶欄位名稱，帳密值不經過命令列
        fields = [f.strip() for f in args.login_fields.split(",") if f.strip()]
        data["login_config"] = {
            "type": args.login_type,
            "credentials": {name: "" for name in fields},
        }
    return GenerationOptions.from_dict(data)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Page Object 產生器",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
範例:
  python -m generator --html login.html --url https://example.com/login --framework cypress
  python -m generator --url https://example.com/login --all-targets
  python -m generator --example
""",
    )
    parser.add_argument("--url", help="頁面網址 (決定頁面名稱與 base URL)")
    parser.add_argument("--html", help="HTML 檔案路徑，'-' 表示 stdin；省略時以 HTTP 取得")
    parser.add_argument("--framework", choices=[f.value for f in Framework])
    parser.add_argument("--language", choices=[lang.value for lang in Language])
    parser.add_argument("--all-targets", action="store_true", help="產生所有支援的組合")
    parser.add_argument("--page-name", help="覆蓋由網址推得的頁面名稱")
    parser.add_argument("--include-tests", action="store_true")
    parser.add_argument("--include-comments", action="store_true")
    parser.add_argument("--include-wait-strategies", action="store_true")
    parser.add_argument("--include-error-handling", action="store_true")
    parser.add_argument("--login-type", choices=[t.value for t in LoginType])
    parser.add_argument(
        "--login-fields", default="username,password",
        help="登入欄位名稱，逗號分隔 (預設 username,password)",
    )
    parser.add_argument("--options", help="JSON 選項檔")
    parser.add_argument("--output", help="輸出目錄 (預設 generated-pom)")
    parser.add_argument("--json", action="store_true", help="以 JSON 輸出結果")
    parser.add_argument("--example", action="store_true", help="印出範例選項檔")

    args = parser.parse_args(argv)

    if args.example:
        print(json.dumps(EXAMPLE_OPTIONS, indent=4, ensure_ascii=False))
        return 0
    if not args.url:
        parser.error("必須指定 --url")

    source = None
    if args.html == "-":
        source = sys.stdin.read()
    elif args.html:
        path = Path(args.html)
        if not path.exists():
            print(f"找不到 {path}", file=sys.stderr)
            return 1
        source = path.read_text(encoding="utf-8")

    try:
        options = _build_options(args)
    except PomGeneratorError as e:
        print(f"選項錯誤: {e}", file=sys.stderr)
        return 1

    engine = GeneratorEngine()
    if args.all_targets:
        results = engine.generate_targets(args.url, supported_targets(), options, source)
    else:
        results = [engine.generate_pom(args.url, options, source)]

    writer = ArtifactWriter(args.output)
    exit_code = 0
    for result in results:
        if not result.success:
            exit_code = 1
            for err in result.errors:
                print(f"✗ {err}", file=sys.stderr)
            continue
        for p in writer.write(result.artifact):
            print(f"  ✓ {p}", file=sys.stderr)
        for warning in result.warnings:
            print(f"  ! {warning}", file=sys.stderr)

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
