"""
Page Object 產生器 (Generator)

掃描結果 → PageModel (與框架無關) → Emitter (每個 framework × language 一個)
→ class 原始碼 + 測試樣板 + metadata。

用法:
    python -m generator --html login.html --url https://example.com/login \\
        --framework cypress --language typescript

程式化呼叫:
    from generator.engine import generate_pom
    result = generate_pom(url, {"framework": "selenium", "language": "java"}, source=html)

產出目錄：
    generated-pom/
    └── <framework>/<language>/
        ├── <ClassName>.<ext>
        ├── <ClassName>.meta.json
        └── tests/<ClassName>.test.<ext>
"""
