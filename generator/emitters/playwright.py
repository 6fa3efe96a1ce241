"""
Playwright Emitter

五種語言共用同一套 API，只差命名慣例：
    TS / JS / Java: camelCase (page.locator().selectOption())
    Python:         snake_case (sync API，page.locator().select_option())
    C#:             PascalCase + Async (Page.Locator().SelectOptionAsync())
"""

from __future__ import annotations

import re

from generator.emitters.base import BaseEmitter, ElementMethods
from generator.emitters.dialects import Handle
from generator.emitters.registry import register_emitter
from generator.schema import ActionKind, Framework, GenerationOptions, Language, PageModel

_TYPES = {
    Language.TYPESCRIPT: ("Page", "Locator"),
    Language.JAVASCRIPT: (None, None),
    Language.PYTHON: ("Page", "Locator"),
    Language.JAVA: ("Page", "Locator"),
    Language.CSHARP: ("IPage", "ILocator"),
}

_ACTION_API = {
    ActionKind.CLICK: "click",
    ActionKind.TYPE: "fill",
    ActionKind.SELECT: "selectOption",
}


@register_emitter
class PlaywrightEmitter(BaseEmitter):
    framework = Framework.PLAYWRIGHT
    languages = (
        Language.TYPESCRIPT, Language.JAVASCRIPT, Language.PYTHON,
        Language.JAVA, Language.CSHARP,
    )
    async_languages = frozenset({Language.TYPESCRIPT, Language.JAVASCRIPT, Language.CSHARP})

    def _api(self, name: str, awaited: bool = True) -> str:
        """Playwright API 名稱依語言轉換"""
        if self.language == Language.PYTHON:
            return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()
        if self.language == Language.CSHARP:
            return name[0].upper() + name[1:] + ("Async" if awaited else "")
        return name

    @property
    def _page(self) -> str:
        return self.dialect.ref("page")

    def handle(self) -> Handle:
        return Handle("page", _TYPES[self.language][0])

    def imports(self, model: PageModel, options: GenerationOptions) -> tuple[str, ...]:
        waits = options.include_wait_strategies
        login = model.login_descriptor is not None
        if self.language == Language.TYPESCRIPT:
            return ("import { Locator, Page } from '@playwright/test';",)
        if self.language == Language.JAVASCRIPT:
            return ()
        if self.language == Language.PYTHON:
            return ("from playwright.sync_api import Locator, Page",)
        if self.language == Language.JAVA:
            lines = [
                "import com.microsoft.playwright.Locator;",
                "import com.microsoft.playwright.Page;",
            ]
            if login:
                lines.append("import com.microsoft.playwright.options.LoadState;")
            if waits:
                lines.append("import com.microsoft.playwright.options.WaitForSelectorState;")
            return tuple(lines)
        lines = []
        if options.include_error_handling:
            lines.append("using System;")
        lines += ["using System.Threading.Tasks;", "using Microsoft.Playwright;"]
        return tuple(lines)

    def locator_type(self) -> str | None:
        return _TYPES[self.language][1]

    def locator(self, selector: str) -> str:
        return f"{self._page}.{self._api('locator', awaited=False)}({self.dialect.string(selector)})"

    def action(self, kind: ActionKind, selector: str, arg: str | None) -> list[str]:
        call = f"{self.locator(selector)}.{self._api(_ACTION_API[kind])}({arg or ''})"
        return [self.dialect.stmt(call, await_=self.is_async)]

    def wait(self, selector: str, timeout_arg: str) -> list[str]:
        loc = self.locator(selector)
        if self.language == Language.PYTHON:
            call = f'{loc}.wait_for(state="visible", timeout={timeout_arg})'
        elif self.language == Language.JAVA:
            call = (
                f"{loc}.waitFor(new Locator.WaitForOptions()"
                f".setState(WaitForSelectorState.VISIBLE).setTimeout({timeout_arg}))"
            )
        elif self.language == Language.CSHARP:
            call = (
                f"{loc}.WaitForAsync(new() {{ State = WaitForSelectorState.Visible, "
                f"Timeout = {timeout_arg} }})"
            )
        else:
            call = f"{loc}.waitFor({{ state: 'visible', timeout: {timeout_arg} }})"
        return [self.dialect.stmt(call, await_=self.is_async)]

    def visit(self, model: PageModel) -> list[str]:
        goto = "navigate" if self.language == Language.JAVA else "goto"
        call = f"{self._page}.{self._api(goto)}({self.dialect.string(model.visit_path)})"
        return [self.dialect.stmt(call, await_=self.is_async)]

    def wait_for_login_success(self, model: PageModel) -> list[str]:
        state = {
            Language.PYTHON: '"networkidle"',
            Language.JAVA: "LoadState.NETWORKIDLE",
            Language.CSHARP: "LoadState.NetworkIdle",
        }.get(self.language, "'networkidle'")
        call = f"{self._page}.{self._api('waitForLoadState')}({state})"
        return [self.dialect.stmt(call, await_=self.is_async)]

    # ── 測試樣板 ──

    def test_stub(self, model: PageModel, methods: list[ElementMethods], visit_name: str) -> str:
        render = {
            Language.TYPESCRIPT: self._test_ts,
            Language.JAVASCRIPT: self._test_ts,
            Language.PYTHON: self._test_py,
            Language.JAVA: self._test_java,
            Language.CSHARP: self._test_cs,
        }[self.language]
        return "\n".join(render(model, self.stable_elements(methods), visit_name)) + "\n"

    def _test_ts(self, model, checks, visit_name) -> list[str]:
        cls = model.class_name
        path = self.dialect.string(model.visit_path)
        if self.language == Language.TYPESCRIPT:
            lines = [
                "import { test, expect } from '@playwright/test';",
                f"import {{ {cls} }} from '../{cls}';",
            ]
        else:
            lines = [
                "const { test, expect } = require('@playwright/test');",
                f"const {{ {cls} }} = require('../{cls}');",
            ]
        lines += [
            "",
            f"test.describe('{cls}', () => {{",
            f"  test('visits ' + {path}, async ({{ page }}) => {{",
            f"    const pom = new {cls}(page);",
            f"    await pom.{visit_name}();",
            f"    expect(page.url()).toContain({path});",
            "  });",
        ]
        if checks:
            lines += [
                "",
                "  test('locates page elements', async ({ page }) => {",
                f"    const pom = new {cls}(page);",
                f"    await pom.{visit_name}();",
            ]
            lines += [f"    await expect(pom.{m.getter}()).toBeAttached();" for m in checks]
            lines.append("  });")
        lines.append("});")
        return lines

    def _test_py(self, model, checks, visit_name) -> list[str]:
        cls = model.class_name
        lines = [
            "import sys",
            "from pathlib import Path",
            "",
            "from playwright.sync_api import Page, expect",
            "",
            "sys.path.insert(0, str(Path(__file__).resolve().parent.parent))",
            "",
            f"from {cls} import {cls}  # noqa: E402",
            "",
            "",
            "def test_visit(page: Page):",
            f"    pom = {cls}(page)",
            f"    pom.{visit_name}()",
            f"    assert {self.dialect.string(model.visit_path)} in page.url",
        ]
        if checks:
            lines += [
                "",
                "",
                "def test_locates_page_elements(page: Page):",
                f"    pom = {cls}(page)",
                f"    pom.{visit_name}()",
            ]
            lines += [f"    expect(pom.{m.getter}()).to_be_attached()" for m in checks]
        return lines

    def _test_java(self, model, checks, visit_name) -> list[str]:
        cls = model.class_name
        lines = [
            "import com.microsoft.playwright.Browser;",
            "import com.microsoft.playwright.Page;",
            "import com.microsoft.playwright.Playwright;",
            "import org.junit.jupiter.api.AfterAll;",
            "import org.junit.jupiter.api.AfterEach;",
            "import org.junit.jupiter.api.BeforeAll;",
            "import org.junit.jupiter.api.BeforeEach;",
            "import org.junit.jupiter.api.Test;",
            "",
            "import static com.microsoft.playwright.assertions.PlaywrightAssertions.assertThat;",
            "import static org.junit.jupiter.api.Assertions.assertTrue;",
            "",
            f"class {cls}Test {{",
            "    static Playwright playwright;",
            "    static Browser browser;",
            "    Page page;",
            "",
            "    @BeforeAll",
            "    static void launch() {",
            "        playwright = Playwright.create();",
            "        browser = playwright.chromium().launch();",
            "    }",
            "",
            "    @AfterAll",
            "    static void shutdown() {",
            "        playwright.close();",
            "    }",
            "",
            "    @BeforeEach",
            "    void openPage() {",
            "        page = browser.newPage();",
            "    }",
            "",
            "    @AfterEach",
            "    void closePage() {",
            "        page.close();",
            "    }",
            "",
            "    @Test",
            "    void visitsPage() {",
            f"        {cls} pom = new {cls}(page);",
            f"        pom.{visit_name}();",
            f"        assertTrue(page.url().contains({self.dialect.string(model.visit_path)}));",
            "    }",
        ]
        if checks:
            lines += [
                "",
                "    @Test",
                "    void locatesPageElements() {",
                f"        {cls} pom = new {cls}(page);",
                f"        pom.{visit_name}();",
            ]
            lines += [f"        assertThat(pom.{m.getter}()).isAttached();" for m in checks]
            lines.append("    }")
        lines.append("}")
        return lines

    def _test_cs(self, model, checks, visit_name) -> list[str]:
        cls = model.class_name
        lines = [
            "using System.Threading.Tasks;",
            "using Microsoft.Playwright.NUnit;",
            "using NUnit.Framework;",
            "",
            "[TestFixture]",
            f"public class {cls}Test : PageTest",
            "{",
            "    [Test]",
            "    public async Task VisitsPage()",
            "    {",
            f"        var pom = new {cls}(Page);",
            f"        await pom.{visit_name}();",
            f"        StringAssert.Contains({self.dialect.string(model.visit_path)}, Page.Url);",
            "    }",
        ]
        if checks:
            lines += [
                "",
                "    [Test]",
                "    public async Task LocatesPageElements()",
                "    {",
                f"        var pom = new {cls}(Page);",
                f"        await pom.{visit_name}();",
            ]
            lines += [f"        await Expect(pom.{m.getter}()).ToBeAttachedAsync();" for m in checks]
            lines.append("    }")
        lines.append("}")
        return lines
