"""
Selenium WebDriver Emitter

每種語言的 binding 命名差異大，所以各自一張對照表：
    By:       By.css / By.CSS_SELECTOR / By.cssSelector / By.CssSelector
    下拉選單: sendKeys (JS) / Select / SelectElement (C#)
    等待:     driver.wait(until...) / WebDriverWait

Selenium 沒有 baseURL 設定，建構子多一個 base_url 參數，
預設值是掃描時的網址 origin。
"""

from __future__ import annotations

from config.config import Config
from generator.emitters.base import BaseEmitter, ElementMethods
from generator.emitters.dialects import CtorParam, Handle
from generator.emitters.registry import register_emitter
from generator.schema import ActionKind, Framework, GenerationOptions, Language, PageModel

_DEFAULT_BASE_URL = "http://localhost"

_TYPES = {
    Language.TYPESCRIPT: ("WebDriver", "WebElementPromise"),
    Language.JAVASCRIPT: (None, None),
    Language.PYTHON: ("WebDriver", "WebElement"),
    Language.JAVA: ("WebDriver", "WebElement"),
    Language.CSHARP: ("IWebDriver", "IWebElement"),
}


@register_emitter
class SeleniumEmitter(BaseEmitter):
    framework = Framework.SELENIUM
    languages = (
        Language.TYPESCRIPT, Language.JAVASCRIPT, Language.PYTHON,
        Language.JAVA, Language.CSHARP,
    )
    async_languages = frozenset({Language.TYPESCRIPT, Language.JAVASCRIPT})

    @property
    def _driver(self) -> str:
        return self.dialect.ref("driver")

    def handle(self) -> Handle:
        return Handle("driver", _TYPES[self.language][0])

    def ctor_params(self, model: PageModel) -> tuple[CtorParam, ...]:
        base_url = (model.base_url or _DEFAULT_BASE_URL).rstrip("/")
        return (CtorParam("base_url", default=base_url),)

    def imports(self, model: PageModel, options: GenerationOptions) -> tuple[str, ...]:
        kinds = set(model.actions.values())
        selects = ActionKind.SELECT in kinds
        waits = options.include_wait_strategies
        login = model.login_descriptor is not None
        lang = self.language

        if lang in (Language.TYPESCRIPT, Language.JAVASCRIPT):
            names = ["By"]
            if lang == Language.TYPESCRIPT:
                names += ["WebDriver", "WebElementPromise"]
            if waits:
                names.append("until")
            if lang == Language.TYPESCRIPT:
                return (f"import {{ {', '.join(names)} }} from 'selenium-webdriver';",)
            return (f"const {{ {', '.join(names)} }} = require('selenium-webdriver');",)

        if lang == Language.PYTHON:
            lines = [
                "from selenium.webdriver.common.by import By",
                "from selenium.webdriver.remote.webdriver import WebDriver",
                "from selenium.webdriver.remote.webelement import WebElement",
            ]
            if waits:
                lines.append("from selenium.webdriver.support import expected_conditions as EC")
            if selects:
                lines.append("from selenium.webdriver.support.ui import Select")
            if waits or login:
                lines.append("from selenium.webdriver.support.ui import WebDriverWait")
            return tuple(lines)

        if lang == Language.JAVA:
            lines = []
            if waits or login:
                lines.append("import java.time.Duration;")
            lines += ["import org.openqa.selenium.By;"]
            if login:
                lines.append("import org.openqa.selenium.JavascriptExecutor;")
            lines += ["import org.openqa.selenium.WebDriver;", "import org.openqa.selenium.WebElement;"]
            if waits:
                lines.append("import org.openqa.selenium.support.ui.ExpectedConditions;")
            if selects:
                lines.append("import org.openqa.selenium.support.ui.Select;")
            if waits or login:
                lines.append("import org.openqa.selenium.support.ui.WebDriverWait;")
            return tuple(lines)

        lines = []
        if options.include_error_handling or waits or login:
            lines.append("using System;")
        lines.append("using OpenQA.Selenium;")
        if selects or waits or login:
            lines.append("using OpenQA.Selenium.Support.UI;")
        return tuple(lines)

    def locator_type(self) -> str | None:
        return _TYPES[self.language][1]

    def _by(self, selector: str) -> str:
        sel = self.dialect.string(selector)
        return {
            Language.TYPESCRIPT: f"By.css({sel})",
            Language.JAVASCRIPT: f"By.css({sel})",
            Language.PYTHON: f"By.CSS_SELECTOR, {sel}",
            Language.JAVA: f"By.cssSelector({sel})",
            Language.CSHARP: f"By.CssSelector({sel})",
        }[self.language]

    def locator(self, selector: str) -> str:
        find = {
            Language.PYTHON: "find_element",
            Language.CSHARP: "FindElement",
        }.get(self.language, "findElement")
        return f"{self._driver}.{find}({self._by(selector)})"

    def action(self, kind: ActionKind, selector: str, arg: str | None) -> list[str]:
        d = self.dialect
        el = self.locator(selector)
        lang = self.language
        if kind == ActionKind.CLICK:
            name = "Click" if lang == Language.CSHARP else "click"
            return [d.stmt(f"{el}.{name}()", await_=self.is_async)]
        if kind == ActionKind.TYPE:
            if lang == Language.PYTHON:
                return [f"{el}.clear()", f"{el}.send_keys({arg})"]
            if lang == Language.CSHARP:
                return [d.stmt(f"{el}.Clear()"), d.stmt(f"{el}.SendKeys({arg})")]
            return [
                d.stmt(f"{el}.clear()", await_=self.is_async),
                d.stmt(f"{el}.sendKeys({arg})", await_=self.is_async),
            ]
        # 下拉選單
        if lang == Language.PYTHON:
            return [f"Select({el}).select_by_visible_text({arg})"]
        if lang == Language.JAVA:
            return [d.stmt(f"new Select({el}).selectByVisibleText({arg})")]
        if lang == Language.CSHARP:
            return [d.stmt(f"new SelectElement({el}).SelectByText({arg})")]
        return [d.stmt(f"{el}.sendKeys({arg})", await_=True)]

    def wait(self, selector: str, timeout_arg: str) -> list[str]:
        d = self.dialect
        lang = self.language
        if lang == Language.PYTHON:
            return [
                f"WebDriverWait(self.driver, {timeout_arg} / 1000).until(",
                f"    EC.visibility_of_element_located(({self._by(selector)}))",
                ")",
            ]
        if lang == Language.JAVA:
            return [d.stmt(
                f"new WebDriverWait({self._driver}, Duration.ofMillis({timeout_arg}))"
                f".until(ExpectedConditions.visibilityOfElementLocated({self._by(selector)}))"
            )]
        if lang == Language.CSHARP:
            return [d.stmt(
                f"new WebDriverWait({self._driver}, TimeSpan.FromMilliseconds({timeout_arg}))"
                f".Until(drv => drv.FindElement({self._by(selector)}).Displayed)"
            )]
        return [
            "const element = " + d.stmt(
                f"{self._driver}.wait(until.elementLocated({self._by(selector)}), {timeout_arg})",
                await_=True,
            ),
            d.stmt(f"{self._driver}.wait(until.elementIsVisible(element), {timeout_arg})", await_=True),
        ]

    def visit(self, model: PageModel) -> list[str]:
        d = self.dialect
        url = f"{d.ref('base_url')} + {d.string(model.visit_path)}"
        if self.language == Language.CSHARP:
            return [d.stmt(f"{self._driver}.Navigate().GoToUrl({url})")]
        return [d.stmt(f"{self._driver}.get({url})", await_=self.is_async)]

    def wait_for_login_success(self, model: PageModel) -> list[str]:
        d = self.dialect
        timeout = Config.WAIT_TIMEOUT_MS
        script = d.string("return document.readyState")
        lang = self.language
        if lang == Language.PYTHON:
            return [
                f"WebDriverWait(self.driver, {timeout / 1000}).until(",
                f'    lambda drv: drv.execute_script({script}) == "complete"',
                ")",
            ]
        if lang == Language.JAVA:
            return [d.stmt(
                f"new WebDriverWait({self._driver}, Duration.ofMillis({timeout}))"
                f".until(drv -> \"complete\".equals(((JavascriptExecutor) drv).executeScript({script})))"
            )]
        if lang == Language.CSHARP:
            return [d.stmt(
                f"new WebDriverWait({self._driver}, TimeSpan.FromMilliseconds({timeout}))"
                f".Until(drv => \"complete\".Equals(((IJavaScriptExecutor)drv).ExecuteScript({script})))"
            )]
        return [d.stmt(
            f"{self._driver}.wait(async () => "
            f"(await {self._driver}.executeScript({script})) === 'complete', {timeout})",
            await_=True,
        )]

    # ── 測試樣板 ──

    def test_stub(self, model: PageModel, methods: list[ElementMethods], visit_name: str) -> str:
        render = {
            Language.TYPESCRIPT: self._test_mocha,
            Language.JAVASCRIPT: self._test_mocha,
            Language.PYTHON: self._test_py,
            Language.JAVA: self._test_java,
            Language.CSHARP: self._test_cs,
        }[self.language]
        return "\n".join(render(model, self.stable_elements(methods), visit_name)) + "\n"

    def _test_mocha(self, model, checks, visit_name) -> list[str]:
        cls = model.class_name
        path = self.dialect.string(model.visit_path)
        if self.language == Language.TYPESCRIPT:
            lines = [
                "import { strict as assert } from 'assert';",
                "import { Builder, WebDriver } from 'selenium-webdriver';",
                f"import {{ {cls} }} from '../{cls}';",
                "",
                f"describe('{cls}', function () {{",
                "  let driver: WebDriver;",
            ]
        else:
            lines = [
                "const assert = require('assert').strict;",
                "const { Builder } = require('selenium-webdriver');",
                f"const {{ {cls} }} = require('../{cls}');",
                "",
                f"describe('{cls}', function () {{",
                "  let driver;",
            ]
        lines += [
            "",
            "  before(async function () {",
            "    driver = await new Builder().forBrowser('chrome').build();",
            "  });",
            "",
            "  after(async function () {",
            "    await driver.quit();",
            "  });",
            "",
            f"  it('visits ' + {path}, async function () {{",
            f"    const pom = new {cls}(driver);",
            f"    await pom.{visit_name}();",
            f"    assert.ok((await driver.getCurrentUrl()).includes({path}));",
            "  });",
        ]
        if checks:
            lines += [
                "",
                "  it('locates page elements', async function () {",
                f"    const pom = new {cls}(driver);",
                f"    await pom.{visit_name}();",
            ]
            lines += [f"    assert.ok(await pom.{m.getter}());" for m in checks]
            lines.append("  });")
        lines.append("});")
        return lines

    def _test_py(self, model, checks, visit_name) -> list[str]:
        cls = model.class_name
        lines = [
            "import sys",
            "from pathlib import Path",
            "",
            "import pytest",
            "from selenium import webdriver",
            "",
            "sys.path.insert(0, str(Path(__file__).resolve().parent.parent))",
            "",
            f"from {cls} import {cls}  # noqa: E402",
            "",
            "",
            "@pytest.fixture",
            "def driver():",
            "    drv = webdriver.Chrome()",
            "    yield drv",
            "    drv.quit()",
            "",
            "",
            "def test_visit(driver):",
            f"    pom = {cls}(driver)",
            f"    pom.{visit_name}()",
            f"    assert {self.dialect.string(model.visit_path)} in driver.current_url",
        ]
        if checks:
            lines += [
                "",
                "",
                "def test_locates_page_elements(driver):",
                f"    pom = {cls}(driver)",
                f"    pom.{visit_name}()",
            ]
            lines += [f"    assert pom.{m.getter}() is not None" for m in checks]
        return lines

    def _test_java(self, model, checks, visit_name) -> list[str]:
        cls = model.class_name
        lines = [
            "import org.junit.jupiter.api.AfterEach;",
            "import org.junit.jupiter.api.BeforeEach;",
            "import org.junit.jupiter.api.Test;",
            "import org.openqa.selenium.WebDriver;",
            "import org.openqa.selenium.chrome.ChromeDriver;",
            "",
            "import static org.junit.jupiter.api.Assertions.assertNotNull;",
            "import static org.junit.jupiter.api.Assertions.assertTrue;",
            "",
            f"class {cls}Test {{",
            "    WebDriver driver;",
            "",
            "    @BeforeEach",
            "    void setUp() {",
            "        driver = new ChromeDriver();",
            "    }",
            "",
            "    @AfterEach",
            "    void tearDown() {",
            "        driver.quit();",
            "    }",
            "",
            "    @Test",
            "    void visitsPage() {",
            f"        {cls} pom = new {cls}(driver);",
            f"        pom.{visit_name}();",
            f"        assertTrue(driver.getCurrentUrl().contains({self.dialect.string(model.visit_path)}));",
            "    }",
        ]
        if checks:
            lines += [
                "",
                "    @Test",
                "    void locatesPageElements() {",
                f"        {cls} pom = new {cls}(driver);",
                f"        pom.{visit_name}();",
            ]
            lines += [f"        assertNotNull(pom.{m.getter}());" for m in checks]
            lines.append("    }")
        lines.append("}")
        return lines

    def _test_cs(self, model, checks, visit_name) -> list[str]:
        cls = model.class_name
        lines = [
            "using NUnit.Framework;",
            "using OpenQA.Selenium;",
            "using OpenQA.Selenium.Chrome;",
            "",
            "[TestFixture]",
            f"public class {cls}Test",
            "{",
            "    private IWebDriver _driver;",
            "",
            "    [SetUp]",
            "    public void SetUp()",
            "    {",
            "        _driver = new ChromeDriver();",
            "    }",
            "",
            "    [TearDown]",
            "    public void TearDown()",
            "    {",
            "        _driver.Quit();",
            "    }",
            "",
            "    [Test]",
            "    public void VisitsPage()",
            "    {",
            f"        var pom = new {cls}(_driver);",
            f"        pom.{visit_name}();",
            f"        StringAssert.Contains({self.dialect.string(model.visit_path)}, _driver.Url);",
            "    }",
        ]
        if checks:
            lines += [
                "",
                "    [Test]",
                "    public void LocatesPageElements()",
                "    {",
                f"        var pom = new {cls}(_driver);",
                f"        pom.{visit_name}();",
            ]
            lines += [f"        Assert.That(pom.{m.getter}(), Is.Not.Null);" for m in checks]
            lines.append("    }")
        lines.append("}")
        return lines
