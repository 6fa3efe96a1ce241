"""
generator/emitters/selenium.py 單元測試
"""

import pytest

from generator.emitters import get_emitter
from generator.page_model_builder import PageModelBuilder
from generator.schema import Framework, Language
from scanner.element_scanner import scan
from scanner.name_generator import name_elements

_LOGIN = {"type": "basic", "credentials": {"username": "", "password": ""}}


def _artifact(build_model, make_options, language: str, **flags):
    options = make_options(framework="selenium", language=language, **flags)
    return get_emitter(Framework.SELENIUM, options.language).emit(build_model(options), options)


@pytest.mark.unit
class TestConstructor:
    """base_url 建構子參數"""

    @pytest.mark.unit
    def test_default_from_scan_url(self, build_model, make_options):
        source = _artifact(build_model, make_options, "python").class_source
        assert (
            '    def __init__(self, driver: WebDriver, base_url: str = "https://example.com"):'
        ) in source
        assert '        self.driver.get(self.base_url + "/login")' in source

    @pytest.mark.unit
    def test_localhost_without_url(self, make_options, login_elements):
        options = make_options(framework="selenium", language="typescript")
        model = PageModelBuilder(options).build(login_elements, "login")
        source = get_emitter(Framework.SELENIUM, Language.TYPESCRIPT).emit(model, options).class_source
        assert "  constructor(driver: WebDriver, baseUrl: string = 'http://localhost') {" in source
        assert "    await this.driver.get(this.baseUrl + '/login');" in source

    @pytest.mark.unit
    def test_java_two_constructors(self, build_model, make_options):
        source = _artifact(build_model, make_options, "java").class_source
        assert "    public LoginPage(WebDriver driver, String baseUrl) {" in source
        assert '        this(driver, "https://example.com");' in source
        assert '        driver.get(baseUrl + "/login");' in source

    @pytest.mark.unit
    def test_csharp_navigate(self, build_model, make_options):
        source = _artifact(build_model, make_options, "csharp").class_source
        assert '    public LoginPage(IWebDriver driver, string baseUrl = "https://example.com")' in source
        assert '        _driver.Navigate().GoToUrl(_baseUrl + "/login");' in source


@pytest.mark.unit
class TestActions:
    """動作方法"""

    @pytest.mark.unit
    def test_python_type_clears_first(self, build_model, make_options):
        source = _artifact(build_model, make_options, "python").class_source
        assert (
            "    def type_username(self, value: str) -> None:\n"
            '        self.driver.find_element(By.CSS_SELECTOR, "#username").clear()\n'
            '        self.driver.find_element(By.CSS_SELECTOR, "#username").send_keys(value)\n'
        ) in source

    @pytest.mark.unit
    def test_select_per_language(self, build_model, make_options):
        py = _artifact(build_model, make_options, "python").class_source
        assert "Select(self.driver.find_element(" in py
        assert ").select_by_visible_text(option)" in py
        assert "from selenium.webdriver.support.ui import Select" in py

        java = _artifact(build_model, make_options, "java").class_source
        assert "new Select(driver.findElement(By.cssSelector(" in java

        cs = _artifact(build_model, make_options, "csharp").class_source
        assert "new SelectElement(_driver.FindElement(By.CssSelector(" in cs

        ts = _artifact(build_model, make_options, "typescript").class_source
        assert "    await this.driver.findElement(By.css('[data-test-id=\"locale\"]')).sendKeys(option);" in ts

    @pytest.mark.unit
    def test_typescript_getter_not_awaited(self, build_model, make_options):
        source = _artifact(build_model, make_options, "typescript").class_source
        assert "  username(): WebElementPromise {\n    return this.driver.findElement(By.css('#username'));" in source


@pytest.mark.unit
class TestImports:
    """依內容決定 import"""

    @pytest.mark.unit
    def test_python_minimal(self, make_options):
        options = make_options(framework="selenium", language="python")
        model = PageModelBuilder(options).build(name_elements(scan("<button id='go'></button>")), "x")
        imports = get_emitter(Framework.SELENIUM, Language.PYTHON).imports(model, options)
        assert imports == (
            "from selenium.webdriver.common.by import By",
            "from selenium.webdriver.remote.webdriver import WebDriver",
            "from selenium.webdriver.remote.webelement import WebElement",
        )

    @pytest.mark.unit
    def test_python_waits(self, build_model, make_options):
        artifact = _artifact(build_model, make_options, "python", includeWaitStrategies=True)
        assert "from selenium.webdriver.support import expected_conditions as EC" in artifact.imports
        assert "from selenium.webdriver.support.ui import WebDriverWait" in artifact.imports
        assert (
            "        WebDriverWait(self.driver, timeout_ms / 1000).until(\n"
            '            EC.visibility_of_element_located((By.CSS_SELECTOR, "#username"))\n'
            "        )\n"
        ) in artifact.class_source

    @pytest.mark.unit
    def test_typescript_until(self, build_model, make_options):
        artifact = _artifact(build_model, make_options, "typescript", includeWaitStrategies=True)
        assert artifact.imports == (
            "import { By, WebDriver, WebElementPromise, until } from 'selenium-webdriver';",
        )
        assert "    const element = await this.driver.wait(until.elementLocated(By.css('#username')), timeoutMs);" in artifact.class_source

    @pytest.mark.unit
    def test_java_login(self, build_model, make_options):
        artifact = _artifact(build_model, make_options, "java", loginConfig=_LOGIN)
        assert "import java.time.Duration;" in artifact.imports
        assert "import org.openqa.selenium.JavascriptExecutor;" in artifact.imports
        assert "import org.openqa.selenium.support.ui.WebDriverWait;" in artifact.imports
        assert "    public void login(String username, String password) {" in artifact.class_source

    @pytest.mark.unit
    def test_csharp_system_for_error_handling(self, build_model, make_options):
        artifact = _artifact(build_model, make_options, "csharp", includeErrorHandling=True)
        assert artifact.imports[0] == "using System;"
        assert "    public ActionResult ClickLogin_btn()" in artifact.class_source
        assert "        catch (Exception e)" in artifact.class_source


@pytest.mark.unit
class TestTestStubs:
    """測試樣板"""

    @pytest.mark.unit
    @pytest.mark.parametrize("language, marker", [
        ("typescript", "import { Builder, WebDriver } from 'selenium-webdriver';"),
        ("javascript", "const { Builder } = require('selenium-webdriver');"),
        ("python", "def driver():"),
        ("java", "driver = new ChromeDriver();"),
        ("csharp", "_driver = new ChromeDriver();"),
    ])
    def test_stub_per_language(self, language, marker, build_model, make_options):
        artifact = _artifact(build_model, make_options, language, includeTests=True)
        assert marker in artifact.test_source

    @pytest.mark.unit
    def test_python_stub_checks_stable_elements(self, build_model, make_options):
        artifact = _artifact(build_model, make_options, "python", includeTests=True)
        assert "    assert pom.username() is not None" in artifact.test_source
        assert "pom.html0()" not in artifact.test_source
