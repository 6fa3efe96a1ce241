"""
generator/emitters/dialects.py 單元測試

驗證各語言的命名慣例、保留字處理、字串常值與外框。
"""

import pytest

from generator.emitters.dialects import (
    RESULT, ClassSpec, CtorParam, Handle, MethodSpec, Param, ParamType, dialect_for,
)
from generator.schema import Language

TS = dialect_for(Language.TYPESCRIPT)
JS = dialect_for(Language.JAVASCRIPT)
PY = dialect_for(Language.PYTHON)
JAVA = dialect_for(Language.JAVA)
CS = dialect_for(Language.CSHARP)


@pytest.mark.unit
class TestNaming:
    """命名慣例"""

    @pytest.mark.unit
    @pytest.mark.parametrize("dialect, expected", [
        (TS, "waitForLogin_btn"),
        (JAVA, "waitForLogin_btn"),
        (PY, "wait_for_login_btn"),
        (CS, "WaitForLogin_btn"),
    ])
    def test_method_name(self, dialect, expected):
        assert dialect.method_name(("wait", "for"), "login_btn") == expected

    @pytest.mark.unit
    def test_getter_keeps_element_name(self):
        assert TS.method_name((), "username") == "username"
        assert PY.method_name((), "username") == "username"
        assert CS.method_name((), "username") == "Username"

    @pytest.mark.unit
    def test_param_name(self):
        assert TS.param_name("timeout_ms") == "timeoutMs"
        assert JAVA.param_name("base_url") == "baseUrl"
        assert PY.param_name("timeout_ms") == "timeout_ms"

    @pytest.mark.unit
    def test_param_name_of_underscores_only(self):
        """全是底線的名稱也要回傳合法識別字"""
        assert TS.is_identifier(TS.param_name("__"))

    @pytest.mark.unit
    @pytest.mark.parametrize("dialect, name", [
        (TS, "class"), (JS, "delete"), (PY, "import"), (PY, "None"),
        (JAVA, "int"), (JAVA, "wait"), (JAVA, "getClass"), (CS, "string"),
    ])
    def test_reserved_word_suffix(self, dialect, name):
        """保留字後面加底線"""
        assert dialect.safe_identifier(name) == name + "_"

    @pytest.mark.unit
    def test_leading_digit_prefix(self):
        assert PY.method_name((), "2fa") == "_2fa"
        assert TS.method_name((), "2fa") == "_2fa"

    @pytest.mark.unit
    @pytest.mark.parametrize("name, ok", [
        ("login_btn", True), ("_2fa", True), ("2fa", False), ("a-b", False), ("", False),
    ])
    def test_is_identifier(self, name, ok):
        assert PY.is_identifier(name) is ok


@pytest.mark.unit
class TestLiterals:
    """字串常值與參照"""

    @pytest.mark.unit
    def test_js_single_quotes(self):
        assert TS.string('[data-test-id="x"]') == "'[data-test-id=\"x\"]'"
        assert JS.string("it's") == "'it\\'s'"

    @pytest.mark.unit
    def test_double_quoted_languages(self):
        for dialect in (PY, JAVA, CS):
            assert dialect.string('[aria-label="a"]') == '"[aria-label=\\"a\\"]"'

    @pytest.mark.unit
    def test_refs(self):
        assert TS.ref("base_url") == "this.baseUrl"
        assert PY.ref("base_url") == "self.base_url"
        assert JAVA.ref("base_url") == "baseUrl"
        assert CS.ref("page") == "_page"

    @pytest.mark.unit
    def test_statements(self):
        assert TS.stmt("x()", await_=True) == "await x();"
        assert PY.stmt("x()") == "x()"
        assert JAVA.ret("y") == "return y;"
        assert PY.comment("note") == "# note"


@pytest.mark.unit
class TestWrapResult:
    """try/catch 包裝"""

    @pytest.mark.unit
    def test_typescript(self):
        assert TS.wrap_result(["await go();"]) == [
            "try {",
            "  await go();",
            "  return { success: true };",
            "} catch (error) {",
            "  return { success: false, error: String(error) };",
            "}",
        ]

    @pytest.mark.unit
    def test_python(self):
        assert PY.wrap_result(["go()"]) == [
            "try:",
            "    go()",
            "except Exception as e:",
            "    return ActionResult(False, str(e))",
            "return ActionResult(True)",
        ]

    @pytest.mark.unit
    def test_java_catches_runtime_exception(self):
        lines = JAVA.wrap_result(["go();"])
        assert "} catch (RuntimeException e) {" in lines
        assert "    return new ActionResult(false, e.getMessage());" in lines


@pytest.mark.unit
class TestRenderClass:
    """class 外框"""

    def _spec(self, **overrides) -> ClassSpec:
        data = dict(
            class_name="LoginPage",
            imports=(),
            methods=[
                MethodSpec(name="go", body=[], returns=RESULT, is_async=False),
                MethodSpec(
                    name="waitForGo", body=[],
                    params=(Param("timeout_ms", ParamType.INT, default=5000),),
                ),
            ],
            handle=Handle("driver", "WebDriver"),
            ctor_params=(CtorParam("base_url", default="https://example.com"),),
        )
        data.update(overrides)
        return ClassSpec(**data)

    @pytest.mark.unit
    def test_typescript_fields_and_constructor(self):
        source = TS.render_class(self._spec(needs_result_type=True))
        assert "export interface ActionResult {" in source
        assert "export class LoginPage {" in source
        assert "  private readonly driver: WebDriver;" in source
        assert "  constructor(driver: WebDriver, baseUrl: string = 'https://example.com') {" in source
        assert "    this.baseUrl = baseUrl;" in source
        assert "  go(): ActionResult {" in source
        assert "  waitForGo(timeoutMs: number = 5000): void {" in source

    @pytest.mark.unit
    def test_javascript_exports(self):
        source = JS.render_class(self._spec(handle=None, ctor_params=()))
        assert source.startswith("class LoginPage {")
        assert source.rstrip().endswith("module.exports = { LoginPage };")
        assert "constructor" not in source

    @pytest.mark.unit
    def test_python_result_type_without_imports(self):
        source = PY.render_class(self._spec(needs_result_type=True))
        assert source.startswith("from dataclasses import dataclass\n\n\n@dataclass\n")
        assert '    def __init__(self, driver: WebDriver, base_url: str = "https://example.com"):' in source
        assert "    def go(self) -> ActionResult:" in source
        assert "        pass" in source
        assert "    def waitForGo(self, timeout_ms: int = 5000) -> None:" in source

    @pytest.mark.unit
    def test_python_header_is_docstring(self):
        source = PY.render_class(self._spec(header=["LoginPage"], handle=None, ctor_params=()))
        assert source.startswith('"""\nLoginPage\n"""\n')

    @pytest.mark.unit
    def test_java_default_timeout_and_constructors(self):
        source = JAVA.render_class(self._spec())
        assert "    public static final int DEFAULT_TIMEOUT_MS = 5000;" in source
        assert "    public LoginPage(WebDriver driver, String baseUrl) {" in source
        assert "    public LoginPage(WebDriver driver) {" in source
        assert '        this(driver, "https://example.com");' in source
        assert "    public void waitForGo(int timeoutMs) {" in source
        assert (
            "    public void waitForGo() {\n"
            "        waitForGo(DEFAULT_TIMEOUT_MS);\n"
            "    }\n"
        ) in source

    @pytest.mark.unit
    def test_java_overload_keeps_return_and_required_params(self):
        method = MethodSpec(
            name="pick", body=["return null;"], returns=RESULT,
            params=(Param("option"), Param("timeout_ms", ParamType.INT, default=5000)),
        )
        lines = JAVA.render_method(method)
        assert lines[-3:] == [
            "public ActionResult pick(String option) {",
            "    return pick(option, DEFAULT_TIMEOUT_MS);",
            "}",
        ]

    @pytest.mark.unit
    def test_java_no_overload_without_defaults(self):
        method = MethodSpec(name="go", body=[], params=(Param("value"),))
        assert JAVA.render_method(method) == ["public void go(String value) {", "}"]

    @pytest.mark.unit
    def test_csharp_record_and_allman_braces(self):
        source = CS.render_class(self._spec(needs_result_type=True))
        assert "public record ActionResult(bool Success, string? Error = null);" in source
        assert "public class LoginPage\n{" in source
        assert "    private readonly WebDriver _driver;" in source
        assert '    public LoginPage(WebDriver driver, string baseUrl = "https://example.com")' in source
        assert "    public void waitForGo(int timeoutMs = 5000)" in source

    @pytest.mark.unit
    def test_csharp_async_return_types(self):
        lines = CS.render_method(MethodSpec(name="Go", body=[], returns=RESULT, is_async=True))
        assert lines[0] == "public async Task<ActionResult> Go()"
        lines = CS.render_method(MethodSpec(name="Visit", body=[], is_async=True))
        assert lines[0] == "public async Task Visit()"
