"""
語言方言 (Dialect)

負責「語法」：class / method 外框、參數、字串常值、命名慣例、
try/catch 包裝、ActionResult 型別宣告。
呼叫哪個框架 API 由各 Emitter 決定，兩者分開才能做到
N 個框架 × M 個語言而不重複。
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum

from generator.schema import Language

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ParamType(Enum):
    STRING = "string"
    INT = "int"


@dataclass(frozen=True)
class Param:
    name: str                 # snake_case 邏輯名稱，由 dialect 轉換
    type: ParamType = ParamType.STRING
    default: object = None


# 回傳 ActionResult 的標記
RESULT = "__action_result__"


@dataclass
class MethodSpec:
    """單一方法的描述；body 是已經是目標語言的敘述句"""
    name: str
    body: list[str]
    params: tuple[Param, ...] = ()
    returns: str | None = None
    is_async: bool = False
    doc: str = ""


@dataclass(frozen=True)
class Handle:
    """Page Object 持有的框架物件 (page / driver)"""
    field: str
    type: str | None = None


@dataclass(frozen=True)
class CtorParam:
    """建構子的額外參數 (例如 Selenium 的 base_url)"""
    name: str
    type: ParamType = ParamType.STRING
    default: str | None = None


@dataclass
class ClassSpec:
    class_name: str
    imports: tuple[str, ...]
    methods: list[MethodSpec]
    handle: Handle | None = None
    ctor_params: tuple[CtorParam, ...] = ()
    header: list[str] = field(default_factory=list)
    needs_result_type: bool = False


def _split_words(name: str) -> list[str]:
    return [w for w in re.split(r"_|(?<=[a-z0-9])(?=[A-Z])", name) if w]


def _cap(text: str) -> str:
    return text[:1].upper() + text[1:]


class Dialect:
    """語言方言基底"""

    language: Language
    indent = "  "
    comment_prefix = "//"
    reserved: frozenset[str] = frozenset()
    statement_end = ";"

    # ── 命名 ──

    def method_name(self, words: tuple[str, ...], base: str = "") -> str:
        """camelCase: ("wait", "for") + "login_btn" → waitForLogin_btn"""
        head = words[0] if words else ""
        name = head + "".join(_cap(w) for w in words[1:])
        if base:
            name = name + _cap(base) if name else base
        return self.safe_identifier(name)

    def param_name(self, name: str) -> str:
        words = _split_words(name)
        if not words:
            return self.safe_identifier(name)
        return self.safe_identifier(words[0] + "".join(_cap(w) for w in words[1:]))

    def safe_identifier(self, name: str) -> str:
        if name[:1].isdigit():
            name = "_" + name
        if name in self.reserved:
            name = name + "_"
        return name

    @staticmethod
    def is_identifier(name: str) -> bool:
        return bool(_IDENTIFIER.match(name))

    # ── 敘述句 ──

    def string(self, value: str) -> str:
        return json.dumps(value, ensure_ascii=False)

    def field_name(self, name: str) -> str:
        """建構子存下的欄位在 class 內的識別字，元素方法不可與它同名"""
        return self.param_name(name)

    def ref(self, field_name: str) -> str:
        return f"this.{self.field_name(field_name)}"

    def stmt(self, expr: str, await_: bool = False) -> str:
        return ("await " if await_ else "") + expr + self.statement_end

    def ret(self, expr: str, await_: bool = False) -> str:
        return "return " + self.stmt(expr, await_)

    def comment(self, text: str) -> str:
        return f"{self.comment_prefix} {text}" if text else self.comment_prefix

    # ── 包裝 ──

    def wrap_result(self, body: list[str]) -> list[str]:
        """把動作包成 try/catch，失敗轉成 ActionResult"""
        raise NotImplementedError

    def result_ok(self) -> str:
        raise NotImplementedError

    def result_failed(self, message_expr: str) -> str:
        raise NotImplementedError

    # ── 外框 ──

    def render_class(self, spec: ClassSpec) -> str:
        raise NotImplementedError

    def render_method(self, method: MethodSpec) -> list[str]:
        raise NotImplementedError

    def indent_block(self, lines: list[str], level: int = 1) -> list[str]:
        pad = self.indent * level
        return [pad + line if line else "" for line in lines]


# ── TypeScript / JavaScript ──

_JS_RESERVED = frozenset({
    "constructor", "delete", "new", "this", "super", "function", "return",
    "var", "let", "const", "class", "import", "export", "default", "typeof",
    "void", "yield", "await", "enum", "null", "true", "false", "in", "instanceof",
})


class JavaScriptDialect(Dialect):
    language = Language.JAVASCRIPT
    reserved = _JS_RESERVED
    typed = False

    def string(self, value: str) -> str:
        escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
        return f"'{escaped}'"

    def _type(self, param_type: ParamType) -> str:
        return "string" if param_type == ParamType.STRING else "number"

    def _return_type(self, method: MethodSpec) -> str:
        inner = "ActionResult" if method.returns == RESULT else (method.returns or "void")
        return f"Promise<{inner}>" if method.is_async else inner

    def _params(self, params) -> str:
        parts = []
        for p in params:
            part = self.param_name(p.name)
            if self.typed:
                part += f": {self._type(p.type)}"
            if p.default is not None:
                part += f" = {self._literal(p.default)}"
            parts.append(part)
        return ", ".join(parts)

    def _literal(self, value) -> str:
        return self.string(value) if isinstance(value, str) else str(value)

    def render_method(self, method: MethodSpec) -> list[str]:
        sig = f"{method.name}({self._params(method.params)})"
        if self.typed:
            sig += f": {self._return_type(method)}"
        if method.is_async:
            sig = "async " + sig
        lines = []
        if method.doc:
            lines += ["/**", f" * {method.doc}", " */"]
        return lines + [sig + " {"] + self.indent_block(method.body) + ["}"]

    def wrap_result(self, body: list[str]) -> list[str]:
        return (
            ["try {"]
            + self.indent_block(body + [self.ret(self.result_ok())])
            + ["} catch (error) {"]
            + self.indent_block([self.ret(self.result_failed("String(error)"))])
            + ["}"]
        )

    def result_ok(self) -> str:
        return "{ success: true }"

    def result_failed(self, message_expr: str) -> str:
        return f"{{ success: false, error: {message_expr} }}"

    def _result_declaration(self) -> list[str]:
        return [
            "/**",
            " * @typedef {{ success: boolean, error?: string }} ActionResult",
            " */",
        ]

    def _class_open(self, name: str) -> str:
        return f"class {name} {{"

    def _footer(self, name: str) -> list[str]:
        return ["", f"module.exports = {{ {name} }};"]

    def _fields(self, spec: ClassSpec) -> list[str]:
        return []

    def render_class(self, spec: ClassSpec) -> str:
        lines: list[str] = []
        lines += [self.comment(h) for h in spec.header]
        if spec.header:
            lines.append("")
        lines += list(spec.imports)
        if spec.imports:
            lines.append("")
        if spec.needs_result_type:
            lines += self._result_declaration() + [""]

        lines.append(self._class_open(spec.class_name))
        body: list[str] = []
        fields = self._fields(spec)
        if fields:
            body += fields + [""]
        if spec.handle is not None:
            body += self._constructor(spec) + [""]
        for method in spec.methods:
            body += self.render_method(method) + [""]
        if body and body[-1] == "":
            body.pop()
        lines += self.indent_block(body)
        lines.append("}")
        lines += self._footer(spec.class_name)
        return "\n".join(lines) + "\n"

    def _constructor(self, spec: ClassSpec) -> list[str]:
        params = [spec.handle.field] + [c.name for c in spec.ctor_params]
        sig_parts = []
        for name, ctor in zip(params, (None,) + spec.ctor_params):
            part = self.param_name(name)
            if self.typed:
                part += f": {spec.handle.type if ctor is None else self._type(ctor.type)}"
            if ctor is not None and ctor.default is not None:
                part += f" = {self.string(ctor.default)}"
            sig_parts.append(part)
        body = [f"{self.ref(n)} = {self.param_name(n)};" for n in params]
        return [f"constructor({', '.join(sig_parts)}) {{"] + self.indent_block(body) + ["}"]


class TypeScriptDialect(JavaScriptDialect):
    language = Language.TYPESCRIPT
    typed = True

    def _result_declaration(self) -> list[str]:
        return [
            "export interface ActionResult {",
            "  success: boolean;",
            "  error?: string;",
            "}",
        ]

    def _class_open(self, name: str) -> str:
        return f"export class {name} {{"

    def _footer(self, name: str) -> list[str]:
        return []

    def _fields(self, spec: ClassSpec) -> list[str]:
        if spec.handle is None:
            return []
        fields = [f"private readonly {self.param_name(spec.handle.field)}: {spec.handle.type};"]
        fields += [
            f"private readonly {self.param_name(c.name)}: {self._type(c.type)};"
            for c in spec.ctor_params
        ]
        return fields


# ── Python ──

_PY_RESERVED = frozenset({
    "False", "None", "True", "and", "as", "assert", "async", "await", "break",
    "class", "continue", "def", "del", "elif", "else", "except", "finally",
    "for", "from", "global", "if", "import", "in", "is", "lambda", "nonlocal",
    "not", "or", "pass", "raise", "return", "try", "while", "with", "yield",
})


class PythonDialect(Dialect):
    language = Language.PYTHON
    indent = "    "
    comment_prefix = "#"
    reserved = _PY_RESERVED
    statement_end = ""

    def method_name(self, words: tuple[str, ...], base: str = "") -> str:
        parts = [w.lower() for w in words]
        if base:
            parts.append(base)
        return self.safe_identifier("_".join(parts))

    def param_name(self, name: str) -> str:
        return self.safe_identifier(name)

    def ref(self, field_name: str) -> str:
        return f"self.{field_name}"

    def stmt(self, expr: str, await_: bool = False) -> str:
        return ("await " if await_ else "") + expr

    def _type(self, param_type: ParamType) -> str:
        return "str" if param_type == ParamType.STRING else "int"

    def _literal(self, value) -> str:
        return self.string(value) if isinstance(value, str) else repr(value)

    def render_method(self, method: MethodSpec) -> list[str]:
        params = ["self"]
        for p in method.params:
            part = f"{self.param_name(p.name)}: {self._type(p.type)}"
            if p.default is not None:
                part += f" = {self._literal(p.default)}"
            params.append(part)
        returns = "ActionResult" if method.returns == RESULT else (method.returns or "None")
        prefix = "async def" if method.is_async else "def"
        lines = [f"{prefix} {method.name}({', '.join(params)}) -> {returns}:"]
        body = []
        if method.doc:
            body.append(f'"""{method.doc}"""')
        body += method.body or ["pass"]
        return lines + self.indent_block(body)

    def wrap_result(self, body: list[str]) -> list[str]:
        return (
            ["try:"]
            + self.indent_block(body)
            + ["except Exception as e:"]
            + self.indent_block([self.ret(self.result_failed("str(e)"))])
            + [self.ret(self.result_ok())]
        )

    def result_ok(self) -> str:
        return "ActionResult(True)"

    def result_failed(self, message_expr: str) -> str:
        return f"ActionResult(False, {message_expr})"

    def render_class(self, spec: ClassSpec) -> str:
        lines: list[str] = []
        if spec.header:
            lines += ['"""'] + spec.header + ['"""', ""]
        imports = list(spec.imports)
        if spec.needs_result_type:
            imports = ["from dataclasses import dataclass"] + ([""] + imports if imports else [])
        lines += imports
        if imports:
            lines += ["", ""]
        if spec.needs_result_type:
            lines += [
                "@dataclass",
                "class ActionResult:",
                "    success: bool",
                '    error: str = ""',
                "",
                "",
            ]

        lines.append(f"class {spec.class_name}:")
        body: list[str] = []
        if spec.handle is not None:
            params = [spec.handle.field + (f": {spec.handle.type}" if spec.handle.type else "")]
            for c in spec.ctor_params:
                part = f"{c.name}: {self._type(c.type)}"
                if c.default is not None:
                    part += f" = {self.string(c.default)}"
                params.append(part)
            body.append(f"def __init__(self, {', '.join(params)}):")
            assigns = [f"self.{spec.handle.field} = {spec.handle.field}"]
            assigns += [f"self.{c.name} = {c.name}" for c in spec.ctor_params]
            body += self.indent_block(assigns) + [""]
        for method in spec.methods:
            body += self.render_method(method) + [""]
        if body and body[-1] == "":
            body.pop()
        lines += self.indent_block(body or ["pass"])
        return "\n".join(lines) + "\n"


# ── Java ──

_JAVA_RESERVED = frozenset({
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while", "true", "false", "null",
    # java.lang.Object 的方法，同名會覆寫或無法編譯
    "getClass", "hashCode", "equals", "toString", "notify", "notifyAll", "wait",
    "clone", "finalize",
})


_TIMEOUT_PARAM = "timeout_ms"
_TIMEOUT_CONSTANT = "DEFAULT_TIMEOUT_MS"


class JavaDialect(Dialect):
    language = Language.JAVA
    indent = "    "
    reserved = _JAVA_RESERVED

    def ref(self, field_name: str) -> str:
        return self.param_name(field_name)

    def string(self, value: str) -> str:
        # Java 字串跳脫規則與 JSON 相容
        return json.dumps(value, ensure_ascii=True)

    def _type(self, param_type: ParamType) -> str:
        return "String" if param_type == ParamType.STRING else "int"

    def render_method(self, method: MethodSpec) -> list[str]:
        params = ", ".join(f"{self._type(p.type)} {self.param_name(p.name)}" for p in method.params)
        returns = "ActionResult" if method.returns == RESULT else (method.returns or "void")
        lines = []
        if method.doc:
            lines += ["/**", f" * {method.doc}", " */"]
        lines += [f"public {returns} {method.name}({params}) {{"] + self.indent_block(method.body) + ["}"]
        return lines + self._default_overload(method, returns)

    def _default_overload(self, method: MethodSpec, returns: str) -> list[str]:
        """Java 沒有預設參數：省略尾端有預設值的參數，另外產生一個轉呼叫的 overload"""
        required = list(method.params)
        while required and required[-1].default is not None:
            required.pop()
        if len(required) == len(method.params):
            return []
        args = [self.param_name(p.name) for p in required]
        for p in method.params[len(required):]:
            args.append(_TIMEOUT_CONSTANT if p.name == _TIMEOUT_PARAM else self._literal(p.default))
        call = f"{method.name}({', '.join(args)})"
        body = self.stmt(call) if returns == "void" else self.ret(call)
        sig = ", ".join(f"{self._type(p.type)} {self.param_name(p.name)}" for p in required)
        return ["", f"public {returns} {method.name}({sig}) {{"] + self.indent_block([body]) + ["}"]

    def _literal(self, value) -> str:
        return self.string(value) if isinstance(value, str) else str(value)

    def wrap_result(self, body: list[str]) -> list[str]:
        return (
            ["try {"]
            + self.indent_block(body + [self.ret(self.result_ok())])
            + ["} catch (RuntimeException e) {"]
            + self.indent_block([self.ret(self.result_failed("e.getMessage()"))])
            + ["}"]
        )

    def result_ok(self) -> str:
        return "new ActionResult(true, null)"

    def result_failed(self, message_expr: str) -> str:
        return f"new ActionResult(false, {message_expr})"

    def render_class(self, spec: ClassSpec) -> str:
        lines: list[str] = [self.comment(h) for h in spec.header]
        if spec.header:
            lines.append("")
        lines += list(spec.imports)
        if spec.imports:
            lines.append("")
        lines.append(f"public class {spec.class_name} {{")

        body: list[str] = []
        defaults = sorted({
            p.default for m in spec.methods for p in m.params
            if p.default is not None and p.name == _TIMEOUT_PARAM
        })
        if defaults:
            body += [f"public static final int {_TIMEOUT_CONSTANT} = {defaults[0]};", ""]
        if spec.handle is not None:
            body += [f"private final {spec.handle.type} {spec.handle.field};"]
            body += [f"private final {self._type(c.type)} {self.param_name(c.name)};" for c in spec.ctor_params]
            body.append("")
            body += self._constructors(spec)
        if spec.needs_result_type:
            body += [
                "public static final class ActionResult {",
                "    public final boolean success;",
                "    public final String error;",
                "",
                "    public ActionResult(boolean success, String error) {",
                "        this.success = success;",
                "        this.error = error;",
                "    }",
                "}",
                "",
            ]
        for method in spec.methods:
            body += self.render_method(method) + [""]
        if body and body[-1] == "":
            body.pop()
        lines += self.indent_block(body)
        lines.append("}")
        return "\n".join(lines) + "\n"

    def _constructors(self, spec: ClassSpec) -> list[str]:
        handle = spec.handle
        full_params = [f"{handle.type} {handle.field}"] + [
            f"{self._type(c.type)} {self.param_name(c.name)}" for c in spec.ctor_params
        ]
        assigns = [f"this.{handle.field} = {handle.field};"] + [
            f"this.{self.param_name(c.name)} = {self.param_name(c.name)};" for c in spec.ctor_params
        ]
        lines = [f"public {spec.class_name}({', '.join(full_params)}) {{"]
        lines += self.indent_block(assigns) + ["}", ""]

        # 有預設值的參數另外產生一個較短的建構子
        if spec.ctor_params and all(c.default is not None for c in spec.ctor_params):
            args = [handle.field] + [self.string(c.default) for c in spec.ctor_params]
            lines += [f"public {spec.class_name}({handle.type} {handle.field}) {{"]
            lines += self.indent_block([f"this({', '.join(args)});"]) + ["}", ""]
        return lines


# ── C# ──

_CSHARP_RESERVED = frozenset({
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch", "char",
    "checked", "class", "const", "continue", "decimal", "default", "delegate",
    "do", "double", "else", "enum", "event", "explicit", "extern", "false",
    "finally", "fixed", "float", "for", "foreach", "goto", "if", "implicit",
    "in", "int", "interface", "internal", "is", "lock", "long", "namespace",
    "new", "null", "object", "operator", "out", "override", "params", "private",
    "protected", "public", "readonly", "ref", "return", "sbyte", "sealed",
    "short", "sizeof", "stackalloc", "static", "string", "struct", "switch",
    "this", "throw", "true", "try", "typeof", "uint", "ulong", "unchecked",
    "unsafe", "ushort", "using", "virtual", "void", "volatile", "while",
})


class CSharpDialect(Dialect):
    language = Language.CSHARP
    indent = "    "
    reserved = _CSHARP_RESERVED

    def method_name(self, words: tuple[str, ...], base: str = "") -> str:
        return self.safe_identifier("".join(_cap(w) for w in words) + _cap(base))

    def field_name(self, name: str) -> str:
        return "_" + self.param_name(name)

    def ref(self, field_name: str) -> str:
        return self.field_name(field_name)

    def string(self, value: str) -> str:
        return json.dumps(value, ensure_ascii=True)

    def _type(self, param_type: ParamType) -> str:
        return "string" if param_type == ParamType.STRING else "int"

    def render_method(self, method: MethodSpec) -> list[str]:
        params = []
        for p in method.params:
            part = f"{self._type(p.type)} {self.param_name(p.name)}"
            if p.default is not None:
                part += f" = {p.default!r}" if not isinstance(p.default, str) else f" = {self.string(p.default)}"
            params.append(part)
        inner = "ActionResult" if method.returns == RESULT else method.returns
        if method.is_async:
            returns = f"async Task<{inner}>" if inner else "async Task"
        else:
            returns = inner or "void"
        lines = []
        if method.doc:
            lines += ["/// <summary>", f"/// {method.doc}", "/// </summary>"]
        return (
            lines
            + [f"public {returns} {method.name}({', '.join(params)})", "{"]
            + self.indent_block(method.body)
            + ["}"]
        )

    def wrap_result(self, body: list[str]) -> list[str]:
        return (
            ["try", "{"]
            + self.indent_block(body + [self.ret(self.result_ok())])
            + ["}", "catch (Exception e)", "{"]
            + self.indent_block([self.ret(self.result_failed("e.Message"))])
            + ["}"]
        )

    def result_ok(self) -> str:
        return "new ActionResult(true)"

    def result_failed(self, message_expr: str) -> str:
        return f"new ActionResult(false, {message_expr})"

    def render_class(self, spec: ClassSpec) -> str:
        lines: list[str] = [self.comment(h) for h in spec.header]
        if spec.header:
            lines.append("")
        lines += list(spec.imports)
        if spec.imports:
            lines.append("")
        if spec.needs_result_type:
            lines += ["public record ActionResult(bool Success, string? Error = null);", ""]
        lines += [f"public class {spec.class_name}", "{"]

        body: list[str] = []
        if spec.handle is not None:
            handle = spec.handle
            body.append(f"private readonly {handle.type} {self.ref(handle.field)};")
            body += [f"private readonly {self._type(c.type)} {self.ref(c.name)};" for c in spec.ctor_params]
            body.append("")
            params = [f"{handle.type} {self.param_name(handle.field)}"]
            for c in spec.ctor_params:
                part = f"{self._type(c.type)} {self.param_name(c.name)}"
                if c.default is not None:
                    part += f" = {self.string(c.default)}"
                params.append(part)
            assigns = [f"{self.ref(n)} = {self.param_name(n)};"
                       for n in [handle.field] + [c.name for c in spec.ctor_params]]
            body += [f"public {spec.class_name}({', '.join(params)})", "{"]
            body += self.indent_block(assigns) + ["}", ""]
        for method in spec.methods:
            body += self.render_method(method) + [""]
        if body and body[-1] == "":
            body.pop()
        lines += self.indent_block(body)
        lines.append("}")
        return "\n".join(lines) + "\n"


DIALECTS: dict[Language, Dialect] = {
    Language.TYPESCRIPT: TypeScriptDialect(),
    Language.JAVASCRIPT: JavaScriptDialect(),
    Language.PYTHON: PythonDialect(),
    Language.JAVA: JavaDialect(),
    Language.CSHARP: CSharpDialect(),
}


def dialect_for(language: Language) -> Dialect:
    return DIALECTS[language]
