"""
BaseEmitter — 所有框架 Emitter 的共同流程

emit() 負責：
    1. 排定方法名稱 (保留字 / 數字開頭 / 撞名處理)
    2. 依選項組出 visit / getter / 動作 / wait / login 方法
    3. 交給 Dialect 產生 class 原始碼，必要時產生測試樣板
    4. 計算 metadata

子類別只描述「這個框架怎麼呼叫」：locator、動作、等待、導覽、測試樣板。
emit() 不碰網路也不寫檔，同樣輸入一定得到同樣的 class 原始碼。
"""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass

from config.config import Config
from core.exceptions import EmissionError
from generator.emitters.dialects import (
    RESULT, ClassSpec, CtorParam, Dialect, Handle, MethodSpec, Param, ParamType, dialect_for,
)
from generator.schema import (
    ActionKind, ArtifactMetadata, Framework, GeneratedArtifact, GenerationOptions, Language,
    PageModel,
)
from scanner.name_generator import NamedElement, sanitize_name
from scanner.selector_resolver import SelectorStrategy

# 動作 → (方法名稱前綴, 參數)
_ACTION_SIGNATURES = {
    ActionKind.CLICK: (("click",), ()),
    ActionKind.TYPE: (("type",), (Param("value"),)),
    ActionKind.SELECT: (("select",), (Param("option"),)),
}


@dataclass(frozen=True)
class ElementMethods:
    """單一元素最後採用的方法名稱；action / wait 沒產生時為 None"""
    element: NamedElement
    getter: str
    action: str | None = None
    wait: str | None = None


class BaseEmitter:
    """一個 (framework, language) 組合的 Emitter"""

    framework: Framework
    languages: tuple[Language, ...] = ()
    async_languages: frozenset[Language] = frozenset()

    def __init__(self, language: Language):
        self.language = language
        self.dialect: Dialect = dialect_for(language)

    @property
    def is_async(self) -> bool:
        return self.language in self.async_languages

    # ── 子類別實作 ──

    def handle(self) -> Handle | None:
        return None

    def ctor_params(self, model: PageModel) -> tuple[CtorParam, ...]:
        return ()

    def imports(self, model: PageModel, options: GenerationOptions) -> tuple[str, ...]:
        raise NotImplementedError

    def locator_type(self) -> str | None:
        return None

    def locator(self, selector: str) -> str:
        raise NotImplementedError

    def action(self, kind: ActionKind, selector: str, arg: str | None) -> list[str]:
        raise NotImplementedError

    def wait(self, selector: str, timeout_arg: str) -> list[str]:
        raise NotImplementedError

    def visit(self, model: PageModel) -> list[str]:
        raise NotImplementedError

    def wait_for_login_success(self, model: PageModel) -> list[str]:
        raise NotImplementedError

    def test_stub(self, model: PageModel, methods: list[ElementMethods], visit_name: str) -> str:
        raise NotImplementedError

    def wrap_result(self, body: list[str], selector: str) -> list[str]:
        return self.dialect.wrap_result(body)

    def result_type(self) -> str:
        return RESULT

    # ── 共同流程 ──

    def emit(self, model: PageModel, options: GenerationOptions) -> GeneratedArtifact:
        """
        產出單一 GeneratedArtifact。

        Raises:
            EmissionError: 方法名稱無法成為合法識別字或無法去重
        """
        start = time.perf_counter()
        d = self.dialect

        visit_name = d.method_name(("visit",))
        used: set[str] = set()
        fixed = [model.class_name, visit_name] + self._field_names(model)
        login_name = success_name = None
        if model.login_descriptor is not None:
            login_name = d.method_name(("login",))
            success_name = d.method_name(("wait", "for", "login", "success"))
            fixed += [login_name, success_name]
        for name in fixed:
            self._claim(name, used)

        planned = [self._plan(el, model, options, used) for el in model.elements]

        methods: list[MethodSpec] = [self._visit_method(model, visit_name, options)]
        for plan in planned:
            methods += self._element_methods(plan, model, options)
        if model.login_descriptor is not None:
            methods.append(self._login_method(model, login_name, options))
            methods.append(MethodSpec(
                name=success_name,
                body=self.wait_for_login_success(model),
                is_async=self.is_async,
                doc="等待登入完成 (依實際頁面調整)" if options.include_comments else "",
            ))

        imports = model.imports or self.imports(model, options)
        spec = ClassSpec(
            class_name=model.class_name,
            imports=tuple(imports),
            methods=methods,
            handle=self.handle(),
            ctor_params=self.ctor_params(model),
            header=self._header(model) if options.include_comments else [],
            needs_result_type=(
                options.include_error_handling
                and any(p.action is not None for p in planned)
            ),
        )
        class_source = d.render_class(spec)
        test_source = (
            self.test_stub(model, planned, visit_name) if options.include_tests else None
        )

        elapsed = (time.perf_counter() - start) * 1000
        return GeneratedArtifact(
            framework=self.framework,
            language=self.language,
            class_name=model.class_name,
            class_source=class_source,
            imports=tuple(imports),
            methods=tuple(m.name for m in methods),
            metadata=ArtifactMetadata(
                element_count=len(model.elements),
                method_count=len(methods),
                generation_time_ms=round(elapsed, 3),
            ),
            test_source=test_source,
        )

    # ── 命名 ──

    def _names_for(self, base: str, kind: ActionKind | None, with_wait: bool) -> dict[str, str]:
        d = self.dialect
        names = {"getter": d.method_name((), base)}
        if kind is not None:
            names["action"] = d.method_name(_ACTION_SIGNATURES[kind][0], base)
        if with_wait:
            names["wait"] = d.method_name(("wait", "for"), base)
        return names

    def _plan(
        self,
        el: NamedElement,
        model: PageModel,
        options: GenerationOptions,
        used: set[str],
    ) -> ElementMethods:
        kind = model.actions.get(el.name)
        with_wait = options.include_wait_strategies
        names = self._names_for(el.name, kind, with_wait)
        taken = used.intersection(names.values()) or len(set(names.values())) < len(names)
        if taken:
            names = self._names_for(f"{el.name}_{el.source.scan_index}", kind, with_wait)
        for name in names.values():
            self._claim(name, used)
        return ElementMethods(
            element=el,
            getter=names["getter"],
            action=names.get("action"),
            wait=names.get("wait"),
        )

    def _field_names(self, model: PageModel) -> list[str]:
        """handle 與建構子參數存成的欄位名稱 (page / driver / base_url)"""
        handle = self.handle()
        names = [handle.field] if handle is not None else []
        names += [c.name for c in self.ctor_params(model)]
        return [self.dialect.field_name(n) for n in names]

    def _claim(self, name: str, used: set[str]) -> None:
        if not self.dialect.is_identifier(name):
            raise EmissionError("不是合法的識別字", name=name)
        if name in used:
            raise EmissionError("方法名稱重複", name=name)
        used.add(name)

    # ── 方法組裝 ──

    def _visit_method(self, model: PageModel, name: str, options: GenerationOptions) -> MethodSpec:
        return MethodSpec(
            name=name,
            body=self.visit(model),
            is_async=self.is_async,
            doc=f"開啟 {model.visit_path}" if options.include_comments else "",
        )

    def _element_methods(
        self, plan: ElementMethods, model: PageModel, options: GenerationOptions,
    ) -> list[MethodSpec]:
        el = plan.element
        comments = options.include_comments
        methods = [MethodSpec(
            name=plan.getter,
            body=[self.dialect.ret(self.locator(el.selector))],
            returns=self.locator_type(),
            doc=f"{el.name} ({el.strategy.value})" if comments else "",
        )]

        if plan.action is not None:
            kind = model.actions[el.name]
            params = _ACTION_SIGNATURES[kind][1]
            arg = self.dialect.param_name(params[0].name) if params else None
            body = self.action(kind, el.selector, arg)
            returns = None
            if options.include_error_handling:
                body = self.wrap_result(body, el.selector)
                returns = self.result_type()
            methods.append(MethodSpec(
                name=plan.action,
                body=body,
                params=params,
                returns=returns,
                is_async=self.is_async,
                doc=f"{kind.value} {el.name}" if comments else "",
            ))

        if plan.wait is not None:
            param = Param("timeout_ms", ParamType.INT, default=Config.WAIT_TIMEOUT_MS)
            methods.append(MethodSpec(
                name=plan.wait,
                body=self.wait(el.selector, self.dialect.param_name(param.name)),
                params=(param,),
                is_async=self.is_async,
                doc=f"等待 {el.name} 出現" if comments else "",
            ))
        return methods

    def _login_method(self, model: PageModel, name: str, options: GenerationOptions) -> MethodSpec:
        login = model.login_descriptor
        d = self.dialect
        params = []
        body: list[str] = []
        for login_field in login.fields:
            param = Param(sanitize_name(login_field.name))
            arg = d.param_name(param.name)
            if any(d.param_name(p.name) == arg for p in params):
                raise EmissionError("登入欄位參數重複", name=arg)
            params.append(param)
            body += self.action(ActionKind.TYPE, login_field.selector, arg)
        body += self.action(ActionKind.CLICK, login.submit_selector, None)
        return MethodSpec(
            name=name,
            body=body,
            params=tuple(params),
            is_async=self.is_async,
            doc=f"{login.type.value} 登入" if options.include_comments else "",
        )

    def _header(self, model: PageModel) -> list[str]:
        strategies = Counter(el.strategy for el in model.elements)
        counts = ", ".join(
            f"{s.value}={strategies[s]}" for s in SelectorStrategy if strategies[s]
        )
        lines = [
            f"{model.class_name} — 自動產生的 Page Object ({self.framework.value} / {self.language.value})",
            f"頁面: {model.page_name} ({model.visit_path})",
            f"元素: {len(model.elements)}，互動元素: {len(model.interactive_elements)}",
            f"selector 策略: {counts}",
        ]
        if strategies[SelectorStrategy.POSITIONAL]:
            lines.append("positional selector 依整頁掃描順序產生，建議改用穩定屬性")
        if model.login_descriptor is not None:
            lines.append(f"登入: {model.login_descriptor.type.value}")
        return lines

    # ── 測試樣板共用 ──

    @staticmethod
    def stable_elements(methods: list[ElementMethods]) -> list[ElementMethods]:
        """測試樣板只檢查以屬性定位的元素，positional selector 不保證命中"""
        return [m for m in methods if m.element.strategy != SelectorStrategy.POSITIONAL]