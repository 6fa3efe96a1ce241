"""
Cypress Emitter (只支援 TypeScript / JavaScript)

Cypress 指令是排進佇列執行的，不能 await，也不能用 try/catch 攔錯誤。
錯誤處理改成先檢查 body 內是否有該元素，再決定執行動作或回傳失敗。
"""

from __future__ import annotations

from config.config import Config
from generator.emitters.base import BaseEmitter, ElementMethods
from generator.emitters.registry import register_emitter
from generator.schema import ActionKind, Framework, GenerationOptions, Language, PageModel

_CHAINABLE = "Cypress.Chainable<JQuery<HTMLElement>>"


@register_emitter
class CypressEmitter(BaseEmitter):
    framework = Framework.CYPRESS
    languages = (Language.TYPESCRIPT, Language.JAVASCRIPT)

    def imports(self, model: PageModel, options: GenerationOptions) -> tuple[str, ...]:
        return ('/// <reference types="cypress" />',)

    def locator_type(self) -> str | None:
        return _CHAINABLE if self.language == Language.TYPESCRIPT else None

    def locator(self, selector: str) -> str:
        return f"cy.get({self.dialect.string(selector)})"

    def action(self, kind: ActionKind, selector: str, arg: str | None) -> list[str]:
        loc = self.locator(selector)
        if kind == ActionKind.CLICK:
            return [self.dialect.stmt(f"{loc}.click()")]
        if kind == ActionKind.TYPE:
            return [self.dialect.stmt(f"{loc}.clear().type({arg})")]
        return [self.dialect.stmt(f"{loc}.select({arg})")]

    def wait(self, selector: str, timeout_arg: str) -> list[str]:
        sel = self.dialect.string(selector)
        return [self.dialect.stmt(f"cy.get({sel}, {{ timeout: {timeout_arg} }}).should('be.visible')")]

    def visit(self, model: PageModel) -> list[str]:
        return [self.dialect.stmt(f"cy.visit({self.dialect.string(model.visit_path)})")]

    def wait_for_login_success(self, model: PageModel) -> list[str]:
        path = self.dialect.string(model.visit_path)
        return [self.dialect.stmt(
            f"cy.location('pathname', {{ timeout: {Config.WAIT_TIMEOUT_MS} }}).should('not.eq', {path})"
        )]

    def wrap_result(self, body: list[str], selector: str) -> list[str]:
        d = self.dialect
        sel = d.string(selector)
        missing = d.string(f"element not found: {selector}")
        return (
            ["return cy.get('body').then(($body) => {"]
            + d.indent_block(
                [f"if ($body.find({sel}).length === 0) {{"]
                + d.indent_block([d.ret(f"cy.wrap({d.result_failed(missing)})")])
                + ["}"]
                + body
                + [d.ret(f"cy.wrap({d.result_ok()})")]
            )
            + ["});"]
        )

    def result_type(self) -> str:
        return "Cypress.Chainable<ActionResult>"

    # ── 測試樣板 ──

    def test_stub(self, model: PageModel, methods: list[ElementMethods], visit_name: str) -> str:
        cls = model.class_name
        path = self.dialect.string(model.visit_path)
        checks = self.stable_elements(methods)
        if self.language == Language.TYPESCRIPT:
            lines = [f"import {{ {cls} }} from '../{cls}';"]
        else:
            lines = [f"const {{ {cls} }} = require('../{cls}');"]
        lines += [
            "",
            f"describe('{cls}', () => {{",
            f"  const pom = new {cls}();",
            "",
            f"  it('visits ' + {path}, () => {{",
            f"    pom.{visit_name}();",
            f"    cy.location('pathname').should('include', {path});",
            "  });",
        ]
        if checks:
            lines += [
                "",
                "  it('locates page elements', () => {",
                f"    pom.{visit_name}();",
            ]
            lines += [f"    pom.{m.getter}().should('exist');" for m in checks]
            lines.append("  });")
        lines.append("});")
        return "\n".join(lines) + "\n"
