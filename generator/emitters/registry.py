"""
Emitter Registry — (framework, language) → Emitter

新增框架只要寫一個 BaseEmitter 子類別並註冊，
掃描 / selector / 命名 / PageModel 都不用動。

用法：
    from generator.emitters.registry import emitter_registry

    @emitter_registry.register
    class MyEmitter(BaseEmitter):
        framework = Framework.PLAYWRIGHT
        languages = (Language.TYPESCRIPT,)
        ...

    emitter = emitter_registry.get(Framework.PLAYWRIGHT, Language.TYPESCRIPT)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import UnsupportedFrameworkOrLanguageError
from generator.schema import Framework, Language
from utils.logger import logger

if TYPE_CHECKING:
    from generator.emitters.base import BaseEmitter


class EmitterRegistry:
    """Emitter 註冊表"""

    def __init__(self):
        self._emitters: dict[tuple[Framework, Language], type[BaseEmitter]] = {}

    def register(self, emitter_cls: type[BaseEmitter]) -> type[BaseEmitter]:
        """註冊 Emitter class，每個 languages 各佔一格。可當 decorator。"""
        for language in emitter_cls.languages:
            key = (emitter_cls.framework, language)
            if key in self._emitters:
                logger.warning(
                    f"[Emitter] 覆蓋已註冊的 {key[0].value}/{key[1].value}: "
                    f"{self._emitters[key].__name__} → {emitter_cls.__name__}"
                )
            self._emitters[key] = emitter_cls
        return emitter_cls

    def get(self, framework: Framework, language: Language) -> BaseEmitter:
        """
        取得 Emitter 實例。

        Raises:
            UnsupportedFrameworkOrLanguageError: 沒有對應的 Emitter
        """
        emitter_cls = self._emitters.get((framework, language))
        if emitter_cls is None:
            raise UnsupportedFrameworkOrLanguageError(framework.value, language.value)
        return emitter_cls(language)

    def supports(self, framework: Framework, language: Language) -> bool:
        return (framework, language) in self._emitters

    def targets(self) -> list[tuple[Framework, Language]]:
        """所有已註冊的組合 (依 enum 宣告順序)"""
        return [
            (fw, lang)
            for fw in Framework
            for lang in Language
            if (fw, lang) in self._emitters
        ]


emitter_registry = EmitterRegistry()
register_emitter = emitter_registry.register
