"""
generator.emitters — PageModel → 原始碼

每個 (framework, language) 組合對應一個 Emitter，
匯入本 package 時自動註冊 playwright / selenium / cypress。
"""

from generator.emitters.base import BaseEmitter, ElementMethods
from generator.emitters.registry import EmitterRegistry, emitter_registry, register_emitter
from generator.emitters import cypress, playwright, selenium  # noqa: F401  註冊

get_emitter = emitter_registry.get
supported_targets = emitter_registry.targets

__all__ = [
    "BaseEmitter",
    "ElementMethods",
    "EmitterRegistry",
    "emitter_registry",
    "register_emitter",
    "get_emitter",
    "supported_targets",
]
