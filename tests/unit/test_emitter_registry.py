"""
generator/emitters/registry.py 單元測試
"""

from unittest.mock import patch

import pytest

from core.exceptions import UnsupportedFrameworkOrLanguageError
from generator.emitters import (
    BaseEmitter, EmitterRegistry, emitter_registry, get_emitter, supported_targets,
)
from generator.emitters.cypress import CypressEmitter
from generator.emitters.playwright import PlaywrightEmitter
from generator.emitters.selenium import SeleniumEmitter
from generator.schema import Framework, Language


class _StubEmitter(BaseEmitter):
    framework = Framework.CYPRESS
    languages = (Language.PYTHON,)


@pytest.mark.unit
class TestRegister:
    """register / get"""

    @pytest.mark.unit
    def test_register_as_decorator(self):
        registry = EmitterRegistry()
        returned = registry.register(_StubEmitter)
        assert returned is _StubEmitter
        assert registry.supports(Framework.CYPRESS, Language.PYTHON)

    @pytest.mark.unit
    def test_get_returns_new_instance(self):
        registry = EmitterRegistry()
        registry.register(_StubEmitter)
        first = registry.get(Framework.CYPRESS, Language.PYTHON)
        second = registry.get(Framework.CYPRESS, Language.PYTHON)
        assert isinstance(first, _StubEmitter)
        assert first is not second
        assert first.language == Language.PYTHON

    @pytest.mark.unit
    def test_unregistered_pair_raises(self):
        with pytest.raises(UnsupportedFrameworkOrLanguageError) as exc_info:
            EmitterRegistry().get(Framework.SELENIUM, Language.JAVA)
        assert exc_info.value.context == {"framework": "selenium", "language": "java"}

    @pytest.mark.unit
    def test_override_logs_warning(self):
        registry = EmitterRegistry()
        registry.register(_StubEmitter)

        class _Other(_StubEmitter):
            pass

        with patch("generator.emitters.registry.logger") as mock_logger:
            registry.register(_Other)
        mock_logger.warning.assert_called_once()
        assert isinstance(registry.get(Framework.CYPRESS, Language.PYTHON), _Other)


@pytest.mark.unit
class TestBuiltinEmitters:
    """內建 Emitter 的註冊結果"""

    @pytest.mark.unit
    def test_twelve_targets(self):
        targets = supported_targets()
        assert len(targets) == 12
        assert targets[0] == (Framework.PLAYWRIGHT, Language.TYPESCRIPT)
        assert targets[-1] == (Framework.CYPRESS, Language.JAVASCRIPT)

    @pytest.mark.unit
    @pytest.mark.parametrize("language", list(Language))
    def test_playwright_and_selenium_all_languages(self, language):
        assert isinstance(get_emitter(Framework.PLAYWRIGHT, language), PlaywrightEmitter)
        assert isinstance(get_emitter(Framework.SELENIUM, language), SeleniumEmitter)

    @pytest.mark.unit
    @pytest.mark.parametrize("language", [Language.PYTHON, Language.JAVA, Language.CSHARP])
    def test_cypress_js_only(self, language):
        assert not emitter_registry.supports(Framework.CYPRESS, language)
        with pytest.raises(UnsupportedFrameworkOrLanguageError):
            get_emitter(Framework.CYPRESS, language)

    @pytest.mark.unit
    def test_cypress_typescript(self):
        assert isinstance(get_emitter(Framework.CYPRESS, Language.TYPESCRIPT), CypressEmitter)

    @pytest.mark.unit
    def test_async_languages(self):
        assert get_emitter(Framework.PLAYWRIGHT, Language.CSHARP).is_async
        assert not get_emitter(Framework.PLAYWRIGHT, Language.PYTHON).is_async
        assert get_emitter(Framework.SELENIUM, Language.JAVASCRIPT).is_async
        assert not get_emitter(Framework.SELENIUM, Language.CSHARP).is_async
        assert not get_emitter(Framework.CYPRESS, Language.TYPESCRIPT).is_async
