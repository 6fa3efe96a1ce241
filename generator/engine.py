"""
Generator Engine (核心引擎)
串接 掃描 → 命名 → PageModel → Emitter，產生 Page Object 原始碼。

使用方式：
    1. 單一頁面：
        engine = GeneratorEngine()
        result = engine.generate_pom("https://example.com/login",
                                     {"framework": "cypress", "language": "typescript"},
                                     source=html)

    2. 同一頁面產生多個目標：
        engine.generate_targets(url, [(Framework.PLAYWRIGHT, Language.PYTHON), ...],
                                options, source=html)

    3. 批次 (多個頁面並行)：
        engine.generate_batch([PageRequest(url, options, html), ...])

generate_pom() 不會拋例外：所有失敗都放進 GenerationResult.errors，
批次中某一頁失敗不影響其他頁。
"""

from __future__ import annotations

import dataclasses
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any, Sequence
from urllib.parse import urlparse

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver

from config.config import Config
from core.exceptions import PageFetchError, PomGeneratorError
from generator.emitters import BaseEmitter, EmitterRegistry, emitter_registry
from generator.page_model_builder import PageModelBuilder
from generator.schema import Framework, GenerationOptions, GenerationResult, Language, PageModel
from scanner.element_scanner import scan, snapshot_from_driver
from scanner.name_generator import name_elements
from scanner.page_fetcher import PageFetcher
from utils.logger import logger


@dataclass(frozen=True)
class PageRequest:
    """批次中的單一頁面；source 為 None 時以 HTTP 取得"""
    url: str
    options: GenerationOptions | dict | None = None
    source: Any = None


def page_name_from_url(url: str) -> str:
    """網址路徑的最後一段 (去副檔名)；路徑為空時用主機名稱"""
    parsed = urlparse(url)
    segments = [s for s in parsed.path.split("/") if s]
    if segments:
        return PurePosixPath(segments[-1]).stem
    return parsed.hostname or ""


def base_url_from_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme and parsed.netloc:
        return f"{parsed.scheme}://{parsed.netloc}"
    return ""


class GeneratorEngine:
    """Page Object 產生引擎；本身不保存任何請求間的狀態"""

    def __init__(
        self,
        registry: EmitterRegistry = emitter_registry,
        fetcher: PageFetcher | None = None,
    ):
        self.registry = registry
        self.fetcher = fetcher

    # ── 公開 API ──

    def generate_pom(
        self,
        url: str,
        options: GenerationOptions | dict | None = None,
        source: Any = None,
    ) -> GenerationResult:
        """
        產生單一頁面的 Page Object。

        Args:
            url: 頁面網址 (決定頁面名稱與 base URL)
            options: GenerationOptions 或 dict (接受 camelCase 選項名稱)
            source: HTML / BeautifulSoup / etree / WebDriver；None 時以 HTTP 取得

        Returns:
            GenerationResult，失敗時 success=False 並帶 errors
        """
        start = time.perf_counter()
        logger.info(f"[Generate] 開始: {url}")
        try:
            opts = self._options(options)
            emitter = self.registry.get(opts.framework, opts.language)
            model = self.analyze(url, opts, source)
            result = self._render(emitter, model, opts)
        except PomGeneratorError as e:
            result = self._failure(url, e)
        except Exception as e:
            result = self._unexpected(url, e)

        result.elapsed_ms = round((time.perf_counter() - start) * 1000, 3)
        if result.success:
            logger.info(
                f"[Generate] 完成: {result.artifact.class_name} "
                f"({result.artifact.framework.value}/{result.artifact.language.value}, "
                f"{result.metadata.method_count} 方法, {result.elapsed_ms}ms)"
            )
        return result

    def generate_targets(
        self,
        url: str,
        targets: Sequence[tuple[Framework, Language]],
        options: GenerationOptions | dict | None = None,
        source: Any = None,
    ) -> list[GenerationResult]:
        """
        同一頁面只掃描一次，依序產生多個 (framework, language)。
        某個組合失敗只影響該筆結果。
        """
        try:
            opts = self._options(options)
            model = self.analyze(url, opts, source)
        except PomGeneratorError as e:
            failure = self._failure(url, e)
            return [dataclasses.replace(failure, errors=list(failure.errors)) for _ in targets]
        except Exception as e:
            failure = self._unexpected(url, e)
            return [dataclasses.replace(failure, errors=list(failure.errors)) for _ in targets]

        results = []
        for framework, language in targets:
            start = time.perf_counter()
            target_opts = opts.with_target(framework, language)
            try:
                emitter = self.registry.get(framework, language)
                result = self._render(emitter, model, target_opts)
            except PomGeneratorError as e:
                result = self._failure(url, e)
            except Exception as e:
                result = self._unexpected(url, e)
            result.elapsed_ms = round((time.perf_counter() - start) * 1000, 3)
            results.append(result)
        return results

    def generate_batch(
        self,
        requests: Sequence[PageRequest],
        workers: int | None = None,
    ) -> list[GenerationResult]:
        """
        多個頁面並行產生，回傳順序與 requests 相同。
        同一個 WebDriver 不可同時出現在兩個 request。
        """
        workers = workers or Config.BATCH_WORKERS
        logger.info(f"[Batch] {len(requests)} 個頁面, {workers} workers")
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(self.generate_pom, r.url, r.options, r.source)
                for r in requests
            ]
            results = [f.result() for f in futures]
        failed = sum(1 for r in results if not r.success)
        logger.info(f"[Batch] 完成: 成功 {len(results) - failed}, 失敗 {failed}")
        return results

    def analyze(self, url: str, options: GenerationOptions, source: Any = None) -> PageModel:
        """
        掃描頁面並建立 PageModel (尚未填入 imports)。

        Raises:
            PomGeneratorError: 掃描 / 取得頁面 / 建立 PageModel 失敗
        """
        snapshot = self._snapshot(url, source)
        named = name_elements(scan(snapshot))
        page_name = options.page_name or page_name_from_url(url)
        return PageModelBuilder(options).build(
            named, page_name, base_url=base_url_from_url(url),
        )

    # ── 內部 ──

    @staticmethod
    def _options(options: GenerationOptions | dict | None) -> GenerationOptions:
        if options is None:
            return GenerationOptions.from_dict({})
        if isinstance(options, dict):
            return GenerationOptions.from_dict(options)
        return options

    def _snapshot(self, url: str, source: Any):
        if source is None:
            fetcher = self.fetcher or PageFetcher()
            return fetcher.fetch(url)
        if isinstance(source, WebDriver):
            try:
                return snapshot_from_driver(source)
            except WebDriverException as e:
                raise PageFetchError(url, reason=f"{type(e).__name__}: {e.msg}") from e
        return source

    @staticmethod
    def _render(emitter: BaseEmitter, model: PageModel, options: GenerationOptions) -> GenerationResult:
        model = dataclasses.replace(model, imports=emitter.imports(model, options))
        artifact = emitter.emit(model, options)
        for warning in model.warnings:
            logger.warning(f"[Generate] {model.class_name}: {warning}")
        return GenerationResult(success=True, artifact=artifact, warnings=list(model.warnings))

    @staticmethod
    def _failure(url: str, error: PomGeneratorError) -> GenerationResult:
        logger.error(f"[Generate] 失敗: {url} ({type(error).__name__}: {error})")
        return GenerationResult(success=False, errors=[str(error)])

    @staticmethod
    def _unexpected(url: str, error: Exception) -> GenerationResult:
        logger.exception(f"[Generate] 未預期的錯誤: {url}")
        return GenerationResult(success=False, errors=[f"{type(error).__name__}: {error}"])


def generate_pom(
    url: str,
    options: GenerationOptions | dict | None = None,
    source: Any = None,
) -> GenerationResult:
    """GeneratorEngine().generate_pom() 的捷徑"""
    return GeneratorEngine().generate_pom(url, options, source)
