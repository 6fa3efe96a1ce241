"""
Artifact Writer
把 GeneratedArtifact 寫到固定的目錄結構：

    generated-pom/
    └── <framework>/
        └── <language>/
            ├── <ClassName>.<ext>
            ├── <ClassName>.meta.json
            └── tests/
                └── <ClassName>.test.<ext>
"""

import json
from pathlib import Path

from config.config import Config
from generator.schema import GeneratedArtifact
from utils.logger import logger


class ArtifactWriter:
    """產出物寫檔"""

    def __init__(self, output_dir: str | Path | None = None):
        self.output_dir = Path(output_dir or Config.OUTPUT_DIR)

    def target_dir(self, artifact: GeneratedArtifact) -> Path:
        return self.output_dir / artifact.framework.value / artifact.language.value

    def class_path(self, artifact: GeneratedArtifact) -> Path:
        ext = artifact.language.extension
        return self.target_dir(artifact) / f"{artifact.class_name}.{ext}"

    def test_path(self, artifact: GeneratedArtifact) -> Path:
        ext = artifact.language.extension
        return self.target_dir(artifact) / "tests" / f"{artifact.class_name}.test.{ext}"

    def meta_path(self, artifact: GeneratedArtifact) -> Path:
        return self.target_dir(artifact) / f"{artifact.class_name}.meta.json"

    def write(self, artifact: GeneratedArtifact) -> list[Path]:
        """
        寫出 class、metadata 與 (有的話) 測試樣板。

        Returns:
            寫出的檔案路徑
        """
        written: list[Path] = []

        path = self.class_path(artifact)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(artifact.class_source, encoding="utf-8")
        written.append(path)

        meta = self.meta_path(artifact)
        with open(meta, "w", encoding="utf-8") as f:
            json.dump(self._metadata(artifact), f, ensure_ascii=False, indent=2)
        written.append(meta)

        if artifact.test_source is not None:
            test = self.test_path(artifact)
            test.parent.mkdir(parents=True, exist_ok=True)
            test.write_text(artifact.test_source, encoding="utf-8")
            written.append(test)

        for p in written:
            logger.info(f"[Writer] ✓ {p}")
        return written

    @staticmethod
    def _metadata(artifact: GeneratedArtifact) -> dict:
        return {
            "className": artifact.class_name,
            "framework": artifact.framework.value,
            "language": artifact.language.value,
            "imports": list(artifact.imports),
            "methods": list(artifact.methods),
            "elementCount": artifact.metadata.element_count,
            "methodCount": artifact.metadata.method_count,
            "generationTimeMs": artifact.metadata.generation_time_ms,
        }
