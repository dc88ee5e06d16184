"""YAML implementation of the manifest repository."""

import os
import tempfile
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError as PydanticValidationError

from repo_copilot.core.exceptions import ManifestError
from repo_copilot.core.models.manifest import Manifest, ManifestConfig
from repo_copilot.core.models.repository import Repository

logger = structlog.get_logger(__name__)

CONFIG_FILENAME = "config.yaml"
REPOSITORIES_FILENAME = "repositories.yaml"


class ManifestRepository:
    """Loads and saves the two manifest documents under ``config_dir``.

    ``config.yaml`` holds the settings document and ``repositories.yaml``
    the list of tracked repositories. Missing files load as defaults and
    loading never writes. Saves replace the whole file atomically; there
    is no locking between concurrent invocations.
    """

    def __init__(self, config_dir: str | Path) -> None:
        self._config_dir = Path(config_dir)

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def config_file(self) -> Path:
        return self._config_dir / CONFIG_FILENAME

    @property
    def repositories_file(self) -> Path:
        return self._config_dir / REPOSITORIES_FILENAME

    def exists(self) -> bool:
        """Check whether a settings document has been written."""
        return self.config_file.is_file()

    # --- Loading ---

    def load_config(self) -> ManifestConfig:
        data = self._read(self.config_file)
        if not data:
            return ManifestConfig()
        try:
            return ManifestConfig.model_validate(data)
        except PydanticValidationError as e:
            raise ManifestError(
                f"Invalid configuration in {self.config_file}",
                details={"path": str(self.config_file), "errors": e.errors()},
            ) from e

    def load_repositories(self) -> list[Repository]:
        data = self._read(self.repositories_file)
        if not data or not data.get("repositories"):
            return []
        try:
            return [Repository.model_validate(item) for item in data["repositories"]]
        except PydanticValidationError as e:
            raise ManifestError(
                f"Invalid repository record in {self.repositories_file}",
                details={"path": str(self.repositories_file), "errors": e.errors()},
            ) from e

    def load(self) -> Manifest:
        """Load both documents."""
        return Manifest(
            config=self.load_config(),
            repositories=self.load_repositories(),
        )

    # --- Saving ---

    def save_config(self, config: ManifestConfig) -> None:
        payload = config.model_dump(mode="json", by_alias=True, exclude_none=True)
        self._write(self.config_file, payload)

    def save_repositories(self, repositories: list[Repository]) -> None:
        payload = {
            "repositories": [r.model_dump(mode="json") for r in repositories],
        }
        self._write(self.repositories_file, payload)

    def save(self, manifest: Manifest) -> None:
        """Save both documents."""
        self.save_config(manifest.config)
        self.save_repositories(manifest.repositories)

    # --- Internals ---

    def _read(self, path: Path) -> dict[str, Any] | None:
        if not path.is_file():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ManifestError(f"Failed to read {path}: {e}", details={"path": str(path)}) from e
        except yaml.YAMLError as e:
            raise ManifestError(f"Malformed YAML in {path}", details={"path": str(path)}) from e

        if data is not None and not isinstance(data, dict):
            raise ManifestError(
                f"Expected a mapping at the top of {path}",
                details={"path": str(path)},
            )
        return data

    def _write(self, path: Path, data: dict[str, Any]) -> None:
        """Write ``data`` as YAML via a temp file and ``os.replace``."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    yaml.safe_dump(
                        data,
                        f,
                        default_flow_style=False,
                        sort_keys=False,
                        allow_unicode=True,
                        indent=2,
                    )
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise ManifestError(f"Failed to write {path}: {e}", details={"path": str(path)}) from e

        logger.debug("Manifest document saved", path=str(path))
