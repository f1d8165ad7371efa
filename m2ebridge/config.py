"""Main configuration and pipeline definitions stored as JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class GlobalConfig:
    """Loads, exposes and persists the bridge configuration and its pipelines."""

    def __init__(self):
        self._config: dict[str, Any] = {}
        self._pipelines: dict[str, Any] = {}
        self._authbundles_db_path = ""
        self._config_path: Path | None = None

    @staticmethod
    def _read_json(path: str | Path) -> Any:
        try:
            with open(path, encoding="utf-8") as fh:
                text = fh.read()
        except OSError as exc:
            raise RuntimeError(f"Failed to open file: {path}") from exc
        return json.loads(text)

    def load(self, config_path: str | Path) -> None:
        """Read the main config file and the pipelines file it points to."""
        self._config_path = Path(config_path)
        self._config = self._read_json(config_path)
        self._pipelines = self._read_json(self._config["pipelines_path"])
        self._authbundles_db_path = self._config["authbundles_db_path"]

    @property
    def jwt_public_key_path(self) -> str:
        return self._config["jwt_public_key_path"]

    @property
    def authbundles_db_path(self) -> str:
        return self._authbundles_db_path

    @property
    def pipelines(self) -> dict[str, Any]:
        return self._pipelines

    @property
    def api_authentication(self) -> bool:
        return self._config.get("api_authentication", True)

    def set_api_authentication(self, value: bool) -> bool:
        """Change the API authentication flag and save; return whether it was saved."""
        self._config["api_authentication"] = value
        return self.save_config()

    @staticmethod
    def _write_json(path: str | Path, data: Any, sort_keys: bool) -> bool:
        try:
            with open(path, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(data, indent=4, sort_keys=sort_keys, ensure_ascii=False))
        except OSError:
            return False
        return True

    def save_config(self) -> bool:
        if self._config_path is None:
            return False
        return self._write_json(self._config_path, self._config, sort_keys=True)

    def save_pipelines(self) -> bool:
        return self._write_json(self._config["pipelines_path"], self._pipelines, sort_keys=False)

    def add_pipeline(self, pipeid: str, pipeline_data: Any) -> bool:
        if pipeid in self._pipelines:
            raise ValueError(f"Pipeline [ {pipeid} ] already exist!")
        self._pipelines[pipeid] = pipeline_data
        return self.save_pipelines()

    def update_pipeline(self, pipeid: str, pipeline_data: Any) -> bool:
        if pipeid not in self._pipelines:
            raise ValueError(f"Pipeline [ {pipeid} ] doesn't exist!")
        self._pipelines[pipeid] = pipeline_data
        return self.save_pipelines()

    def delete_pipeline(self, pipeid: str) -> bool:
        if pipeid not in self._pipelines:
            raise ValueError(f"Pipeline [ {pipeid} ] doesn't exist!")
        del self._pipelines[pipeid]
        return self.save_pipelines()