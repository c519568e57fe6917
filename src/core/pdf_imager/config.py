from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping


CONFIG_FILE = Path("config.toml")


@dataclass(slots=True)
class RuntimeConfig:
    auth_token: str = ""
    temp_dir: Path | None = None
    log_level: str = "INFO"
    log_format: str = "json"


@dataclass(slots=True)
class APIConfig:
    host: str = "0.0.0.0"
    port: int = 8507


@dataclass(slots=True)
class AppConfig:
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    api: APIConfig = field(default_factory=APIConfig)

    @property
    def auth_enabled(self) -> bool:
        return bool(self.runtime.auth_token)


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _build_runtime(data: Mapping[str, object] | None) -> RuntimeConfig:
    if not data:
        return RuntimeConfig()
    temp_dir = str(data.get("temp_dir", "") or "")
    log_format = str(data.get("log_format", "json")).lower()
    if log_format not in {"json", "text"}:
        raise ValueError(f"Unsupported log_format: {log_format!r}")
    return RuntimeConfig(
        auth_token=str(data.get("auth_token", "")),
        temp_dir=Path(temp_dir) if temp_dir else None,
        log_level=str(data.get("log_level", "INFO")).upper(),
        log_format=log_format,
    )


def _build_api(data: Mapping[str, object] | None) -> APIConfig:
    if not data:
        return APIConfig()
    return APIConfig(host=str(data.get("host", "0.0.0.0")), port=int(data.get("port", 8507)))


def load_config(path: Path | None = None) -> AppConfig:
    path = path or CONFIG_FILE
    raw = _read_toml(path)
    runtime_data = raw.get("runtime") if isinstance(raw, Mapping) else None
    api_data = raw.get("api") if isinstance(raw, Mapping) else None
    runtime = _build_runtime(runtime_data if isinstance(runtime_data, Mapping) else None)
    api = _build_api(api_data if isinstance(api_data, Mapping) else None)
    return AppConfig(runtime=runtime, api=api)


def dump_config(config: AppConfig) -> str:
    payload = {
        "runtime": {
            "auth_token": "***" if config.auth_enabled else "",
            "temp_dir": str(config.runtime.temp_dir) if config.runtime.temp_dir else "",
            "log_level": config.runtime.log_level,
            "log_format": config.runtime.log_format,
        },
        "api": {
            "host": config.api.host,
            "port": config.api.port,
        },
    }
    return json.dumps(payload, indent=2)
