"""
fsmkit configuration management (YAML + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from fsmkit.core.exceptions import ConfigError
from fsmkit.core.schemas.validation import validation_errors
from fsmkit.core.utils.io import load_yaml_file
from fsmkit.core.utils.merge import merge_layers
from fsmkit.data import get_data_path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "fsmkit.yaml"
CONFIG_ENV = "FSMKIT_CONFIG"
ENV_PREFIX = "FSMKIT_"


class ConfigManager:
    """Load, merge, and validate fsmkit configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: FSMKIT_<section>__<key>
    2. Project config: ``fsmkit.yaml`` in the project root, or the file named
       by ``config_path`` / ``FSMKIT_CONFIG``
    3. Bundled defaults: fsmkit.data/config/defaults.yaml
    """

    def __init__(self, repo_root: Optional[Path] = None, *, config_path: Optional[Path] = None) -> None:
        explicit = config_path or os.environ.get(CONFIG_ENV) or None
        if explicit:
            self.config_path: Path = Path(explicit).resolve()
            self.repo_root = Path(repo_root).resolve() if repo_root else self.config_path.parent
        else:
            self.repo_root = Path(repo_root or Path.cwd()).resolve()
            self.config_path = self.repo_root / CONFIG_FILENAME
        self.core_config_path = get_data_path("config", "defaults.yaml")

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = load_yaml_file(path, default={})
        except Exception as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a mapping, got {type(data).__name__}",
                context={"path": str(path)},
            )
        return data

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            raise ConfigError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.")
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key == CONFIG_ENV:
                continue
            raw = key[len(ENV_PREFIX) :]
            if "__" not in raw:
                # Only nested keys are overrides; FSMKIT_FOO is left alone.
                continue
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Union[Dict[str, Any], Any] = root
        for part in path[:-1]:
            if not isinstance(cur, dict):
                raise ConfigError(f"Path {'.'.join(path)} traverses a non-mapping value")
            cur = cur.setdefault(part, {})
        if not isinstance(cur, dict):
            raise ConfigError(f"Path {'.'.join(path)} traverses a non-mapping value")
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("Config override from env: %s", ".".join(path))
            self._set_nested(cfg, path, typed_value)

    def validate(self, cfg: Dict[str, Any]) -> None:
        errors = validation_errors(cfg, "config.schema")
        if errors:
            raise ConfigError(
                "Invalid configuration:\n" + "\n".join(f"- {e}" for e in errors),
                context={"path": str(self.config_path), "errors": errors},
            )

    def load_config(self, *, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration.

        Raises:
            ConfigError: invalid YAML, malformed override, or schema failure
        """
        layers = [self.load_yaml(self.core_config_path)]
        if self.config_path.exists():
            layers.append(self.load_yaml(self.config_path))
        else:
            logger.debug("No project config at %s; using defaults", self.config_path)
        cfg = merge_layers(layers)
        self.apply_env_overrides(cfg)
        if validate:
            self.validate(cfg)
        return cfg


def get_config(repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Convenience wrapper returning the merged, validated configuration."""
    return ConfigManager(repo_root).load_config()


__all__ = ["ConfigManager", "get_config", "CONFIG_FILENAME", "CONFIG_ENV", "ENV_PREFIX"]
