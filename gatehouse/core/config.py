"""
Configuration layer for Gatehouse.

Provides `CoreSettings` for the ambient layer (logging paths, structlog toggle) and the
`Config` mapping used by feature modules to merge defaults, environment variables and runtime
overrides.
"""

import os
from copy import deepcopy
from types import UnionType
from typing import Any, Callable, Dict, List, Optional, Tuple, Union, get_args, get_origin

from pydantic import BaseModel, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class CORE_LOGGER(BaseModel):
    LOGGER_DIR: str = "~/.cache/gatehouse/logs"
    STRUCT_LOGGER_DIR: str = "~/.cache/gatehouse/structlogs"
    USE_STRUCTLOG: bool = False


class CoreSettings(BaseSettings):
    """Settings for the ambient layer, read from ``GATEHOUSE_CORE__*`` environment variables.

    Example:
        .. code-block:: bash

            export GATEHOUSE_CORE__LOGGER__LOGGER_DIR=/var/log/gatehouse
            export GATEHOUSE_CORE__LOGGER__USE_STRUCTLOG=true
    """

    LOGGER: CORE_LOGGER = CORE_LOGGER()

    model_config = SettingsConfigDict(env_prefix="GATEHOUSE_CORE__", env_nested_delimiter="__")

    def logger_dir(self, structured: bool = False) -> str:
        path = self.LOGGER.STRUCT_LOGGER_DIR if structured else self.LOGGER.LOGGER_DIR
        return os.path.expanduser(path)


# Union alias used for configuration overrides
SettingsLike = Union[
    Dict[str, Any],
    List[Union[Dict[str, Any], BaseSettings, BaseModel]],
    BaseSettings,
    BaseModel,
    None,
]


class _AttrView:
    """
    Lightweight attribute-access wrapper around a mapping.

    Enables access like obj.SECTION.KEY for nested dictionaries.
    """

    def __init__(self, data: Dict[str, Any]):
        self._data = data

    def __getattr__(self, name: str):
        if name in self._data:
            value = self._data[name]
            if isinstance(value, dict):
                return _AttrView(value)
            return value
        raise AttributeError(f"No such attribute: {name}")

    def __getitem__(self, key: str):
        value = self._data[key]
        if isinstance(value, dict):
            return _AttrView(value)
        return value

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"_AttrView({self._data!r})"


class Config(dict):
    """
    Unified configuration mapping for Gatehouse components.

    Consolidates configuration from dictionaries and pydantic models, overlays environment
    variables (``SECTION__KEY``) and finally runtime overrides. Values keep their types; fields
    annotated as `pydantic.SecretStr` are masked in the mapping and readable via `get_secret`.

    Example:
        >>> from pydantic import BaseModel
        >>> from gatehouse.core.config import Config
        >>> class Section(BaseModel):
        ...     URL: str = "http://localhost"
        >>> config = Config.load(defaults={"SECTION": Section().model_dump()})
        >>> config.SECTION.URL
        'http://localhost'
    """

    MASK = "********"

    def __init__(self, extra_settings: SettingsLike = None, *, apply_env: bool = True):
        self._secret_paths: set[Tuple[str, ...]] = set()
        self._secrets: Dict[Tuple[str, ...], str] = {}

        merged: Dict[str, Any] = {}
        for item in self._normalize(extra_settings):
            merged = self._deep_update(merged, item)

        if apply_env:
            merged = self._apply_env_overrides(merged)

        super().__init__(self._mask_secrets(merged))

    def __getattr__(self, name: str):
        """Enable attribute-style access for top-level keys."""
        if name in self:
            value = self[name]
            if isinstance(value, dict):
                return _AttrView(value)
            return value
        raise AttributeError(f"No such attribute: {name}")

    @classmethod
    def load(
        cls,
        *,
        defaults: Optional[Union[Dict[str, Any], BaseModel]] = None,
        overrides: SettingsLike = None,
        file_loader: Optional[Callable[[], Dict[str, Any]]] = None,
    ) -> "Config":
        """Create a Config from defaults, an optional file loader, env vars and runtime overrides.

        Precedence, lowest first: defaults, file loader, environment, overrides.
        """
        layers: List[Union[Dict[str, Any], BaseModel]] = []
        if defaults is not None:
            layers.append(defaults)
        if file_loader is not None:
            layers.append(file_loader() or {})
        base = cls([*layers], apply_env=True)
        if overrides is None:
            return base
        return base.clone_with_overrides(overrides)

    def clone_with_overrides(self, *overrides: SettingsLike) -> "Config":
        """Return a new Config with overrides applied (original remains unchanged)."""
        clone = Config(apply_env=False)
        clone._secret_paths = set(self._secret_paths)
        items = self._revealed()
        for override in overrides:
            for item in clone._normalize(override):
                items = clone._deep_update(items, item)
        dict.update(clone, clone._mask_secrets(items))
        return clone

    def get_secret(self, *path: str) -> Optional[str]:
        """Retrieve a secret by path components, e.g. ``get_secret("GATEHOUSE", "API_TOKEN")``."""
        return self._secrets.get(tuple(path))

    def secret_paths(self) -> List[str]:
        """Return dotted paths of fields considered secrets."""
        return sorted(".".join(p) for p in self._secret_paths)

    def _normalize(self, settings: SettingsLike) -> List[Dict[str, Any]]:
        if settings is None:
            return []
        if not isinstance(settings, list):
            settings = [settings]
        result: List[Dict[str, Any]] = []
        for item in settings:
            if isinstance(item, BaseModel):
                self._secret_paths.update(self._collect_secret_paths(type(item)))
                result.append(item.model_dump())
            elif isinstance(item, dict):
                result.append(self._collect_secret_values(deepcopy(item)))
        return result

    def _collect_secret_values(self, data: Dict[str, Any], prefix: Tuple[str, ...] = ()) -> Dict[str, Any]:
        for key, value in data.items():
            if isinstance(value, SecretStr):
                self._secret_paths.add(prefix + (key,))
            elif isinstance(value, dict):
                self._collect_secret_values(value, prefix + (key,))
        return data

    def _deep_update(self, base: dict, override: dict) -> dict:
        for k, v in override.items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                base[k] = self._deep_update(base[k], v)
            else:
                base[k] = deepcopy(v)
        return base

    def _apply_env_overrides(self, base: dict, delimiter: str = "__") -> dict:
        """Overlay ``SECTION__KEY`` environment variables onto sections already present in ``base``."""
        result = deepcopy(base)
        for env_key, env_value in os.environ.items():
            if delimiter not in env_key:
                continue
            parts = [p.strip().upper() for p in env_key.split(delimiter) if p.strip()]
            if len(parts) < 2 or parts[0] not in result:
                continue
            node = result
            for key in parts[:-1]:
                if not isinstance(node.get(key), dict):
                    node[key] = {}
                node = node[key]
            node[parts[-1]] = self._coerce_env_value(env_value)
        return result

    @staticmethod
    def _coerce_env_value(value: str) -> Any:
        lower = value.lower()
        if lower in {"true", "false"}:
            return lower == "true"
        if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
            return int(value)
        try:
            return float(value)
        except ValueError:
            return value

    def _mask_secrets(self, data: Dict[str, Any]) -> Dict[str, Any]:
        def convert(v: Any, path: Tuple[str, ...]) -> Any:
            if isinstance(v, SecretStr):
                self._secrets[path] = v.get_secret_value()
                return self.MASK
            if isinstance(v, dict):
                return {k: convert(x, path + (k,)) for k, x in v.items()}
            if path in self._secret_paths and v is not None:
                self._secrets[path] = str(v)
                return self.MASK
            return v

        return convert(data, ())

    def _revealed(self) -> Dict[str, Any]:
        def reveal(v: Any, path: Tuple[str, ...]) -> Any:
            if isinstance(v, dict):
                return {k: reveal(x, path + (k,)) for k, x in v.items()}
            if path in self._secrets:
                return self._secrets[path]
            return v

        return reveal(deepcopy(dict(self)), ())

    def _collect_secret_paths(self, model_cls: type[BaseModel], prefix: Tuple[str, ...] = ()) -> set[Tuple[str, ...]]:
        paths: set[Tuple[str, ...]] = set()
        for name, field in model_cls.model_fields.items():
            ann = field.annotation
            if self._is_secret_annotation(ann):
                paths.add(prefix + (name,))
                continue
            if isinstance(ann, type) and issubclass(ann, BaseModel):
                paths.update(self._collect_secret_paths(ann, prefix + (name,)))
        return paths

    @staticmethod
    def _is_secret_annotation(ann: Any) -> bool:
        if ann is SecretStr:
            return True
        if get_origin(ann) in (Union, UnionType):
            return any(a is SecretStr for a in get_args(ann))
        return False
