import json
import os
from pathlib import Path
from typing import Any

from srm_dex.core.constants.base import DEFAULT_SUI_RPC_URL
from srm_dex.core.utils.sui import normalize_sui_object_id

_CONFIG_ENV_KEYS = ("SRM_DEX_CONFIG_PATH", "SRM_DEX_CONFIG")
_DEFAULT_CONFIG_FILENAME = "config.json"
_PACKAGE_ID_ENV = "SRM_PACKAGE_ID"
_RPC_URL_ENV = "SUI_RPC_URL"


def _find_project_root(start: Path) -> Path | None:
    cur = start.resolve()
    for parent in [cur, *cur.parents]:
        if (parent / "pyproject.toml").exists():
            return parent
    return None


def _project_root() -> Path | None:
    return _find_project_root(Path.cwd()) or _find_project_root(Path(__file__).parent)


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path is not None:
        return Path(path).expanduser()

    env_path = next(
        (os.getenv(k, "").strip() for k in _CONFIG_ENV_KEYS if os.getenv(k)), ""
    )
    if env_path:
        p = Path(env_path).expanduser()
        if p.is_absolute():
            return p
        root = _project_root()
        return (root / p) if root else p

    root = _project_root()
    return (root / _DEFAULT_CONFIG_FILENAME) if root else Path(_DEFAULT_CONFIG_FILENAME)


def load_config_json(
    path: str | Path | None = None, *, require_exists: bool = False
) -> dict[str, Any]:
    cfg_path = resolve_config_path(path)
    if not cfg_path.exists():
        if require_exists:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return {}
    try:
        return json.loads(cfg_path.read_text())
    except (OSError, ValueError):
        return {}


CONFIG: dict[str, Any] = load_config_json()


def set_config(config: dict[str, Any]) -> None:
    """Replace the global CONFIG dict in-place.

    Call at process start; code that imported CONFIG sees the new values.
    """
    CONFIG.clear()
    CONFIG.update(config)


def load_config(
    path: str | Path | None = None, *, require_exists: bool = False
) -> None:
    """Load config from disk into the global CONFIG dict."""
    set_config(load_config_json(path, require_exists=require_exists))


def get_package_id() -> str | None:
    """Address of the deployed SRM DEX package, normalized to 32-byte hex."""
    package_id = CONFIG.get("srm", {}).get("package_id") or os.environ.get(
        _PACKAGE_ID_ENV
    )
    if package_id and str(package_id).strip():
        return normalize_sui_object_id(str(package_id).strip())
    return None


def get_rpc_url() -> str:
    rpc_url = CONFIG.get("sui", {}).get("rpc_url") or os.environ.get(_RPC_URL_ENV)
    if rpc_url and str(rpc_url).strip():
        return str(rpc_url).strip()
    return DEFAULT_SUI_RPC_URL
