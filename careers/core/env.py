from __future__ import annotations

import os
from pathlib import Path


def load_env(path: Path | None = None) -> None:
    """
    Populate os.environ from ``.env`` and then ``.env.local``.

    Variables exported by the shell are never replaced. ``.env.local`` may
    override values that came from ``.env``.
    """
    shell_keys = set(os.environ.keys())

    env_path = path or _default_env_path()
    if env_path.exists():
        _apply_env_file(env_path, allow_override=False, protected_keys=shell_keys)

    if path is None:
        local_path = env_path.parent / ".env.local"
        if local_path.exists():
            _apply_env_file(local_path, allow_override=True, protected_keys=shell_keys)


def _apply_env_file(env_path: Path, *, allow_override: bool, protected_keys: set[str]) -> None:
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if not key or key in protected_keys:
            continue
        if not allow_override and key in os.environ:
            continue
        os.environ[key] = _strip_quotes(value.strip())


def _default_env_path() -> Path:
    return Path(__file__).resolve().parents[2] / ".env"


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


__all__ = ["load_env"]
