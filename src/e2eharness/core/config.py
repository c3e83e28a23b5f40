from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
import tomllib

_CONFIG_CACHE: dict | None = None

DEFAULT_ENV = "int"
DEFAULT_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}

# Environments usable without any config file. A config table with the same
# name is merged over the built-in values.
BUILTIN_ENVIRONMENTS: dict[str, dict[str, str]] = {
    "int": {
        "frontend_url": "https://automationexercise.com",
        "api_url": "https://reqres.in/api",
        "gql_url": "https://graphqlzero.almansi.me/api",
    },
}

DEFAULT_BROWSER_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-web-security",
    "--disable-gpu",
    "--disable-dev-shm-usage",
    "--disable-infobars",
    "--start-maximized",
    "--incognito",
)

_TRUTHY = {"1", "true", "yes", "on"}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Environment:
    name: str
    frontend_url: str
    api_url: str | None = None
    gql_url: str | None = None
    api_headers: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
    gql_headers: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))


@dataclass(frozen=True)
class RequestSettings:
    timeout_ms: int = 60_000
    max_retries: int = 3
    ignore_https_errors: bool = True


@dataclass(frozen=True)
class BrowserSettings:
    headless: bool = True
    slow_mo: int = 0
    launch_timeout_ms: int = 30_000
    args: tuple[str, ...] = DEFAULT_BROWSER_ARGS
    ignore_https_errors: bool = False
    viewport: dict | None = None
    action_timeout_ms: int = 10_000
    visible_probe_timeout_ms: int = 5_000
    download_dir: str | None = None


def config_path() -> Path:
    override = os.environ.get("E2E_CONFIG_PATH")
    if override:
        return Path(override).expanduser()
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base).expanduser() if base else (Path.home() / ".config")
    return root / "e2eharness" / "config.toml"


def load_config() -> dict:
    path = config_path()
    if not path.exists():
        return {}
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ValueError(f"Invalid config file: {path}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config file structure: {path}")
    return data


def get_config() -> dict:
    global _CONFIG_CACHE
    if _CONFIG_CACHE is None:
        _CONFIG_CACHE = load_config()
    return _CONFIG_CACHE


def reset_config_cache() -> None:
    global _CONFIG_CACHE
    _CONFIG_CACHE = None


def get_config_value(*keys: str, default: object | None = None) -> object | None:
    current: object = get_config()
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def _section(name: str) -> dict:
    value = get_config_value(name, default={})
    if not isinstance(value, dict):
        raise ConfigError(f"Config section [{name}] must be a table")
    return value


def env_name() -> str:
    override = os.environ.get("E2E")
    if override:
        return override
    configured = get_config_value("env")
    if isinstance(configured, str) and configured.strip():
        return configured
    return DEFAULT_ENV


def is_verbose() -> bool:
    override = os.environ.get("E2E_VERBOSE")
    if override is not None:
        return override.strip().lower() in _TRUTHY
    return bool(get_config_value("verbose", default=False))


def load_environment(name: str | None = None) -> Environment:
    name = name or env_name()
    configured = get_config_value("environments", name)
    if configured is not None and not isinstance(configured, dict):
        raise ConfigError(f"Config section [environments.{name}] must be a table")
    if configured is None and name not in BUILTIN_ENVIRONMENTS:
        raise ConfigError(f"Unknown environment: {name!r}")

    merged: dict = {**BUILTIN_ENVIRONMENTS.get(name, {}), **(configured or {})}
    for key, env_key in (
        ("frontend_url", "E2E_FRONTEND_URL"),
        ("api_url", "E2E_API_URL"),
        ("gql_url", "E2E_GQL_URL"),
    ):
        override = os.environ.get(env_key)
        if override:
            merged[key] = override

    frontend_url = merged.get("frontend_url")
    if not isinstance(frontend_url, str) or not frontend_url.strip():
        raise ConfigError(f"Environment {name!r} has no frontend_url")

    headers = merged.get("headers") or {}
    if not isinstance(headers, dict):
        raise ConfigError(f"Config section [environments.{name}.headers] must be a table")

    return Environment(
        name=name,
        frontend_url=frontend_url,
        api_url=merged.get("api_url") or None,
        gql_url=merged.get("gql_url") or None,
        api_headers={**DEFAULT_HEADERS, **headers.get("api", {})},
        gql_headers={**DEFAULT_HEADERS, **headers.get("gql", {})},
    )


def load_request_settings() -> RequestSettings:
    section = _section("request")
    defaults = RequestSettings()
    return RequestSettings(
        timeout_ms=int(section.get("timeout_ms", defaults.timeout_ms)),
        max_retries=int(section.get("max_retries", defaults.max_retries)),
        ignore_https_errors=bool(section.get("ignore_https_errors", defaults.ignore_https_errors)),
    )


def load_browser_settings() -> BrowserSettings:
    section = _section("browser")
    defaults = BrowserSettings()
    headless = bool(section.get("headless", defaults.headless))
    if os.environ.get("E2E_HEADED", "").strip().lower() in _TRUTHY:
        headless = False
    viewport = section.get("viewport", defaults.viewport)
    if viewport is not None and not isinstance(viewport, dict):
        raise ConfigError("browser.viewport must be a table with width and height")
    return BrowserSettings(
        headless=headless,
        slow_mo=int(section.get("slow_mo", defaults.slow_mo)),
        launch_timeout_ms=int(section.get("launch_timeout_ms", defaults.launch_timeout_ms)),
        args=tuple(section.get("args", defaults.args)),
        ignore_https_errors=bool(section.get("ignore_https_errors", defaults.ignore_https_errors)),
        viewport=viewport,
        action_timeout_ms=int(section.get("action_timeout_ms", defaults.action_timeout_ms)),
        visible_probe_timeout_ms=int(section.get("visible_probe_timeout_ms", defaults.visible_probe_timeout_ms)),
        download_dir=section.get("download_dir", defaults.download_dir),
    )
