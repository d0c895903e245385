import os
import netrc
from typing import Optional
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ValidationError

from java_heapdump.errors import ConfigError
from java_heapdump.payload import MIN_PAYLOAD_CHARS


DEFAULT_CONFIG_PATH = os.path.join(os.path.expanduser("~"), ".config", "java-heapdump", "config.yaml")


class Settings(BaseModel):
    api_url: str = "https://apps.akkeris.io"
    token: Optional[str] = None
    timeout: Optional[float] = 300.0
    alias: str = "java_heap_dump"
    min_payload_chars: int = MIN_PAYLOAD_CHARS


def _normalize_url(host: str) -> str:
    if "://" not in host:
        host = "https://" + host
    return host.rstrip("/")


def netrc_token(api_url: str, path: Optional[str] = None) -> Optional[str]:
    host = urlparse(api_url).hostname
    if not host:
        return None
    try:
        auth = netrc.netrc(path).authenticators(host)
    except (OSError, netrc.NetrcParseError):
        return None
    if not auth:
        return None
    return auth[2] or None


def load_config(path: Optional[str] = None, env: Optional[dict] = None) -> Settings:
    env = os.environ if env is None else env
    path = path or env.get("JAVA_HEAPDUMP_CONFIG")
    data: dict = {}
    if path or os.path.exists(DEFAULT_CONFIG_PATH):
        cfg_path = path or DEFAULT_CONFIG_PATH
        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigError(f"Cannot read config file {cfg_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {cfg_path}: {e}") from e
        if isinstance(data, dict):
            data = data.get("heapdump") or data
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {cfg_path} must contain a mapping")

    if env.get("AKKERIS_API_HOST"):
        data["api_url"] = env["AKKERIS_API_HOST"]
    if env.get("AKKERIS_API_TOKEN"):
        data["token"] = env["AKKERIS_API_TOKEN"]
    if env.get("JAVA_HEAPDUMP_TIMEOUT"):
        data["timeout"] = env["JAVA_HEAPDUMP_TIMEOUT"]

    try:
        settings = Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
    settings.api_url = _normalize_url(settings.api_url)
    if not settings.token:
        settings.token = netrc_token(settings.api_url, env.get("NETRC"))
    return settings
