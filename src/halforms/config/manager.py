"""Configuration manager: read/write TOML config, resolve profiles."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomli_w

from halforms.client.errors import ConfigurationError
from halforms.config.constants import (
    CONFIG_FILE,
    DEFAULT_TIMEOUT,
    ENV_SERVICE_PROFILE,
    ENV_SERVICE_URL,
    ENV_TIMEOUT,
)
from halforms.config.models import CLIConfig, ServiceProfile

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib


class ConfigManager:
    """Manages CLI configuration on disk and resolves service profiles."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or CONFIG_FILE
        self._config: CLIConfig | None = None

    @property
    def config(self) -> CLIConfig:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> CLIConfig:
        if not self.config_path.exists():
            return CLIConfig()
        raw = self.config_path.read_bytes()
        data = tomllib.loads(raw.decode())
        profiles: dict[str, ServiceProfile] = {}
        for name, prof_data in data.get("profiles", {}).items():
            profiles[name] = ServiceProfile(name=name, **prof_data)
        return CLIConfig(
            default_profile=data.get("default_profile"),
            default_format=data.get("default_format", "table"),
            profiles=profiles,
        )

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        os.chmod(self.config_path.parent, 0o700)
        data: dict[str, Any] = {}
        if self.config.default_profile:
            data["default_profile"] = self.config.default_profile
        if self.config.default_format != "table":
            data["default_format"] = self.config.default_format
        if self.config.profiles:
            data["profiles"] = {}
            for name, profile in self.config.profiles.items():
                prof_dict = profile.model_dump(exclude={"name"}, exclude_none=True)
                # Keep defaults out of the file
                if prof_dict.get("verify_ssl") is True:
                    del prof_dict["verify_ssl"]
                if prof_dict.get("timeout") == DEFAULT_TIMEOUT:
                    del prof_dict["timeout"]
                if not prof_dict.get("headers"):
                    prof_dict.pop("headers", None)
                data["profiles"][name] = prof_dict
        # Write to a temp file, then rename
        temp = self.config_path.with_suffix(".tmp")
        fd = os.open(str(temp), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, tomli_w.dumps(data).encode())
        finally:
            os.close(fd)
        temp.replace(self.config_path)

    def add_profile(self, profile: ServiceProfile) -> None:
        self.config.profiles[profile.name] = profile
        if not self.config.default_profile:
            self.config.default_profile = profile.name
        self.save()

    def remove_profile(self, name: str) -> bool:
        if name not in self.config.profiles:
            return False
        del self.config.profiles[name]
        if self.config.default_profile == name:
            self.config.default_profile = next(iter(self.config.profiles), None)
        self.save()
        return True

    def set_default(self, name: str) -> bool:
        if name not in self.config.profiles:
            return False
        self.config.default_profile = name
        self.save()
        return True

    def get_profile(self, name: str | None = None) -> ServiceProfile | None:
        if name:
            return self.config.profiles.get(name)
        default = self.config.default_profile
        if default:
            return self.config.profiles.get(default)
        return None

    def resolve_profile(
        self,
        profile_name: str | None = None,
        url: str | None = None,
    ) -> ServiceProfile:
        """Resolve the service to talk to.

        Precedence: CLI flags > env vars > config profile.
        """
        env_profile = os.environ.get(ENV_SERVICE_PROFILE)
        profile = self.get_profile(profile_name or env_profile)
        if (profile_name or env_profile) and profile is None and not url:
            raise ConfigurationError(f"Profile '{profile_name or env_profile}' not found.")

        resolved_url = url or os.environ.get(ENV_SERVICE_URL) or (profile.url if profile else None)
        if not resolved_url:
            raise ConfigurationError(
                "No service URL configured. Use 'halforms config add' or set "
                f"{ENV_SERVICE_URL} or pass --url."
            )

        env_timeout = os.environ.get(ENV_TIMEOUT)
        if env_timeout:
            try:
                timeout = float(env_timeout)
            except ValueError as exc:
                raise ConfigurationError(
                    f"{ENV_TIMEOUT} must be a number, got {env_timeout!r}"
                ) from exc
        else:
            timeout = profile.timeout if profile else DEFAULT_TIMEOUT

        return ServiceProfile(
            name=profile.name if profile else "cli",
            url=resolved_url,
            verify_ssl=profile.verify_ssl if profile else True,
            timeout=timeout,
            headers=dict(profile.headers) if profile else {},
        )
