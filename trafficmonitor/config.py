# trafficmonitor/config.py
# Configuration management: pipeline task inputs, API client settings, logging.

from __future__ import annotations

import os
import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

from trafficmonitor.enums import AuthMechanism, ScanTimePeriod, UserOrigin
from trafficmonitor.errors import ConfigurationError, ErrorCode

logger = logging.getLogger(__name__)

# The pipeline host exposes each task input as INPUT_<NAME> (upper case).
TASK_INPUT_PREFIX = "INPUT_"


def _env_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() == "true"


def _task_input(environ: Mapping[str, str], name: str, required: bool) -> Optional[str]:
    value = environ.get(TASK_INPUT_PREFIX + name.upper())
    if value is not None:
        value = value.strip()
    if required and not value:
        raise ConfigurationError(
            f"Input required: {name}",
            code=ErrorCode.CONFIG_MISSING_REQUIRED,
            details={"input": name},
        )
    return value or None


def _enum_input(environ: Mapping[str, str], name: str, enum_cls, default=None):
    raw = _task_input(environ, name, required=default is None)
    if raw is None:
        return default
    for member in enum_cls:
        if member.value.lower() == raw.lower():
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ConfigurationError(
        f"Invalid value {raw!r} for input {name}. Expected one of: {allowed}",
        details={"input": name, "value": raw},
    )


def split_delimited_input(raw: Optional[str], delimiter: str = "\n") -> List[str]:
    """Split a delimited task input, dropping blank entries."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(delimiter) if item.strip()]


@dataclass(frozen=True)
class TaskInputs:
    account_name: str
    access_token: str = field(repr=False)
    time_period: ScanTimePeriod = ScanTimePeriod.PRIOR_DAY
    user_origin: UserOrigin = UserOrigin.ALL
    allowed_ip_ranges: Tuple[str, ...] = ()
    include_internal_vsts_services: bool = False
    target_auth_mechanism: AuthMechanism = AuthMechanism.ANY

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TaskInputs":
        env = os.environ if environ is None else environ

        allowed = split_delimited_input(_task_input(env, "ipRange", required=True))
        if not allowed:
            raise ConfigurationError(
                "Input required: ipRange",
                code=ErrorCode.CONFIG_MISSING_REQUIRED,
                details={"input": "ipRange"},
            )

        return cls(
            account_name=_task_input(env, "accountName", required=True),
            access_token=_task_input(env, "accessToken", required=True),
            time_period=_enum_input(env, "timePeriod", ScanTimePeriod),
            user_origin=_enum_input(env, "userOrigin", UserOrigin),
            allowed_ip_ranges=tuple(allowed),
            include_internal_vsts_services=_env_bool(_task_input(env, "scanInternalVstsServices", required=False)),
            target_auth_mechanism=_enum_input(env, "targetAuthMechanism", AuthMechanism, default=AuthMechanism.ANY),
        )


@dataclass(frozen=True)
class ApiConfig:
    request_timeout: float = 30.0
    max_concurrent_users: int = 8
    graph_api_version: str = "4.1-preview.1"
    utilization_api_version: str = "4.1-preview.1"


@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    file_path: Optional[str] = None
    max_file_size_mb: int = 10
    backup_count: int = 5


@dataclass
class MonitorConfig:
    api: ApiConfig = field(default_factory=ApiConfig)
    log: LogConfig = field(default_factory=LogConfig)
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MonitorConfig":
        env = os.environ if environ is None else environ

        # SYSTEM_DEBUG is set by the pipeline host when diagnostics are enabled.
        debug = _env_bool(env.get("SYSTEM_DEBUG"))

        try:
            api = ApiConfig(
                request_timeout=float(env.get("TRAFFICMONITOR_API_TIMEOUT", "30")),
                max_concurrent_users=max(1, int(env.get("TRAFFICMONITOR_MAX_CONCURRENT_USERS", "8"))),
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid API configuration: {exc}")

        log = LogConfig(
            level=env.get("TRAFFICMONITOR_LOG_LEVEL", "DEBUG" if debug else "INFO"),
            file_path=env.get("TRAFFICMONITOR_LOG_FILE") or None,
        )

        return cls(api=api, log=log, debug=debug)


_config: Optional[MonitorConfig] = None


def get_config() -> MonitorConfig:
    global _config
    if _config is None:
        _config = MonitorConfig.from_env()
    return _config


def set_config(config: Optional[MonitorConfig]) -> None:
    global _config
    _config = config


def setup_logging(config: Optional[MonitorConfig] = None) -> None:
    cfg = config or get_config()

    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if cfg.log.file_path:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            cfg.log.file_path,
            maxBytes=cfg.log.max_file_size_mb * 1024 * 1024,
            backupCount=cfg.log.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, cfg.log.level.upper(), logging.INFO),
        format=cfg.log.format,
        handlers=handlers,
        force=True,
    )
