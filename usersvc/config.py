"""Service configuration read from a YAML file with environment overrides."""

from __future__ import annotations

import argparse
import os
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, fields
from datetime import timedelta
from decimal import Decimal
from typing import Any
from urllib.parse import quote_plus

import yaml

_NS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}
_UNIT_PATTERN = "ns|us|µs|μs|ms|s|m|h"
_PART = re.compile(rf"(\d+\.?\d*|\.\d+)({_UNIT_PATTERN})")
_WHOLE = re.compile(rf"(?:(?:\d+\.?\d*|\.\d+)(?:{_UNIT_PATTERN}))+")


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``1h30m`` or ``-1.5s``."""
    body = text
    sign = 1
    if body[:1] in ("+", "-"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body or not _WHOLE.fullmatch(body):
        raise ValueError(f"invalid duration {text!r}")
    total_ns = sum(int(Decimal(number) * _NS_PER_UNIT[unit]) for number, unit in _PART.findall(body))
    return timedelta(microseconds=sign * (total_ns // 1000))


def _with_fraction(value: int, precision: int) -> str:
    whole, frac = divmod(value, 10**precision)
    text = str(whole)
    if frac:
        text += "." + f"{frac:0{precision}d}".rstrip("0")
    return text


def format_duration(value: timedelta) -> str:
    """Render a duration the way ``parse_duration`` reads it, e.g. ``1h30m0s``."""
    ns = ((value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds) * 1000
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u == 0:
        return "0s"
    if u < 1_000_000_000:
        if u < 1_000:
            return f"{sign}{u}ns"
        if u < 1_000_000:
            return f"{sign}{_with_fraction(u, 3)}µs"
        return f"{sign}{_with_fraction(u, 6)}ms"
    seconds = _with_fraction(u % 60_000_000_000, 9) + "s"
    minutes = u // 60_000_000_000
    if minutes == 0:
        return sign + seconds
    hours, minutes = divmod(minutes, 60)
    if hours == 0:
        return f"{sign}{minutes}m{seconds}"
    return f"{sign}{hours}h{minutes}m{seconds}"


_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


def _to_str(value: Any) -> str:
    return str(value)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    return int(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value)
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


def _to_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return value.split(",")
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    raise ValueError(f"expected a list, got {value!r}")


def _to_duration(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return timedelta(microseconds=value // 1000)
    if isinstance(value, str):
        return parse_duration(value)
    raise ValueError(f"expected a duration, got {value!r}")


def _setting(
    key: str | None,
    env: str | None = None,
    *,
    env_prefix: str | None = None,
    default: Any = None,
    factory: Callable[[], Any] | None = None,
    parse: Callable[[Any], Any] = _to_str,
) -> Any:
    """Declare a setting; a key of None means the field's own name is used."""
    metadata = {"yaml": key, "env": env, "env_prefix": env_prefix, "parse": parse}
    if factory is not None:
        return field(default_factory=factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def _section(key: str, cls: type) -> Any:
    return field(default_factory=cls, metadata={"yaml": key, "section": cls})


@dataclass
class KafkaConfig:
    """Connection settings for the event broker."""

    brokers: list[str] = _setting(
        "brokers", "KAFKA_BROKERS", factory=lambda: ["localhost:9092"], parse=_to_list
    )
    topic: str = _setting("topic", "KAFKA_TOPIC", default="events")
    group_id: str = _setting("groupID", "KAFKA_GROUP_ID", default="user_service_group")
    retry_max: int = _setting("retryMax", "KAFKA_RETRY_MAX", default=5, parse=_to_int)
    return_successes: bool = _setting(
        "returnSuccesses", "KAFKA_RETURN_SUCCESSES", default=True, parse=_to_bool
    )


PASSWORD = "password"
_DB_ENV_PREFIX = "DATABASE_"


@dataclass
class DatabaseConfig:
    """Database connection settings."""

    type: str = _setting("type", "DATABASE_TYPE", default="postgres")
    port: int = _setting("port", "DATABASE_PORT", default=5432, parse=_to_int)
    host: str = _setting("host", "DATABASE_HOST", default="localhost")
    user: str = _setting("user", "DATABASE_USER", default="user")
    password: str = _setting(None, env_prefix=_DB_ENV_PREFIX, default=PASSWORD)
    name: str = _setting("name", "DATABASE_NAME", default="postgres")
    ssl_mode: str = _setting("sslMode", "SSL_MODE", default="false")
    pool_max_conn: int = _setting("poolMaxConn", "POOL_MAX_CONN", default=10, parse=_to_int)
    pool_max_conn_lifetime: timedelta = _setting(
        "poolMaxConnLifetime",
        "POOL_MAX_CONN_LIFETIME",
        default=timedelta(hours=1, minutes=30),
        parse=_to_duration,
    )

    def url(self) -> str:
        """Return the connection URL including pool settings."""
        return (
            f"{self.type}://{self.user}:{quote_plus(self.password)}@{self.host}:{self.port}/{self.name}"
            f"?sslmode={self.ssl_mode}&pool_max_conns={self.pool_max_conn}"
            f"&pool_max_conn_lifetime={format_duration(self.pool_max_conn_lifetime)}"
        )


@dataclass
class GRPCServerConfig:
    """Address and port of the RPC server."""

    address: str = _setting("address", "address", default="address")
    port: int = _setting("port", "port", default=0, parse=_to_int)


@dataclass
class TelemetryConfig:
    """Tracing and metrics settings."""

    service_name: str = _setting("serviceName", "SERVICE_NAME", default="")
    service_version: str = _setting("serviceVersion", "SERVICE_VERSION", default="")
    environment: str = _setting("environment", "ENVIRONMENT", default="")
    metrics_port: int = _setting("metricsPort", "METRICS_PORT", default=0, parse=_to_int)
    trace_endpoint: str = _setting("traceEndpoint", "TRACE_ENDPOINT", default="localhost:4317")


@dataclass
class Config:
    """Complete service configuration."""

    env: str = _setting("env", "ENV", default="local")
    db: DatabaseConfig = _section("db", DatabaseConfig)
    grpc_server: GRPCServerConfig = _section("grpcServer", GRPCServerConfig)
    telemetry: TelemetryConfig = _section("telemetry", TelemetryConfig)
    kafka: KafkaConfig = _section("kafka", KafkaConfig)


def _env_name(meta: Mapping[str, Any], field_name: str) -> str | None:
    if meta["env"]:
        return meta["env"]
    if meta["env_prefix"]:
        return meta["env_prefix"] + field_name.upper()
    return None


def _build(cls: type, data: Any, environ: Mapping[str, str]) -> Any:
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a mapping for {cls.__name__}, got {type(data).__name__}")
    values: dict[str, Any] = {}
    for spec in fields(cls):
        meta = spec.metadata
        if "section" in meta:
            values[spec.name] = _build(meta["section"], data.get(meta["yaml"]), environ)
            continue
        parse = meta["parse"]
        yaml_key = meta["yaml"] or spec.name
        env_name = _env_name(meta, spec.name)
        if env_name and env_name in environ:
            raw, source = environ[env_name], env_name
        else:
            raw, source = data.get(yaml_key), yaml_key
        if raw is None:
            continue
        try:
            value = parse(raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"invalid value for {source}: {exc}") from exc
        # A zero value counts as unset, so the default applies.
        if value:
            values[spec.name] = value
    return cls(**values)


def load_config(path: str | os.PathLike[str]) -> Config:
    """Read a YAML config file, then apply environment overrides and defaults."""
    with open(path, encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid config file {os.fspath(path)}: {exc}") from exc
    return _build(Config, data, os.environ)


def fetch_config_path(argv: Sequence[str] | None = None) -> str:
    """Return the config path from ``--config``, falling back to ``CONFIG_PATH``."""
    parser = argparse.ArgumentParser(add_help=True)
    parser.add_argument("-config", "--config", dest="config", default="", help="path to config file")
    args = parser.parse_args(argv)
    return args.config or os.environ.get("CONFIG_PATH", "")


def must_load(argv: Sequence[str] | None = None) -> Config:
    """Locate and load the config file, raising if it cannot be found or read."""
    path = fetch_config_path(argv)
    if not path:
        raise ValueError("config path is empty")
    if not os.path.exists(path):
        raise FileNotFoundError("config file does not exist: " + path)
    return load_config(path)