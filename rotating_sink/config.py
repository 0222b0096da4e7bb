"""Configuration module: frozen dataclass loaded from YAML, env vars and CLI args.

Precedence, lowest first: dataclass defaults, the ``sink`` section of the
YAML file named by ``--config`` / ``CONFIG_PATH``, environment variables,
command-line flags.
"""

import argparse
import os
from dataclasses import dataclass, fields, replace

import yaml


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class SinkConfig:
    base_path: str = "./logs/application.log"
    max_size: int = 10 * 1024 * 1024  # 10 MB
    max_files: int = 5
    max_compressed_files: int = 10
    rotate_on_open: bool = False
    thread_safe: bool = True
    compression_level: int = 6
    record_format: str = "text"

    def __post_init__(self):
        if self.max_size <= 0:
            raise ValueError(f"max_size must be positive, got {self.max_size}")
        if self.max_files < 1:
            raise ValueError(f"max_files must be at least 1, got {self.max_files}")
        if self.max_compressed_files < 0:
            raise ValueError(
                f"max_compressed_files must be >= 0, got {self.max_compressed_files}"
            )
        if self.record_format not in ("text", "json"):
            raise ValueError(f"Unsupported record format: {self.record_format}")

    @classmethod
    def from_dict(cls, d: dict) -> "SinkConfig":
        """Build from a YAML section; unknown keys are ignored, missing keys keep defaults."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in (d or {}).items() if k in known}
        if "max_size_mb" in (d or {}) and "max_size" not in values:
            values["max_size"] = int(float(d["max_size_mb"]) * 1024 * 1024)
        for key in ("rotate_on_open", "thread_safe"):
            if key in values:
                values[key] = _parse_bool(values[key])
        return cls(**values)


def load_yaml(path: str) -> dict:
    """Load a YAML config file and return it as a dict (empty file -> {})."""
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _env_overrides() -> dict:
    env = os.environ
    values = {}
    if "LOG_BASE_PATH" in env:
        values["base_path"] = env["LOG_BASE_PATH"]
    # MAX_SIZE_BYTES takes precedence over MAX_SIZE_MB
    if "MAX_SIZE_BYTES" in env:
        values["max_size"] = int(env["MAX_SIZE_BYTES"])
    elif "MAX_SIZE_MB" in env:
        values["max_size"] = int(float(env["MAX_SIZE_MB"]) * 1024 * 1024)
    if "MAX_FILES" in env:
        values["max_files"] = int(env["MAX_FILES"])
    if "MAX_COMPRESSED_FILES" in env:
        values["max_compressed_files"] = int(env["MAX_COMPRESSED_FILES"])
    if "ROTATE_ON_OPEN" in env:
        values["rotate_on_open"] = _parse_bool(env["ROTATE_ON_OPEN"])
    if "THREAD_SAFE" in env:
        values["thread_safe"] = _parse_bool(env["THREAD_SAFE"])
    if "COMPRESSION_LEVEL" in env:
        values["compression_level"] = int(env["COMPRESSION_LEVEL"])
    if "RECORD_FORMAT" in env:
        values["record_format"] = env["RECORD_FORMAT"]
    return values


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compressed rotating log sink")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--base-path", type=str, default=None)
    parser.add_argument("--max-size", type=int, default=None, help="Rotation threshold in bytes")
    parser.add_argument("--max-files", type=int, default=None)
    parser.add_argument("--max-compressed-files", type=int, default=None)
    parser.add_argument("--rotate-on-open", action="store_true", default=None)
    parser.add_argument("--single-threaded", action="store_true", default=False)
    parser.add_argument("--compression-level", type=int, default=None)
    parser.add_argument("--record-format", choices=["text", "json"], default=None)
    return parser


def load_config(argv=None, parser: argparse.ArgumentParser | None = None) -> SinkConfig:
    """Build SinkConfig from YAML file, then env vars, then CLI args."""
    parser = parser or build_arg_parser()
    args = parser.parse_args(argv)

    config_path = args.config or os.environ.get("CONFIG_PATH")
    if config_path:
        config = SinkConfig.from_dict(load_yaml(config_path).get("sink", {}))
    else:
        config = SinkConfig()

    config = replace(config, **_env_overrides())

    cli = {
        "base_path": args.base_path,
        "max_size": args.max_size,
        "max_files": args.max_files,
        "max_compressed_files": args.max_compressed_files,
        "rotate_on_open": args.rotate_on_open,
        "compression_level": args.compression_level,
        "record_format": args.record_format,
    }
    if args.single_threaded:
        cli["thread_safe"] = False
    return replace(config, **{k: v for k, v in cli.items() if v is not None})
