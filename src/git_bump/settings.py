import os
from typing import NamedTuple, Dict, Any, ChainMap, Mapping

ENV_PREFIX = "GIT_BUMP_"
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


class Option(NamedTuple):
    key: str
    default: Any
    help: str = ""


class Settings:
    LOG_LEVEL = Option("log_level", "INFO", "Logging level")
    COLORIZE = Option("colorize", True, "Enable colored output")
    TRAILING_NEWLINE = Option("trailing_newline", False, "Append a newline to written content if it lacks one")
    REQUIRE_CONFIG = Option("require_config", True, "Fail when no config file is found at all")


def get_all_settings() -> list[Option]:
    return [ option for _name, option in vars(Settings).items() if isinstance(option, Option) ]


def create_settings(*dicts: Dict[str, object]) -> Mapping[str, object]:
    """Creates a dict-like settings view from multiple dictionaries
    Priority order:
    1. command-line arguments
    2. environment variables
    3. default values
    """
    defaults = {option.key: option.default for option in get_all_settings()}
    return ChainMap({}, *dicts, defaults)


def conf_get(d, option: Option):
    return d.get(option.key, option.default)


def _coerce(option: Option, raw: str):
    if isinstance(option.default, bool):
        lowered = raw.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"Invalid boolean for {option.key}: {raw!r}")
    return raw


def parse_env_overrides(env=None) -> Dict[str, object]:
    """Reads GIT_BUMP_<KEY> variables for every known setting, ignoring the rest."""
    env = os.environ if env is None else env
    overrides = {}
    for option in get_all_settings():
        name = ENV_PREFIX + option.key.upper()
        if name in env:
            overrides[option.key] = _coerce(option, env[name])
    return overrides
