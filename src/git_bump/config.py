from pathlib import Path
from typing import Any, Iterable, NamedTuple

from .lua_runtime import ScriptRuntime
from .util import file_util, log


class Transform(NamedTuple):
    path: str
    func: Any
    origin: str


def load_mapping(runtime: ScriptRuntime, config_file) -> dict[str, Transform]:
    origin = str(config_file)
    log.debug(f"loading config {log.escape(origin)}")
    source = file_util.read_file_contents(config_file)
    return {
        path: Transform(path, func, origin)
        for path, func in runtime.load(source, origin).items()
    }


def aggregate(mappings: Iterable[dict[str, Transform]]) -> dict[str, Transform]:
    """Folds mappings from lowest to highest priority.

    A key defined again later is replaced outright, the earlier function is
    dropped and never called. Replaced keys keep their first position.
    """
    effective = {}
    for mapping in mappings:
        for path, transform in mapping.items():
            if path in effective:
                log.debug(log.escape(f"{path}: {transform.origin} overrides {effective[path].origin}"))
            effective[path] = transform
    return effective


def load_effective_mapping(runtime: ScriptRuntime, config_files: Iterable[Path]) -> dict[str, Transform]:
    return aggregate(load_mapping(runtime, config_file) for config_file in config_files)
