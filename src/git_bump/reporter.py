from importlib import resources
from pathlib import Path

from .config import Transform

SAMPLE_CONFIG = "sample_config.lua"


def list_targets(effective: dict[str, Transform], repo_root) -> list[Path]:
    """Absolute paths of every configured file, whether it exists or not."""
    root = Path(repo_root).absolute()
    return [root / path for path in effective]


def sample_config() -> str:
    return resources.files(__package__).joinpath(SAMPLE_CONFIG).read_text(encoding="utf-8")
