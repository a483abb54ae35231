from enum import Enum


class BumpError(Exception):
    """Base class for every error that aborts a git-bump invocation."""


class NotARepositoryError(BumpError):
    def __init__(self):
        super().__init__("Not a Git repository")


class BareRepositoryError(BumpError):
    def __init__(self):
        super().__init__("Not supported on bare repositories")


class NoConfigFoundError(BumpError):
    def __init__(self):
        super().__init__("No valid config files found")


class NoVersionGivenError(BumpError):
    def __init__(self):
        super().__init__("No version given")


class ScriptErrorKind(Enum):
    MALFORMED_RESULT = "malformed config result"
    EVALUATION_FAILED = "failed to load Lua code"
    MALFORMED_HOOK_RESULT = "malformed hook table"
    TRANSFORM_FAILED = "failed to execute Lua code"
    HOOK_FAILED = "hook failed"


class ScriptError(BumpError):
    def __init__(self, kind: ScriptErrorKind, origin: str, detail: str = "", target=None):
        self.kind = kind
        self.origin = origin
        self.detail = detail
        self.target = target
        super().__init__(self._format())

    def _format(self):
        msg = f"{self.kind.value.capitalize()} ({self.origin}"
        if self.target is not None:
            msg += f", file {self.target}"
        msg += ")"
        if self.detail:
            msg += f": {self.detail}"
        return msg


class FileIOErrorKind(Enum):
    READ_ERROR = "Failed to read from file"
    WRITE_ERROR = "Failed to write to file"


class FileIOError(BumpError):
    def __init__(self, kind: FileIOErrorKind, path, cause: Exception):
        self.kind = kind
        self.path = path
        super().__init__(f"{kind.value} {path}: {cause}")
