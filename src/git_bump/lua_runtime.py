from typing import Any, NamedTuple, Optional

from lupa import LuaError, LuaRuntime, lua_type

from .errors import ScriptError, ScriptErrorKind
from .util import log

PRE_FUNC = "pre_func"
POST_FUNC = "post_func"


class HookSet(NamedTuple):
    pre_func: Optional[Any] = None
    post_func: Optional[Any] = None


class TransformOutcome(NamedTuple):
    new_content: str
    hooks: Optional[HookSet] = None


def _is_function(value) -> bool:
    return lua_type(value) == "function"


class ScriptRuntime:
    """One Lua state shared by every script and callable of a run.

    Config scripts are evaluated into the same global environment, so a helper
    defined (or a module required) by an earlier script stays reachable from
    later scripts and from the transform functions themselves. The runtime must
    therefore outlive every callable it hands out.

    The contract with config scripts is:
    * a script returns a table mapping file names to functions
    * a function is called as f(version, content) and returns the new content
    * it MAY return a second value, a table with optional members pre_func and
      post_func, both functions taking no arguments
    """

    def __init__(self):
        self._lua = LuaRuntime(register_eval=False, register_builtins=False)
        # kept aside so scripts redefining the global "load" cannot break us
        self._load = self._lua.eval("load")

    @property
    def lua(self):
        return self._lua

    def load(self, source: str, origin: str) -> dict[str, Any]:
        """Evaluates a config script and returns its file -> function mapping."""
        chunk = self._compile(source, origin)
        try:
            result = chunk()
        except LuaError as e:
            raise ScriptError(ScriptErrorKind.EVALUATION_FAILED, origin, str(e)) from e
        except UnicodeDecodeError as e:
            raise ScriptError(ScriptErrorKind.MALFORMED_RESULT, origin, str(e)) from e

        if isinstance(result, tuple):
            result = result[0] if result else None
        if lua_type(result) != "table":
            raise ScriptError(
                ScriptErrorKind.MALFORMED_RESULT, origin,
                f"expected a table to be returned, got {lua_type(result) or type(result).__name__}")

        # items() honours __pairs and decodes keys, both of which can fail
        try:
            items = list(result.items())
        except (LuaError, UnicodeDecodeError) as e:
            raise ScriptError(ScriptErrorKind.MALFORMED_RESULT, origin, str(e)) from e

        mapping = {}
        for key, value in items:
            if not isinstance(key, str):
                raise ScriptError(ScriptErrorKind.MALFORMED_RESULT, origin, f"key {key!r} is not a file name")
            if not _is_function(value):
                raise ScriptError(ScriptErrorKind.MALFORMED_RESULT, origin, f"value for {key!r} is not a function")
            mapping[key] = value
        log.debug(log.escape(f"{origin}: {len(mapping)} mapping(s)"))
        # Lua tables have no defined traversal order
        return {key: mapping[key] for key in sorted(mapping)}

    def _compile(self, source: str, origin: str):
        try:
            compiled = self._load(source, "@" + origin, "t")
        except LuaError as e:
            raise ScriptError(ScriptErrorKind.EVALUATION_FAILED, origin, str(e)) from e
        # load() reports syntax errors as (nil, message) rather than raising
        if isinstance(compiled, tuple):
            message = compiled[1] if len(compiled) > 1 else "unknown error"
            raise ScriptError(ScriptErrorKind.EVALUATION_FAILED, origin, str(message))
        if compiled is None:
            raise ScriptError(ScriptErrorKind.EVALUATION_FAILED, origin, "unknown error")
        return compiled

    def invoke(self, func, version: str, content: str, origin: str = "<lua>", target=None) -> TransformOutcome:
        try:
            result = func(version, content)
        except (LuaError, UnicodeDecodeError) as e:
            raise ScriptError(ScriptErrorKind.TRANSFORM_FAILED, origin, str(e), target) from e

        values = result if isinstance(result, tuple) else (result,)
        new_content = self._decode_content(values[0] if values else None, origin, target)
        hooks = self._decode_hooks(values[1] if len(values) > 1 else None, origin, target)
        return TransformOutcome(new_content, hooks)

    @staticmethod
    def _decode_content(value, origin, target) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        raise ScriptError(
            ScriptErrorKind.TRANSFORM_FAILED, origin,
            f"expected the new content as a string, got {lua_type(value) or type(value).__name__}", target)

    @staticmethod
    def _decode_hooks(value, origin, target) -> Optional[HookSet]:
        if value is None:
            return None
        if lua_type(value) != "table":
            raise ScriptError(
                ScriptErrorKind.MALFORMED_HOOK_RESULT, origin,
                f"expected a table of hooks, got {lua_type(value) or type(value).__name__}", target)
        hooks = {}
        for name in (PRE_FUNC, POST_FUNC):
            try:
                hook = value[name]
            except (LuaError, UnicodeDecodeError) as e:
                raise ScriptError(ScriptErrorKind.MALFORMED_HOOK_RESULT, origin, str(e), target) from e
            if hook is not None and not _is_function(hook):
                raise ScriptError(ScriptErrorKind.MALFORMED_HOOK_RESULT, origin, f"{name} is not a function", target)
            hooks[name] = hook
        return HookSet(**hooks)

    def invoke_hook(self, func, origin: str = "<lua>", target=None):
        try:
            func()
        except (LuaError, UnicodeDecodeError) as e:
            raise ScriptError(ScriptErrorKind.HOOK_FAILED, origin, str(e), target) from e
