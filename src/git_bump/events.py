from __future__ import annotations

import contextvars
import time
import uuid
from contextlib import contextmanager
from typing import Any

from blinker import Namespace

BUMP_STARTED = "bump.started"
BUMP_FINISHED = "bump.finished"
FILE_SKIPPED = "file.skipped"
FILE_UPDATED = "file.updated"
FILE_FAILED = "file.failed"
HOOK_STARTED = "hook.started"

_ns = Namespace()
_event_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "git_bump_event_context", default={}
)


def now_ms() -> int:
    return int(time.time() * 1000)


def new_run_id() -> str:
    return uuid.uuid4().hex


def signal(name: str):
    return _ns.signal(name)


def current_context() -> dict[str, Any]:
    return dict(_event_context.get())


@contextmanager
def with_context(**kwargs):
    merged = current_context()
    merged.update({k: v for k, v in kwargs.items() if v is not None})
    token = _event_context.set(merged)
    try:
        yield merged
    finally:
        _event_context.reset(token)


def emit(name: str, **payload):
    msg = current_context()
    msg.update(payload)
    msg.setdefault("ts", now_ms())
    return signal(name).send(None, event=name, **msg)
