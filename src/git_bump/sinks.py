from __future__ import annotations

from typing import Callable

from . import events
from .util import log


Disconnect = Callable[[], None]


class BaseSink:
    def __init__(self):
        self._disconnects: list[Disconnect] = []

    def _connect(self, signal_name: str, receiver):
        sig = events.signal(signal_name)
        sig.connect(receiver)
        self._disconnects.append(lambda: sig.disconnect(receiver))

    def close(self):
        for disconnect in reversed(self._disconnects):
            disconnect()
        self._disconnects.clear()


class ProgressSink(BaseSink):
    """Prints one status line per configured file."""

    def __init__(self, renderer: str = "rich"):
        super().__init__()
        self.renderer = renderer

    def install(self):
        self._connect(events.BUMP_STARTED, self._on_bump_started)
        self._connect(events.FILE_SKIPPED, self._on_file_skipped)
        self._connect(events.FILE_UPDATED, self._on_file_updated)
        self._connect(events.FILE_FAILED, self._on_file_failed)
        self._connect(events.HOOK_STARTED, self._on_hook_started)
        self._connect(events.BUMP_FINISHED, self._on_bump_finished)
        return self

    def _style(self, text: str, style: str) -> str:
        return f"[{style}]{text}[/{style}]" if self.renderer == "rich" else text

    def _on_bump_started(self, _sender, **kw):
        log.adjust_col_width(kw.get("files", []))
        log.debug(f"bumping {len(kw.get('files', []))} file(s) to {kw.get('version')}")

    def _on_file_skipped(self, _sender, **kw):
        log.debug(f"{log.escape(log.format_prefix(kw.get('path')))} {self._style('skipped (missing)', 'dim')}")

    def _on_file_updated(self, _sender, **kw):
        log.info(f"{log.escape(log.format_prefix(kw.get('path')))} {self._style('updated', 'green')}")

    def _on_file_failed(self, _sender, **kw):
        log.info(f"{log.escape(log.format_prefix(kw.get('path')))} {self._style('FAILED', 'red')} ({kw.get('reason')})")

    def _on_hook_started(self, _sender, **kw):
        log.debug(f"running {kw.get('hook')} for {log.escape(kw.get('path'))}")

    def _on_bump_finished(self, _sender, **kw):
        log.debug(f"{kw.get('updated')} updated, {kw.get('skipped')} skipped, {kw.get('failed')} failed")
