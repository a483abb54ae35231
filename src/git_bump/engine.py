from enum import Enum
from pathlib import Path
from typing import NamedTuple, Optional

from . import events
from .config import Transform
from .errors import BumpError, NoVersionGivenError
from .lua_runtime import ScriptRuntime
from .util import file_util


class BumpStatus(Enum):
    UPDATED = "updated"
    SKIPPED_MISSING = "skipped (missing)"
    FAILED = "failed"


class FailureReason(Enum):
    READ_ERROR = "read error"
    TRANSFORM_FAILED = "transform failed"
    PRE_HOOK_FAILED = "pre_func failed"
    WRITE_ERROR = "write error"
    POST_HOOK_FAILED = "post_func failed"


class BumpReport(NamedTuple):
    path: str
    status: BumpStatus
    reason: Optional[FailureReason] = None
    error: Optional[BumpError] = None


class _StepFailed(Exception):
    def __init__(self, reason: FailureReason, error: BumpError):
        super().__init__(str(error))
        self.reason = reason
        self.error = error


class BumpEngine:
    """Runs every transform of an effective mapping against its target file.

    Files are processed one at a time in mapping order. Each file goes through
    read, transform, pre_func, write, post_func. The first failure stops the
    whole run; files written before it stay written.
    """

    def __init__(self, runtime: ScriptRuntime, repo_root, trailing_newline: bool = False):
        self.runtime = runtime
        self.repo_root = Path(repo_root)
        self.trailing_newline = trailing_newline

    def run(self, effective: dict[str, Transform], version: str) -> list[BumpReport]:
        if not version:
            raise NoVersionGivenError()

        reports = []
        with events.with_context(run_id=events.new_run_id(), version=version):
            events.emit(events.BUMP_STARTED, files=list(effective))
            for path, transform in effective.items():
                report = self._bump_file(path, transform, version)
                reports.append(report)
                if report.status is BumpStatus.FAILED:
                    break
            events.emit(
                events.BUMP_FINISHED,
                updated=self._count(reports, BumpStatus.UPDATED),
                skipped=self._count(reports, BumpStatus.SKIPPED_MISSING),
                failed=self._count(reports, BumpStatus.FAILED),
            )
        return reports

    @staticmethod
    def _count(reports, status):
        return sum(1 for report in reports if report.status is status)

    @staticmethod
    def succeeded(reports: list[BumpReport]) -> bool:
        return all(report.status is not BumpStatus.FAILED for report in reports)

    def _bump_file(self, path: str, transform: Transform, version: str) -> BumpReport:
        target = self.repo_root / path
        if not target.exists():
            events.emit(events.FILE_SKIPPED, path=path, origin=transform.origin)
            return BumpReport(path, BumpStatus.SKIPPED_MISSING)

        try:
            self._apply(path, target, transform, version)
        except _StepFailed as e:
            events.emit(events.FILE_FAILED, path=path, origin=transform.origin,
                        reason=e.reason.value, error=str(e.error))
            return BumpReport(path, BumpStatus.FAILED, e.reason, e.error)

        events.emit(events.FILE_UPDATED, path=path, origin=transform.origin)
        return BumpReport(path, BumpStatus.UPDATED)

    def _apply(self, path, target, transform, version):
        content = self._step(FailureReason.READ_ERROR, file_util.read_file_contents, target)
        outcome = self._step(
            FailureReason.TRANSFORM_FAILED,
            self.runtime.invoke, transform.func, version, content, transform.origin, path,
        )
        hooks = outcome.hooks

        new_content = outcome.new_content
        if self.trailing_newline and not new_content.endswith("\n"):
            new_content += "\n"

        if hooks is not None and hooks.pre_func is not None:
            self._run_hook("pre_func", FailureReason.PRE_HOOK_FAILED, hooks.pre_func, path, transform)

        self._step(FailureReason.WRITE_ERROR, file_util.write_file_contents, target, new_content)

        if hooks is not None and hooks.post_func is not None:
            self._run_hook("post_func", FailureReason.POST_HOOK_FAILED, hooks.post_func, path, transform)

    def _run_hook(self, name, reason, func, path, transform):
        events.emit(events.HOOK_STARTED, path=path, hook=name)
        self._step(reason, self.runtime.invoke_hook, func, transform.origin, path)

    @staticmethod
    def _step(reason: FailureReason, func, *args):
        try:
            return func(*args)
        except BumpError as e:
            raise _StepFailed(reason, e) from e
