"""Send wrapped snippets to a Julia session and collect their results."""

from __future__ import annotations

import os
import tempfile
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from loguru import logger

from babel_julia.config import Settings
from babel_julia.errors import SessionError
from babel_julia.expand import expand_body, variable_assignments
from babel_julia.logging_utils import bind_session, unbind_session
from babel_julia.request import EvaluationRequest
from babel_julia.session import SessionRef, SessionSink, resolve_session
from babel_julia.wrap import build_trampoline, debug_trace, wrap_body

SUPPRESSED_OUTPUT = "Output suppressed (line too long)"

ResultObserver: TypeAlias = Callable[[EvaluationRequest, str], None]


@dataclass(frozen=True)
class SideFiles:
    """Source and output files of one evaluation."""

    source: Path
    output: Path

    @classmethod
    def create(cls, directory: Path | None = None) -> SideFiles:
        return cls(
            source=_temp_file("babel-julia-src-", ".jl", directory),
            output=_temp_file("babel-julia-out-", "", directory),
        )


def _temp_file(prefix: str, suffix: str, directory: Path | None) -> Path:
    fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=directory)
    os.close(fd)
    return Path(name)


def await_output(
    path: Path,
    *,
    interval: float,
    attempts: int,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Poll until ``path`` is non-empty or the attempt budget runs out.

    Returns whether content appeared. Running out is not an error: an
    evaluation whose result is empty looks exactly like one still running.
    """

    for _ in range(attempts):
        if path.exists() and path.stat().st_size > 0:
            return True
        sleep(interval)
    return path.exists() and path.stat().st_size > 0


def read_output(path: Path, max_line_length: int) -> str:
    """Read the whole output file, or the suppression sentinel if any line is too long."""

    if not path.exists():
        return ""
    text = path.read_text(encoding="utf-8", errors="replace")
    if any(len(line) > max_line_length for line in text.split("\n")):
        return SUPPRESSED_OUTPUT
    return text


class Transport:
    """Evaluate requests against named sessions."""

    def __init__(
        self,
        sink: SessionSink,
        settings: Settings,
        *,
        on_result: ResultObserver | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._sink = sink
        self._settings = settings
        self._on_result = on_result
        self._sleep = sleep
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @property
    def settings(self) -> Settings:
        return self._settings

    def resolve(self, session_key: str | None) -> SessionRef:
        return resolve_session(session_key, self._settings.default_session)

    def evaluate(self, request: EvaluationRequest) -> str:
        session = self.resolve(request.session_key)
        expanded = expand_body(request.body, request)
        wrapped = wrap_body(expanded, request.result_kind, session.persistent)
        files = SideFiles.create(self._settings.temp_dir)
        files.source.write_text(wrapped, encoding="utf-8")
        trampoline = build_trampoline(str(files.source), str(files.output), request.result_kind)

        token = bind_session(session.name)
        try:
            with self._session_lock(session.name):
                if self._settings.debug:
                    self._sink.send(session.name, debug_trace(request.params, wrapped))
                self._sink.send(session.name, trampoline)
                logger.debug(
                    "transport.sent session={} kind={} persistent={} source={}",
                    session.name,
                    request.result_kind,
                    session.persistent,
                    files.source,
                )
                arrived = await_output(
                    files.output,
                    interval=self._settings.poll_interval,
                    attempts=self._settings.poll_attempts,
                    sleep=self._sleep,
                )
                result = read_output(files.output, self._settings.max_line_length)
            if not arrived:
                logger.warning("transport.timeout session={} output={}", session.name, files.output)
            elif result == SUPPRESSED_OUTPUT:
                logger.info("transport.suppressed session={} limit={}", session.name, self._settings.max_line_length)
        finally:
            unbind_session(token)

        if self._on_result is not None:
            self._on_result(request, result)
        return result

    def prep_session(self, session_key: str | None, variables: list[tuple[str, object]]) -> SessionRef:
        """Bind variables in a persistent session without capturing a result."""

        session = self._persistent(session_key)
        lines = variable_assignments(variables)
        if lines:
            with self._session_lock(session.name):
                self._sink.send(session.name, "\n".join(lines))
        return session

    def load_session(self, request: EvaluationRequest) -> SessionRef:
        """Send the expanded body to a persistent session and return immediately."""

        session = self._persistent(request.session_key)
        with self._session_lock(session.name):
            self._sink.send(session.name, expand_body(request.body, request))
        return session

    def _persistent(self, session_key: str | None) -> SessionRef:
        session = self.resolve(session_key)
        if not session.persistent:
            raise SessionError(f"session {session.key!r} keeps no state to prepare")
        return session

    def _session_lock(self, name: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = threading.Lock()
            return lock
