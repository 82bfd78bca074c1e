"""Session naming and the sinks that carry text into Julia sessions."""

from __future__ import annotations

import contextlib
import shutil
import subprocess
import threading
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from loguru import logger

from babel_julia.config import DEFAULT_SESSION, EPHEMERAL_SESSION
from babel_julia.errors import SessionError


@dataclass(frozen=True)
class SessionRef:
    """Resolved session key.

    ``key`` is what the block asked for, ``name`` the interpreter instance the
    text is routed to. Ephemeral evaluations run in the default instance but
    inside a ``let`` block, so nothing they bind survives.
    """

    key: str
    name: str
    persistent: bool


def resolve_session(key: str | None, default: str = DEFAULT_SESSION) -> SessionRef:
    if key is None or not key.strip():
        return SessionRef(key=default, name=default, persistent=True)
    key = key.strip()
    if key == EPHEMERAL_SESSION:
        return SessionRef(key=key, name=default, persistent=False)
    return SessionRef(key=key, name=key, persistent=True)


@runtime_checkable
class SessionSink(Protocol):
    """Write-only channel into named Julia sessions."""

    def send(self, session_name: str, text: str) -> None: ...


@dataclass
class RecordingSink:
    """Sink that only records what would have been sent."""

    sent: list[tuple[str, str]] = field(default_factory=list)

    def send(self, session_name: str, text: str) -> None:
        self.sent.append((session_name, text))

    def texts(self, session_name: str) -> list[str]:
        return [text for name, text in self.sent if name == session_name]


class JuliaProcessPool:
    """One ``julia`` process per session name, fed through stdin.

    Processes start on first use and are only stopped by :meth:`close`;
    a process that has exited is reported, not restarted.
    """

    def __init__(self, command: str = "julia", args: list[str] | None = None) -> None:
        self._command = command
        self._args = list(args or [])
        self._processes: dict[str, subprocess.Popen[str]] = {}
        self._lock = threading.Lock()

    @property
    def session_names(self) -> list[str]:
        with self._lock:
            return sorted(self._processes)

    def send(self, session_name: str, text: str) -> None:
        process = self._process(session_name)
        if process.poll() is not None:
            raise SessionError(f"julia session {session_name!r} exited with code {process.returncode}")
        if process.stdin is None:
            raise SessionError(f"julia session {session_name!r} has no input channel")
        try:
            process.stdin.write(text if text.endswith("\n") else text + "\n")
            process.stdin.flush()
        except OSError as exc:
            raise SessionError(f"cannot write to julia session {session_name!r}: {exc}") from exc

    def close(self) -> None:
        with self._lock:
            processes, self._processes = self._processes, {}
        for name, process in processes.items():
            if process.stdin is not None and not process.stdin.closed:
                with contextlib.suppress(OSError):
                    process.stdin.close()
            try:
                process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                logger.warning("session.kill name={}", name)
                process.kill()

    def _process(self, session_name: str) -> subprocess.Popen[str]:
        with self._lock:
            process = self._processes.get(session_name)
            if process is None:
                process = self._spawn(session_name)
                self._processes[session_name] = process
            return process

    def _spawn(self, session_name: str) -> subprocess.Popen[str]:
        executable = shutil.which(self._command)
        if executable is None:
            raise SessionError(f"julia executable not found: {self._command!r}")
        logger.info("session.start name={} command={}", session_name, executable)
        try:
            # Session code is the user's own document content.
            process = subprocess.Popen(  # noqa: S603
                [executable, *self._args],
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            raise SessionError(f"cannot start julia session {session_name!r}: {exc}") from exc
        threading.Thread(
            target=_drain_output,
            args=(session_name, process),
            name=f"babel-julia-{session_name}",
            daemon=True,
        ).start()
        return process


def _drain_output(session_name: str, process: subprocess.Popen[str]) -> None:
    # Prompts and echoes from the session belong in the log, not on our stdout.
    if process.stdout is None:
        return
    for line in process.stdout:
        logger.debug("session.output name={} line={}", session_name, line.rstrip("\n"))
