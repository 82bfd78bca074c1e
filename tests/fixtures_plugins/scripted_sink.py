from __future__ import annotations

import re
from pathlib import Path

from babel_julia.hookspecs import hookimpl

_OUTPUT_PATH = re.compile(r'open\("([^"]+)", "w"\) do io')
_SOURCE_PATH = re.compile(r'include\("([^"]+)"\)')


class ScriptedSink:
    """Stands in for a Julia session: answers each trampoline with the next reply."""

    def __init__(self, replies: list[str] | None = None) -> None:
        self.sent: list[tuple[str, str]] = []
        self.sources: list[str] = []
        self._replies = list(replies or [])

    def send(self, session_name: str, text: str) -> None:
        self.sent.append((session_name, text))
        source = _SOURCE_PATH.search(text)
        if source is not None:
            self.sources.append(Path(source.group(1)).read_text(encoding="utf-8"))
        output = _OUTPUT_PATH.search(text)
        if output is not None and self._replies:
            Path(output.group(1)).write_text(self._replies.pop(0), encoding="utf-8")


class ScriptedSinkPlugin:
    def __init__(self, sink: ScriptedSink) -> None:
        self.sink = sink
        self.results: list[str] = []

    @hookimpl
    def provide_session_sink(self, settings: object) -> ScriptedSink:
        _ = settings
        return self.sink

    @hookimpl
    def on_result(self, request: object, result: str) -> None:
        _ = request
        self.results.append(result)
