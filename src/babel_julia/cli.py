"""Command line interface for babel-julia."""

from __future__ import annotations

import sys
from typing import Any

import typer

from babel_julia.config import get_settings
from babel_julia.errors import BabelJuliaError
from babel_julia.expand import expand_body
from babel_julia.framework import BabelFramework
from babel_julia.logging_utils import configure_logging
from babel_julia.request import EvaluationRequest, build_request
from babel_julia.session import resolve_session
from babel_julia.wrap import wrap_body

app = typer.Typer(
    name="babel-julia",
    help="Evaluate literate-document source blocks in long-lived Julia sessions.",
    add_completion=False,
)

_VAR_HELP = "Variable assignment NAME=VALUE (repeatable)"


def _read_body(body: str) -> str:
    return sys.stdin.read() if body == "-" else body


def _request(
    body: str,
    *,
    result_type: str = "value",
    session: str | None = None,
    variables: list[str] | None = None,
    prologue: str | None = None,
    epilogue: str | None = None,
    results: list[str] | None = None,
    graphics_file: str | None = None,
    width: int | None = None,
    height: int | None = None,
) -> EvaluationRequest:
    params: dict[str, Any] = {"result-type": result_type}
    optional = {
        "session": session,
        "var": variables or None,
        "prologue": prologue,
        "epilogue": epilogue,
        "result-params": results or None,
        "file": graphics_file,
        "width": width,
        "height": height,
    }
    params.update({key: value for key, value in optional.items() if value is not None})
    return build_request(_read_body(body), params)


def _fail(exc: BabelJuliaError) -> typer.Exit:
    typer.secho(f"error: {exc}", fg=typer.colors.RED, err=True)
    return typer.Exit(1)


@app.command("expand")
def expand(
    body: str = typer.Argument(..., help="Block body, or - to read stdin"),
    var: list[str] | None = typer.Option(None, "--var", "-v", help=_VAR_HELP),  # noqa: B008
    prologue: str | None = typer.Option(None, "--prologue"),
    epilogue: str | None = typer.Option(None, "--epilogue"),
    results: list[str] | None = typer.Option(None, "--results", "-r", help="Result parameters, e.g. graphics"),  # noqa: B008
    graphics_file: str | None = typer.Option(None, "--file", help="Graphics target file"),
    width: int | None = typer.Option(None, "--width"),
    height: int | None = typer.Option(None, "--height"),
) -> None:
    """Print the snippet a block expands to."""

    try:
        request = _request(
            body,
            variables=var,
            prologue=prologue,
            epilogue=epilogue,
            results=results,
            graphics_file=graphics_file,
            width=width,
            height=height,
        )
        typer.echo(expand_body(request.body, request))
    except BabelJuliaError as exc:
        raise _fail(exc) from exc


@app.command("wrap")
def wrap(
    body: str = typer.Argument(..., help="Block body, or - to read stdin"),
    result_type: str = typer.Option("value", "--result-type", "-t", help="value or output"),
    session: str | None = typer.Option(None, "--session", "-s", help="Session name, or none"),
    var: list[str] | None = typer.Option(None, "--var", "-v", help=_VAR_HELP),  # noqa: B008
) -> None:
    """Print the wrapped source that would be included by the session."""

    try:
        request = _request(body, result_type=result_type, session=session, variables=var)
        settings = get_settings()
        ref = resolve_session(request.session_key, settings.default_session)
        typer.echo(wrap_body(expand_body(request.body, request), request.result_kind, ref.persistent))
    except BabelJuliaError as exc:
        raise _fail(exc) from exc


@app.command("eval")
def evaluate(
    body: str = typer.Argument(..., help="Block body, or - to read stdin"),
    result_type: str = typer.Option("value", "--result-type", "-t", help="value or output"),
    session: str | None = typer.Option(None, "--session", "-s", help="Session name, or none"),
    var: list[str] | None = typer.Option(None, "--var", "-v", help=_VAR_HELP),  # noqa: B008
    prologue: str | None = typer.Option(None, "--prologue"),
    epilogue: str | None = typer.Option(None, "--epilogue"),
    results: list[str] | None = typer.Option(None, "--results", "-r", help="Result parameters, e.g. graphics"),  # noqa: B008
    graphics_file: str | None = typer.Option(None, "--file", help="Graphics target file"),
    debug: bool = typer.Option(False, "--debug", help="Echo a commented trace into the session"),
) -> None:
    """Evaluate one block and print its result."""

    framework: BabelFramework | None = None
    try:
        settings = get_settings(debug=True) if debug else get_settings()
        configure_logging(profile="cli", level=settings.log_level)
        framework = BabelFramework(settings)
        framework.load_plugins()
        request = _request(
            body,
            result_type=result_type,
            session=session,
            variables=var,
            prologue=prologue,
            epilogue=epilogue,
            results=results,
            graphics_file=graphics_file,
        )
        typer.echo(framework.evaluate(request), nl=False)
    except BabelJuliaError as exc:
        raise _fail(exc) from exc
    finally:
        if framework is not None:
            framework.close()


@app.command("hooks")
def hooks() -> None:
    """Show hook implementation mapping."""

    framework = BabelFramework(get_settings())
    framework.load_plugins()
    report = framework.hook_report()
    if not report:
        typer.echo("(no hook implementations)")
        return
    for hook_name, plugins in report.items():
        typer.echo(f"{hook_name}: {', '.join(plugins)}")
