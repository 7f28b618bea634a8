from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from jsonshape.config import merge_payload, render_defaults, render_options
from jsonshape.decoder import Decoder
from jsonshape.exceptions import SchemaError
from jsonshape.json_types import JSONValue, to_json
from jsonshape.render import RenderOptions, RenderOrder, render_error
from jsonshape.report import DecodeReportDTO, trail_dto
from jsonshape.result import Err, Ok
from jsonshape.schema import compile_schema
from jsonshape.schema_document import load_schema_path

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)

_STDIN_ALIAS = "-"
_FORMATS = ("text", "json")

EXIT_OK = 0
EXIT_DECODE_FAILED = 1
EXIT_USAGE = 2


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
) -> None:
    """Decode JSON documents against declarative schemas."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _fail_usage(message: str) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(code=EXIT_USAGE)


def _load_decoder(schema: Path) -> Decoder:
    try:
        return compile_schema(load_schema_path(schema))
    except OSError as exc:
        raise _fail_usage(f"Cannot read schema {schema}: {exc}") from exc
    except SchemaError as exc:
        raise _fail_usage(f"Invalid schema {schema}: {exc}") from exc


def _read_input(source: str) -> JSONValue:
    try:
        if source == _STDIN_ALIAS:
            text = sys.stdin.read()
        else:
            text = Path(source).read_text(encoding="utf-8")
        return json.loads(text)
    except OSError as exc:
        raise _fail_usage(f"Cannot read input {source}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise _fail_usage(f"Input {source} is not valid JSON: {exc}") from exc


def _resolve_render_options(
    *,
    config: Optional[Path],
    order: Optional[RenderOrder],
    max_value_chars: Optional[int],
) -> RenderOptions:
    defaults = render_defaults(config_path=config)
    merged = merge_payload({"order": order, "max_value_chars": max_value_chars}, defaults)
    return render_options(merged)


@app.command()
def check(
    schema: Path = typer.Argument(..., help="Schema document (JSON)."),
    source: str = typer.Argument(..., metavar="INPUT", help="JSON input file, or - for stdin."),
    output_format: str = typer.Option("text", "--format"),
    config: Optional[Path] = typer.Option(None, "--config"),
    order: Optional[RenderOrder] = typer.Option(None, "--order", case_sensitive=False),
    max_value_chars: Optional[int] = typer.Option(None, "--max-value-chars"),
) -> None:
    """Decode INPUT against SCHEMA and report the result."""
    if output_format not in _FORMATS:
        raise typer.BadParameter(
            f"expected one of {', '.join(_FORMATS)}", param_hint="--format"
        )
    options = _resolve_render_options(
        config=config, order=order, max_value_chars=max_value_chars
    )
    decoder = _load_decoder(schema)
    value = _read_input(source)
    logger.debug("decoding %s with %r", source, decoder)
    match decoder(value):
        case Ok(value=decoded):
            if output_format == "json":
                report = DecodeReportDTO(ok=True, value=to_json(decoded))
                typer.echo(report.model_dump_json(indent=2))
            else:
                typer.echo(json.dumps(to_json(decoded), indent=2, ensure_ascii=False))
        case Err(error=error):
            message = render_error(error, options)
            if output_format == "json":
                report = DecodeReportDTO(ok=False, error=trail_dto(error), message=message)
                typer.echo(report.model_dump_json(indent=2))
            else:
                typer.echo(message)
            raise typer.Exit(code=EXIT_DECODE_FAILED)


@app.command()
def describe(
    schema: Path = typer.Argument(..., help="Schema document (JSON)."),
) -> None:
    """Print the shape a schema document compiles to."""
    typer.echo(_load_decoder(schema).label)
