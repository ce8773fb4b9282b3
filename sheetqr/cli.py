"""Typer based command line entry points for SheetQR."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, NoReturn, Optional

import typer
from pydantic import ValidationError

from sheetqr.commands import invoke as invoke_command
from sheetqr.core.errors import SheetQRError
from sheetqr.core.logger import get_logger
from sheetqr.core.settings import ensure_work_dirs, load_settings
from sheetqr.services.cheat_sheet import export_cheat_sheets
from sheetqr_io.errors import SheetIOError
from sheetqr_io.excel_reader import list_sheet_names, read_sheet_json
from sheetqr_io.image_io import SaveImageRequest, save_image
from sheetqr_io.qrcode_io import generate_svg

app = typer.Typer(help="Read workbooks and produce QR code cheat sheets.")


def _handle_error(exc: SheetIOError | SheetQRError) -> NoReturn:
    get_logger().error("command failed: %s", exc.message, exc_info=True)
    typer.secho(f"Error: {exc.message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _emit(text: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    typer.secho(f"Written: {output}", err=True)


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Set logging level (e.g. DEBUG/INFO/WARNING). Defaults to the configured level.",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    try:
        logger = get_logger()
    except SheetQRError as exc:
        _handle_error(exc)

    if log_level is not None:
        level_value = getattr(logging, log_level.upper(), None)
        if not isinstance(level_value, int):
            raise typer.BadParameter(f"Unknown log level: {log_level}")
        logger.setLevel(level_value)


@app.command("sheets")
def cmd_sheets(
    file: Path = typer.Argument(..., help="Workbook path"),
) -> None:
    """List the sheet names of a workbook."""

    try:
        names = list_sheet_names(file)
    except SheetIOError as exc:
        _handle_error(exc)
    for name in names:
        typer.echo(name)


@app.command("extract")
def cmd_extract(
    file: Path = typer.Argument(..., help="Workbook path"),
    sheet: str = typer.Option(..., "--sheet", "-s", help="Sheet name (case-sensitive)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON to this file"),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Row conversion threads"),
) -> None:
    """Print a sheet as a JSON array of header-keyed records."""

    try:
        extract = load_settings().extract
        payload = read_sheet_json(
            file,
            sheet,
            max_workers=workers or extract.max_workers,
            parallel_threshold=extract.parallel_threshold,
        )
    except (SheetIOError, SheetQRError) as exc:
        _handle_error(exc)
    _emit(payload, output)


@app.command("qrcode")
def cmd_qrcode(
    value: str = typer.Argument(..., help="Text to encode"),
    size: Optional[int] = typer.Option(None, "--size", min=1, help="SVG width/height in pixels"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write SVG to this file"),
) -> None:
    """Print the QR code of VALUE as SVG."""

    try:
        cfg = load_settings().qrcode
        svg = generate_svg(
            value, size or cfg.size, border=cfg.border, error_correction=cfg.error_correction
        )
    except (SheetIOError, SheetQRError) as exc:
        _handle_error(exc)
    _emit(svg, output)


@app.command("save-image")
def cmd_save_image(
    data_file: Path = typer.Option(
        ..., "--data-file", exists=True, dir_okay=False, help="File holding base64 or data-URI PNG text"
    ),
    directory: Path = typer.Option(..., "--directory", help="Destination directory"),
    filename: str = typer.Option(..., "--filename", help="Destination file name"),
) -> None:
    """Decode a base64 PNG payload and write it to disk."""

    try:
        request = SaveImageRequest(
            directory=str(directory),
            filename=filename,
            data=data_file.read_text(encoding="utf-8"),
        )
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        raise typer.BadParameter(problems) from exc
    try:
        message = save_image(request)
    except SheetIOError as exc:
        _handle_error(exc)
    typer.echo(message)


@app.command("cheat-sheet")
def cmd_cheat_sheet(
    file: Path = typer.Argument(..., help="Workbook path"),
    sheets: Optional[List[str]] = typer.Option(
        None, "--sheet", "-s", help="Sheet to render; repeat for several. Defaults to all sheets."
    ),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory (default <work_dir>/out)"),
) -> None:
    """Render QR label pages (PNG) for the selected sheets."""

    try:
        settings = load_settings()
        selected = list(sheets) if sheets else list_sheet_names(file)
        out_dir = out or ensure_work_dirs(settings)["out"]
        result = export_cheat_sheets(file, selected, out_dir, settings)
    except (SheetIOError, SheetQRError) as exc:
        _handle_error(exc)
    for sheet in result.sheets:
        typer.echo(f"{sheet.sheet_name}: {len(sheet.pages)} page(s) -> {sheet.directory}")


@app.command("invoke")
def cmd_invoke(
    command: str = typer.Argument(..., help="Command name, e.g. get_sheet_data"),
    args: str = typer.Option("{}", "--args", help="JSON object of keyword arguments"),
) -> None:
    """Run a registered command and print its JSON result envelope."""

    try:
        params: Any = json.loads(args)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"--args is not valid JSON: {exc}") from exc
    if not isinstance(params, dict):
        raise typer.BadParameter("--args must be a JSON object")

    result = invoke_command(command, **params)
    typer.echo(result.model_dump_json())
    if not result.ok:
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
