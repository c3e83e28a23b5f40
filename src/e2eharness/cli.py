from __future__ import annotations

import dataclasses
import os
from importlib import metadata
from pathlib import Path
from typing import Any

import jsonschema
import typer

from e2eharness.core import (
    config as config_core,
    envelope,
    ids,
    keypaths,
    paths,
    process,
    sheets,
)
from e2eharness.core.filtering import DataFilter, FilterError
from e2eharness.core.jsonio import dumps, read_json
from e2eharness.core.logs import configure_logging, get_logger
from e2eharness.core.process import ProcessFailedError, ToolMissingError
from e2eharness.core.schemas import FILTER_CONFIG_SCHEMA

VERSION = "0.1.0"

app = typer.Typer(add_completion=False, help="e2eharness - Playwright + pytest-bdd end-to-end harness")

logger = get_logger(__name__)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr")):
    if not verbose:
        try:
            verbose = config_core.is_verbose()
        except ValueError:
            # A broken config file is reported by the command that reads it.
            verbose = False
    configure_logging(verbose=verbose)


def _emit(out: dict) -> None:
    typer.echo(dumps(out))
    if out.get("ok") is True:
        raise typer.Exit(code=0)
    raise typer.Exit(code=1)


# ---- Sub-apps (public CLI contract) ----
env_app = typer.Typer(add_completion=False)
filter_app = typer.Typer(add_completion=False)
sheet_app = typer.Typer(add_completion=False)
text_app = typer.Typer(add_completion=False)
browsers_app = typer.Typer(add_completion=False)

app.add_typer(env_app, name="env")
app.add_typer(filter_app, name="filter")
app.add_typer(sheet_app, name="sheet")
app.add_typer(text_app, name="text")
app.add_typer(browsers_app, name="browsers")


# ---- Global commands ----
@app.command("version")
def version(json_output: bool = typer.Option(False, "--json", help="Output JSON envelope")):
    if json_output:
        _emit(envelope.ok(command="version", data={"version": VERSION}))
    typer.echo(f"e2eharness {VERSION}")


@app.command("doctor")
def doctor(json_output: bool = typer.Option(True, "--json")):
    checks: list[dict] = []

    cfg_path = config_core.config_path()
    checks.append(
        {
            "name": "config.path",
            "ok": True,
            "details": {
                "path": str(cfg_path),
                "exists": cfg_path.exists(),
                "override": os.environ.get("E2E_CONFIG_PATH"),
            },
        }
    )

    try:
        env = config_core.load_environment()
    except ValueError as exc:
        checks.append({"name": "environment", "ok": False, "details": {"error": str(exc)}})
    else:
        checks.append({"name": "environment", "ok": True, "details": dataclasses.asdict(env)})

    try:
        pw_version = metadata.version("playwright")
    except metadata.PackageNotFoundError as exc:
        checks.append({"name": "tool.playwright", "ok": False, "details": {"error": str(exc)}})
    else:
        checks.append({"name": "tool.playwright", "ok": True, "details": {"version": pw_version}})

    # Starting the driver is the only reliable way to ask where browsers live.
    try:
        from playwright.sync_api import sync_playwright

        with sync_playwright() as pw:
            executable = pw.chromium.executable_path
        installed = Path(executable).exists()
        checks.append({"name": "browser.chromium", "ok": installed, "details": {"path": executable}})
    except Exception as exc:
        checks.append({"name": "browser.chromium", "ok": False, "details": {"error": str(exc)}})

    checks.append({"name": "artifacts.path", "ok": True, "details": {"path": str(paths.artifacts_dir())}})

    out = envelope.ok(command="doctor", data={"checks": checks, "run_id": ids.current_run_id()})
    _emit(out)


# ---------------- env ----------------
@env_app.command("show")
def env_show(
    name: str | None = typer.Option(None, "--name", help="Environment name (default: $E2E, config env, int)"),
    json_output: bool = typer.Option(True, "--json"),
):
    try:
        env = config_core.load_environment(name)
        browser = config_core.load_browser_settings()
        request = config_core.load_request_settings()
        out = envelope.ok(
            command="env.show",
            data={
                "environment": dataclasses.asdict(env),
                "browser": dataclasses.asdict(browser),
                "request": dataclasses.asdict(request),
                "config_path": str(config_core.config_path()),
            },
        )
    except ValueError as exc:
        out = envelope.err(
            command="env.show",
            error_type="CONFIG_INVALID",
            message=str(exc),
            details={"name": name},
        )
    _emit(out)


# -------------- filter --------------
def _records_from(payload: Any, records_key: str | None) -> Any:
    if records_key is None:
        return payload
    records = keypaths.get_path(payload, records_key)
    if records is keypaths.MISSING:
        raise KeyError(f"No records at key path: {records_key}")
    return records


@filter_app.command("run")
def filter_run(
    in_path: str = typer.Option(..., "--in", help="JSON file holding the records"),
    config_path: str = typer.Option(..., "--config", help="JSON filter config (keys_to_return, criteria)"),
    records_key: str | None = typer.Option(None, "--records-key", help="Key path of the record array, e.g. data"),
    json_output: bool = typer.Option(True, "--json"),
):
    details = {"in": in_path, "config": config_path}
    try:
        filter_config = read_json(config_path)
        jsonschema.validate(filter_config, FILTER_CONFIG_SCHEMA)
        records = _records_from(read_json(in_path), records_key)
        data_filter = DataFilter().configure(
            filter_config["keys_to_return"],
            filter_config.get("criteria", []),
            wrapper_key=filter_config.get("wrapper_key"),
        )
        result = data_filter.filter(records)
        out = envelope.ok(
            command="filter.run",
            data={"records": result, "count": len(result)},
            limits={"input_count": len(records)},
        )
    except FileNotFoundError as exc:
        out = envelope.err(command="filter.run", error_type="NOT_FOUND", message=str(exc), details=details)
    except KeyError as exc:
        out = envelope.err(command="filter.run", error_type="NOT_FOUND", message=str(exc.args[0]), details=details)
    except jsonschema.ValidationError as exc:
        out = envelope.err(
            command="filter.run",
            error_type="INVALID_ARGUMENT",
            message=f"Invalid filter config: {exc.message}",
            details=details,
        )
    except FilterError as exc:
        out = envelope.err(command="filter.run", error_type="FILTER_FAILED", message=str(exc), details=details)
    except ValueError as exc:
        out = envelope.err(command="filter.run", error_type="INVALID_ARGUMENT", message=str(exc), details=details)
    _emit(out)


# -------------- sheet --------------
def _sheet_ref(sheet: str) -> str | int:
    return int(sheet) if sheet.isdigit() else sheet


@sheet_app.command("read")
def sheet_read(
    path: str = typer.Option(..., "--path", help=".xlsx or .csv file"),
    sheet: str = typer.Option("1", "--sheet", help="Worksheet name or 1-based index (xlsx only)"),
    first_row: int = typer.Option(1, "--first-row", min=1),
    last_row: int | None = typer.Option(None, "--last-row", min=1),
    json_output: bool = typer.Option(True, "--json"),
):
    details = {"path": path, "sheet": sheet}
    try:
        file_path = Path(path).expanduser()
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        if file_path.suffix.lower() == ".csv":
            records = sheets.transform_csv_table(file_path, first_row, last_row)
        elif first_row == 1 and last_row is None:
            records = sheets.read_excel(file_path, _sheet_ref(sheet))
        else:
            records = sheets.transform_excel_table(file_path, _sheet_ref(sheet), first_row, last_row)
        out = envelope.ok(command="sheet.read", data={"records": records, "count": len(records)})
    except (FileNotFoundError, sheets.WorksheetNotFoundError) as exc:
        out = envelope.err(command="sheet.read", error_type="NOT_FOUND", message=str(exc), details=details)
    except ValueError as exc:
        out = envelope.err(command="sheet.read", error_type="INVALID_ARGUMENT", message=str(exc), details=details)
    _emit(out)


# -------------- text --------------
@text_app.command("flatten")
def text_flatten(
    in_path: str = typer.Option(..., "--in", help="JSON file to flatten"),
    json_output: bool = typer.Option(True, "--json"),
):
    try:
        payload = read_json(in_path)
        out = envelope.ok(
            command="text.flatten",
            data={"flat": keypaths.flatten(payload), "texts": keypaths.leaf_texts(payload)},
        )
    except FileNotFoundError as exc:
        out = envelope.err(command="text.flatten", error_type="NOT_FOUND", message=str(exc), details={"in": in_path})
    except ValueError as exc:
        out = envelope.err(
            command="text.flatten", error_type="INVALID_ARGUMENT", message=str(exc), details={"in": in_path}
        )
    _emit(out)


# -------------- browsers --------------
@browsers_app.command("install")
def browsers_install(
    browser: str = typer.Option("chromium", "--browser", help="chromium|firefox|webkit|chrome|msedge"),
    with_deps: bool = typer.Option(False, "--with-deps", help="Also install system dependencies"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the install command without running it"),
    json_output: bool = typer.Option(True, "--json"),
):
    details = {"browser": browser}
    try:
        cmd = process.build_install_command(browser, with_deps=with_deps)
        if dry_run:
            out = envelope.ok(command="browsers.install", data={"browser": browser, "cmd": cmd, "dry_run": True})
        else:
            process.ensure_module("playwright")
            result = process.run_checked(cmd)
            logger.info("browsers.installed", browser=browser)
            out = envelope.ok(
                command="browsers.install",
                data={"browser": browser, "cmd": cmd, "dry_run": False, "stdout": result.stdout[-2000:]},
            )
    except ToolMissingError as exc:
        out = envelope.err(
            command="browsers.install",
            error_type="TOOL_MISSING",
            message=str(exc),
            details={**details, "tool": exc.tool},
        )
    except ProcessFailedError as exc:
        out = envelope.err(
            command="browsers.install",
            error_type="BACKEND_FAILED",
            message=str(exc),
            details={**details, "returncode": exc.returncode, "stderr": exc.stderr[-2000:]},
        )
    except ValueError as exc:
        out = envelope.err(command="browsers.install", error_type="INVALID_ARGUMENT", message=str(exc), details=details)
    _emit(out)


if __name__ == "__main__":
    app()
