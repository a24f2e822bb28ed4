"""
Main entry point for the MPS7 ledger report.

Decodes one MPS7 data file and prints the aggregate report,
or a diagnostic and a non-zero exit code on any fatal error.
"""
import json
import sys
from pathlib import Path
from typing import Optional

# Add project root to Python path for module imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

import typer
from dotenv import load_dotenv

# Load environment variables from .env file before module loggers are created
_env_file = PROJECT_ROOT / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

from mps7.config import get_settings
from mps7.exceptions import (
    ConfigurationError,
    FormatError,
    InputError,
    MPS7Error,
    ValidationError,
)
from mps7.logger import set_log_level, setup_logger
from mps7.report import format_report, record_count_warning
from services.ledger_service import LedgerService

logger = setup_logger(__name__)

SUCCESS_EXIT_CODE = 0
INPUT_ERROR_EXIT_CODE = 3
FORMAT_ERROR_EXIT_CODE = 4
VALIDATION_ERROR_EXIT_CODE = 5
CONFIGURATION_ERROR_EXIT_CODE = 6

EXIT_CODES = {
    InputError: INPUT_ERROR_EXIT_CODE,
    FormatError: FORMAT_ERROR_EXIT_CODE,
    ValidationError: VALIDATION_ERROR_EXIT_CODE,
    ConfigurationError: CONFIGURATION_ERROR_EXIT_CODE,
}

app = typer.Typer(
    add_completion=False,
    help="Decode an MPS7 transaction log and report aggregate totals.",
)


def _emit_error(exc: MPS7Error, as_json: bool) -> None:
    """Render a fatal error to stderr."""
    if as_json:
        typer.echo(json.dumps({"error": exc.message}), err=True)
        return
    typer.echo(f"error: {exc.message}", err=True)


def _exit_code_for(exc: MPS7Error) -> int:
    for error_type, code in EXIT_CODES.items():
        if isinstance(exc, error_type):
            return code
    return 1


@app.command()
def report(
    data_file: Path = typer.Argument(..., help="MPS7 data file to decode."),
    as_json: bool = typer.Option(False, "--json", help="Emit the summary as JSON."),
    tracked_user: Optional[int] = typer.Option(
        None, "--tracked-user", help="User id whose balance is reported."
    ),
) -> None:
    """Decode DATA_FILE and print the ledger report."""
    try:
        settings = get_settings()
        set_log_level(settings.log_level)
        service = LedgerService(tracked_user_id=tracked_user)
        summary = service.process_file(data_file)
    except MPS7Error as e:
        code = _exit_code_for(e)
        logger.debug(f"{type(e).__name__} while reporting on {data_file}, exit code {code}")
        _emit_error(e, as_json)
        raise typer.Exit(code=code)

    warning = record_count_warning(summary)
    if warning:
        typer.echo(warning, err=True)

    if as_json:
        typer.echo(json.dumps(summary.model_dump(mode="json"), sort_keys=True))
    else:
        typer.echo(format_report(summary, settings.currency_symbol))
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


def main():
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
