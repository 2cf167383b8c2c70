"""Command Line Interface for SharePoint Uploader (spupload)."""

import logging
import sys
import socket
import argparse
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

from spupload import __version__
from spupload.core.config import (
    CHUNK_SIZE,
    CHUNK_SIZE_UNIT,
    ENV_CONFIG_PATH,
    GRAPH_HOST,
    default_config_path,
    load_config,
)
from spupload.core.client import GraphClient
from spupload.core.exceptions import ConfigurationError, SharePointUploadError
from spupload.core.stats import OperationStats
from spupload.services.orchestrator import UploadOrchestrator
from spupload.utils.helpers import format_size, validate_path_exists
from spupload.utils.progress import ConsoleReporter, display_upload_summary

console = Console()

PASS = "✅ [green]PASS[/green]"
FAIL = "❌ [red]FAIL[/red]"
SKIPPED = "➖ [dim]SKIPPED[/dim]"


def configure_logging(verbose=False):
    """Route library logging through rich; DEBUG with --verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # msal and urllib3 are chatty at DEBUG and may log token material
    logging.getLogger("msal").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def display_header():
    """Display the application header."""
    console.print("\n")
    console.print(
        Panel(
            f"[bold blue]SharePoint Uploader (spupload) v{__version__}[/bold blue]\n"
            "[dim]Upload a file to a SharePoint Online document library via app-only authentication[/dim]",
            border_style="blue",
            padding=(1, 2),
        )
    )


def check_network(host=GRAPH_HOST, port=443, timeout=5):
    """Return True when a TCP connection to host:port can be opened."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


def run_preflight_checks(args):
    """Run pre-flight checks and return the loaded config.

    The config file and the local file are checked before anything touches
    the network. Exits with status 1 when a check fails.
    """
    console.print("\n")
    console.print("[bold cyan]🔍 Running Pre-flight Checks...[/bold cyan]")

    checks_table = Table(show_header=False, box=box.SIMPLE)
    checks_table.add_column("Check", style="white", width=40)
    checks_table.add_column("Status", style="white", width=15)

    errors = []

    config = None
    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        errors.append(str(e))
    checks_table.add_row("Configuration File", PASS if config else FAIL)

    file_ok = validate_path_exists(args.file_path) == "file"
    if not file_ok:
        errors.append(f"The file '{args.file_path}' does not exist.")
    checks_table.add_row("Local File", PASS if file_ok else FAIL)

    if errors:
        checks_table.add_row("Network Connectivity", SKIPPED)
    else:
        network_ok = check_network()
        if not network_ok:
            errors.append(f"Cannot connect to {GRAPH_HOST}. Please check your internet connection.")
        checks_table.add_row("Network Connectivity", PASS if network_ok else FAIL)

    console.print(
        Panel(checks_table, title="[bold]🔧 System Checks[/bold]", border_style="cyan")
    )

    if errors:
        for error in errors:
            console.print(f"\n❌ [bold red]ERROR: {escape(error)}")
        sys.exit(1)

    return config


def handle_upload(args, config):
    """Upload the file and return True on success."""
    stats = OperationStats()
    reporter = ConsoleReporter(console=console, show_progress=not args.no_progress)

    client = GraphClient.from_config(config)
    orchestrator = UploadOrchestrator(
        config, client, reporter=reporter, stats=stats, chunk_size=args.chunk_size
    )
    result = orchestrator.upload(args.file_path)

    display_upload_summary(stats, config, result, console=console)
    return result.succeeded


class UploadArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def create_argument_parser():
    """Create and configure the argument parser."""
    parser = UploadArgumentParser(
        prog="spupload",
        description="SharePoint Uploader (spupload) - Upload a file to a SharePoint Online document library using app-only authentication.",
        epilog=f"""
        Connection settings are read from a JSON config file with a "SharePoint"
        section holding SiteUrl, LibraryName, FolderPath, TenantId, ClientId and
        ClientSecret. The default location is ./config.json, or the path in
        {ENV_CONFIG_PATH}. The Azure AD application needs the 'Sites.ReadWrite.All'
        Application Permission with admin consent.

        examples:
          spupload document.pdf
          spupload --config prod.json reports/report.docx
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "file_path",
        nargs="?",
        help="The local path of the file to upload.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to the JSON config file. Default is ${ENV_CONFIG_PATH} or ./config.json.",
    )
    parser.add_argument(
        "-c",
        "--chunk-size",
        type=int,
        default=CHUNK_SIZE,
        help=f"The chunk size for large file uploads in bytes, a multiple of {CHUNK_SIZE_UNIT}. Default is {CHUNK_SIZE} bytes ({format_size(CHUNK_SIZE)}).",
    )
    parser.add_argument(
        "--no-progress", action="store_true", help="Disable the progress bar."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log Graph requests and folder decisions."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    """Main function to handle command-line arguments and upload the file."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    display_header()

    # Without a file there is nothing to do: show usage
    if not args.file_path:
        parser.print_help()
        sys.exit(1)

    if args.chunk_size <= 0 or args.chunk_size % CHUNK_SIZE_UNIT:
        console.print(
            f"[red]❌ Error: chunk-size must be a positive multiple of {CHUNK_SIZE_UNIT} bytes.[/red]"
        )
        sys.exit(1)

    configure_logging(args.verbose)
    args.config = args.config or default_config_path()
    config = run_preflight_checks(args)

    try:
        succeeded = handle_upload(args, config)
    except SharePointUploadError as e:
        console.print(f"\n❌ [bold red]ERROR: {e.summary}")
        console.print(f"[red]{escape(str(e))}")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n❌ [bold red]An unexpected error occurred: {escape(str(e))}")
        sys.exit(1)

    sys.exit(0 if succeeded else 1)


if __name__ == "__main__":
    main()
