"""Console reporting for SharePoint Uploader (spupload)."""

from contextlib import contextmanager

from rich.progress import (
    Progress,
    TextColumn,
    BarColumn,
    TaskProgressColumn,
    TransferSpeedColumn,
    TimeRemainingColumn,
    TimeElapsedColumn,
    FileSizeColumn,
    TotalFileSizeColumn,
)
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel
from rich import box

from spupload.utils.helpers import format_size, truncate_path

console = Console()


def create_file_progress(console=console):
    """Create a progress display for a single file transfer; the task description is the file name."""
    return Progress(
        TextColumn("[cyan]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        "•",
        FileSizeColumn(),
        "/",
        TotalFileSizeColumn(),
        "•",
        TransferSpeedColumn(),
        "•",
        TimeElapsedColumn(),
        "•",
        TimeRemainingColumn(),
        console=console,
    )


class UploadReporter:
    """Receives progress events from the upload pipeline. The base class ignores them."""

    def upload_started(self, file_name, destination):
        pass

    def site_resolved(self, site):
        pass

    def drive_resolved(self, drive):
        pass

    def folder_created(self, folder_name):
        pass

    @contextmanager
    def transfer(self, file_name, file_size):
        """Yield a callback that receives the byte count of each part sent."""
        yield None

    def upload_succeeded(self, result):
        pass

    def upload_failed(self, error):
        pass


class ConsoleReporter(UploadReporter):
    """Prints pipeline events with rich."""

    def __init__(self, console=console, show_progress=True):
        self.console = console
        self.show_progress = show_progress

    def upload_started(self, file_name, destination):
        self.console.print(f"[cyan]📤 Uploading file: [bold]{escape(file_name)}[/bold][/cyan]")
        self.console.print(f"[dim]   Destination: {escape(destination)}[/dim]")

    def site_resolved(self, site):
        self.console.print(f"[dim]   Site ID: {site.id}[/dim]")

    def drive_resolved(self, drive):
        self.console.print(f"[dim]   Drive ID: {drive.id}[/dim]")

    def folder_created(self, folder_name):
        self.console.print(f"[green]📁 Created folder: {escape(folder_name)}[/green]")

    @contextmanager
    def transfer(self, file_name, file_size):
        if not self.show_progress:
            yield None
            return

        progress = create_file_progress(console=self.console)
        with progress:
            task = progress.add_task(escape(truncate_path(file_name)), total=file_size)

            def progress_callback(bytes_uploaded):
                progress.update(task, advance=bytes_uploaded)

            yield progress_callback

    def upload_succeeded(self, result):
        self.console.print(f"[bold green]✅ Upload succeeded: {escape(result.file_name)}[/bold green]")
        self.console.print(f"[green]   Size: {format_size(result.byte_size)}[/green]")
        if result.item is not None and result.item.web_url:
            self.console.print(f"[dim]   URL: {result.item.web_url}[/dim]")

    def upload_failed(self, error):
        summary = getattr(error, "summary", "Upload failed")
        self.console.print(f"❌ [bold red]ERROR: {summary}[/bold red]")
        self.console.print(f"[red]   Details: {escape(str(error))}[/red]")
        cause = error.__cause__
        if cause is not None:
            self.console.print(f"[red]   Cause: {escape(str(cause))}[/red]")


def display_upload_summary(stats_obj, config, result, console=console):
    """Display a summary panel for the finished upload."""
    stats = stats_obj.get_stats()
    duration = stats_obj.get_duration()
    transfer_speed = stats_obj.get_transfer_speed_mb_per_sec()

    summary_table = Table(show_header=False, box=box.SIMPLE, pad_edge=False)
    summary_table.add_column("Metric", style="bold cyan", width=25, no_wrap=True)
    summary_table.add_column("Value", style="white")

    summary_table.add_row("📄 File", f"[bold]{escape(result.file_name)}[/bold]")
    summary_table.add_row("🌐 Site", escape(config.site_url))
    summary_table.add_row("📚 Library", escape(config.library_name))
    summary_table.add_row("📁 Folder", escape(config.folder_path))
    summary_table.add_row("💾 Size", f"[bold]{format_size(result.byte_size)}[/bold]")
    summary_table.add_row("")
    summary_table.add_row("🔎 Folders Found", f"[bold]{stats['folders_found']}[/bold]")
    summary_table.add_row("📁 Folders Created", f"[bold]{stats['folders_created']}[/bold]")
    summary_table.add_row("🧩 Chunks Uploaded", f"[bold]{stats['chunks_uploaded']}[/bold]")
    summary_table.add_row(
        "📤 Data Uploaded", f"[bold]{format_size(stats['uploaded_size'])}[/bold]"
    )
    summary_table.add_row("⏱️  Duration", f"[bold]{str(duration).split('.')[0]}[/bold]")
    summary_table.add_row("🚀 Speed", f"[bold]{transfer_speed:.2f} MB/s[/bold]")

    if result.succeeded:
        panel_style = "green"
        title_icon = "🎉"
    else:
        panel_style = "red"
        title_icon = "❌"

    console.print("\n")
    console.print(
        Panel(
            summary_table,
            title=f"[bold]{title_icon} Upload Summary[/bold]",
            border_style=panel_style,
            padding=(1, 2),
        )
    )
