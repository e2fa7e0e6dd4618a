import argparse
import json
import re
import sys
from datetime import datetime

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

import config
from errors import NoResultsError, UpstreamSearchError, ValidationError
from models import Report
from pipeline import select_pipeline, validate_request

console = Console()

_RISK_STYLES = {"High": "bold red", "Medium": "yellow", "Low": "green"}


def _sanitize_filename(s: str) -> str:
    return re.sub(r'[^\w\-]', '_', s)[:50]


def _print_report(report: Report):
    analysis = report.analysis
    table = Table(title=f"Copyright risk: {report.user_name} / {report.query}", show_lines=True)
    table.add_column("Video ID", style="cyan", no_wrap=True)
    table.add_column("Title", max_width=40)
    table.add_column("Channel", style="magenta", max_width=20)
    table.add_column("Risk", justify="center")
    table.add_column("Rationale", max_width=50)

    for entry in analysis.ranked_list:
        risk = entry.risk.value
        table.add_row(
            entry.video_id,
            entry.title,
            entry.channel,
            f"[{_RISK_STYLES[risk]}]{risk}[/]",
            "\n".join(entry.rationale),
        )

    console.print(table)
    console.print(f"\n[bold]{analysis.summary}[/bold]")
    console.print(
        f"[dim]{report.total_videos_found} videos, {report.batches_analyzed} batches, "
        f"{report.batches_failed} failed[/dim]"
    )
    if analysis.top_priority:
        console.print(f"[bold]Top priority:[/bold] {', '.join(analysis.top_priority)}")
    for failed in report.failed_batch_details:
        console.print(f"[red]Batch {failed.batch_number} failed ({failed.videos_in_batch} videos): {failed.error}[/red]")
    console.print(f"[dim]{analysis.disclaimer}[/dim]")


def _save_json(report: Report) -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"report_{_sanitize_filename(report.user_name)}_{timestamp}.json"
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(report.to_payload(), f, ensure_ascii=False, indent=2)
    console.print(f"\n[green]Report saved to {filename}[/green]")
    return filename


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="YouTube copyright risk scanner")
    parser.add_argument("user_name", help="Artist or creator whose work is being protected")
    parser.add_argument("channel_name", help="Official channel name")
    parser.add_argument("--max-results", type=int, default=config.TARGET_RESULTS,
                        help=f"Videos to fetch (default: {config.TARGET_RESULTS})")
    parser.add_argument("--batch-size", type=int, default=config.BATCH_SIZE,
                        help=f"Videos per classification call (default: {config.BATCH_SIZE})")
    parser.add_argument("--json-only", action="store_true", help="Save JSON only, no table")
    parser.add_argument("--mock", action="store_true", help="Use synthetic data even if keys are set")
    args = parser.parse_args(argv)

    config.setup_logging()

    try:
        user_name, channel_name = validate_request({"userName": args.user_name, "channelName": args.channel_name})
    except ValidationError as e:
        console.print(f"[red]{e}[/red]")
        return 1

    pipeline = select_pipeline(
        target_results=args.max_results,
        batch_size=args.batch_size,
        force_mock=args.mock,
    )
    if not config.has_credentials() and not args.mock:
        console.print("[dim]API keys not set - using mock data[/dim]")

    console.print(f"[bold]Scanning YouTube for:[/bold] {user_name} {channel_name}")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
        console=console,
    ) as progress:
        task = progress.add_task("Searching YouTube...", total=None)

        def on_progress(number, total, state):
            progress.update(task, description=f"Batch {number}/{total}: {state}")

        try:
            report = pipeline.run(user_name, channel_name, on_progress=on_progress)
        except (UpstreamSearchError, NoResultsError) as e:
            console.print(f"[red]{e}[/red]")
            return 1

    if not args.json_only:
        _print_report(report)

    _save_json(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
