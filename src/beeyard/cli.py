#!/usr/bin/env python3
"""beeyard CLI for day-to-day inspection of apiary data."""

import argparse
from pathlib import Path

import questionary
from rich.console import Console
from rich.table import Table

from beeyard.db import Database
from beeyard.log import configure_logging
from beeyard.models import Apiary, Hive, Recording
from beeyard.services import DataService

console = Console()


def select_apiary(data: DataService) -> Apiary | None:
    """Prompt the user to select an apiary."""
    result = data.apiaries.get_apiaries()
    if not result.is_success:
        console.print(f"[red]Could not load apiaries: {result.error}[/]")
        return None
    if not result.value:
        console.print("[red]No apiaries found.[/]")
        return None
    return questionary.select(
        "Select an apiary:",
        choices=[questionary.Choice(title=f"{a.name} (#{a.id})", value=a) for a in result.value],
    ).ask()


def select_hive(data: DataService) -> Hive | None:
    """Prompt for an apiary, then one of its hives."""
    apiary = select_apiary(data)
    if not apiary:
        return None
    result = data.hives.get_hives(apiary.id)
    if not result.is_success or not result.value:
        console.print(f"[red]No hives found in {apiary.name}.[/]")
        return None
    return questionary.select(
        "Select a hive:",
        choices=[questionary.Choice(title=f"{h.name} (#{h.id})", value=h) for h in result.value],
    ).ask()


def select_recording(data: DataService, hive: Hive) -> Recording | None:
    """Prompt for one of the hive's recording days."""
    result = data.hives.get_hive_with_recordings(hive.id)
    if not result.is_success or not result.value.recordings:
        console.print(f"[red]No recordings for {hive.name}.[/]")
        return None
    return questionary.select(
        "Select a recording:",
        choices=[
            questionary.Choice(title=f"{r.date} ({len(r.records)} records)", value=r)
            for r in result.value.recordings
        ],
    ).ask()


def list_apiaries(data: DataService):
    """Print every apiary with its hive count."""
    result = data.apiaries.get_apiaries()
    if not result.is_success:
        console.print(f"[red]Could not load apiaries: {result.error}[/]")
        return

    table = Table(title="Apiaries")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Location")
    table.add_column("Hives", justify="right")
    for apiary in result.value:
        hives = data.hives.get_hives(apiary.id)
        location = (
            f"{apiary.location_lat:.4f}, {apiary.location_long:.4f}"
            if apiary.location_lat is not None and apiary.location_long is not None
            else "-"
        )
        table.add_row(
            str(apiary.id),
            apiary.name,
            location,
            str(len(hives.value)) if hives.is_success else "?",
        )
    console.print(table)


def show_recordings(data: DataService):
    """Show the per-day recordings of a selected hive."""
    hive = select_hive(data)
    if not hive:
        return

    result = data.hives.get_hive_with_recordings(hive.id)
    if not result.is_success:
        console.print(f"[red]Could not load recordings: {result.error}[/]")
        return

    table = Table(title=f"Recordings of {hive.name}")
    table.add_column("Date")
    table.add_column("Records", justify="right")
    table.add_column("First")
    table.add_column("Last")
    table.add_column("Max bees", justify="right")
    for recording in result.value.recordings:
        bees = [r.num_bees for r in recording.records if r.num_bees is not None]
        table.add_row(
            str(recording.date),
            str(len(recording.records)),
            recording.records[0].timestamp.strftime("%H:%M:%S"),
            recording.records[-1].timestamp.strftime("%H:%M:%S"),
            str(max(bees)) if bees else "-",
        )
    console.print(table)


def delete_recording(data: DataService):
    """Delete one day of records from a selected hive."""
    hive = select_hive(data)
    if not hive:
        return
    recording = select_recording(data, hive)
    if not recording:
        return

    summary = (
        f"Will delete [bold]{len(recording.records)}[/] records of {hive.name} "
        f"recorded on {recording.date}."
    )
    console.print(f"[yellow]{summary}[/]")

    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    result = data.recordings.delete_recording(hive.id, recording)
    if result.is_success:
        console.print(f"[green]Deleted {result.value} records.[/]")
    else:
        console.print(f"[red]Delete failed: {result.error}[/]")


def export_recording(data: DataService, output: Path = None):
    """Write one day of records of a selected hive to CSV."""
    hive = select_hive(data)
    if not hive:
        return
    recording = select_recording(data, hive)
    if not recording:
        return

    result = data.recordings.get_recording_dataframe(hive.id, recording.date, recording.date)
    if not result.is_success:
        console.print(f"[red]Could not load records: {result.error}[/]")
        return

    output = output or Path(f"hive-{hive.id}-{recording.date}.csv")
    result.value.to_csv(output, index=False)
    console.print(f"[green]Wrote {len(result.value)} records to {output}.[/]")


def wipe(data: DataService):
    """Delete all apiaries, hives and records."""
    console.print("[yellow]Will delete [bold]all[/] apiaries, hives and records.[/]")

    if not questionary.confirm("Proceed with these changes?", default=False).ask():
        console.print("[dim]Cancelled.[/]")
        return

    result = data.delete_all()
    if result.is_success:
        console.print("[green]All data deleted.[/]")
    else:
        console.print(f"[red]Wipe failed: {result.error}[/]")


def main():
    parser = argparse.ArgumentParser(description="beeyard CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-apiaries", help="List apiaries")
    subparsers.add_parser("show-recordings", help="Show a hive's recordings by day")
    subparsers.add_parser("delete-recording", help="Delete one day of records")
    export = subparsers.add_parser("export-recording", help="Export one day of records to CSV")
    export.add_argument("-o", "--output", type=Path, help="CSV file to write")
    subparsers.add_parser("wipe", help="Delete all data")

    args = parser.parse_args()

    from beeyard.config import config

    configure_logging(config.log_level)

    with DataService(Database(config.database_url)) as data:
        if args.command == "list-apiaries":
            list_apiaries(data)
        elif args.command == "show-recordings":
            show_recordings(data)
        elif args.command == "delete-recording":
            delete_recording(data)
        elif args.command == "export-recording":
            export_recording(data, args.output)
        elif args.command == "wipe":
            wipe(data)


if __name__ == "__main__":
    main()
