#!/usr/bin/env python3
"""Live terminal view of the pool hall.

Usage:
    python -m poolreplay.scripts.watch                    # watch tables + replay toasts
    python -m poolreplay.scripts.watch --trigger 3        # press table 3's button first
    python -m poolreplay.scripts.watch --url http://host:3000

Renders the table list (AO VIVO / REPLAY badges) and the global "replay ready"
toast, refreshed from the same 1s polling the web UI uses.
"""

import argparse
import time

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from poolreplay.client.api import TablesClient
from poolreplay.client.list_view import TableListView, FRESHNESS_WINDOW_MS
from poolreplay.client.notifier import GlobalNotificationPoller

REFRESH_RATE = 0.5


def render(view: TableListView, notifier: GlobalNotificationPoller):
    if view.loading:
        return Panel(Text("Carregando mesas...", style="dim"), title="MACUCO SINUCA")

    table = Table(show_header=True, expand=True, border_style="green")
    table.add_column("#", width=4, justify="right")
    table.add_column("Mesa")
    table.add_column("Status")
    for card in view.cards():
        status = Text()
        if card.live_badge:
            status.append(" AO VIVO ", style="bold white on red")
        if card.replay_badge:
            status.append(" ")
            status.append(" REPLAY ", style="bold black on yellow")
        table.add_row(str(card.id), card.name, status)

    parts = [table]
    toast = notifier.toast.message
    if toast:
        parts.insert(0, Panel(Text(toast, style="bold black"), title="Novo Replay!",
                              style="on yellow", expand=False))
    return Panel(Group(*parts), title="[bold]MACUCO SINUCA[/bold]", border_style="green")


def main() -> None:
    ap = argparse.ArgumentParser(description="Watch pool tables and replay notifications")
    ap.add_argument("--url", default="http://127.0.0.1:3000")
    ap.add_argument("--trigger", type=int, default=None, help="table id to press the replay button for")
    ap.add_argument("--window-ms", type=int, default=FRESHNESS_WINDOW_MS)
    args = ap.parse_args()

    console = Console()
    client = TablesClient(args.url)
    view = TableListView(client, freshness_window_ms=args.window_ms)
    notifier = GlobalNotificationPoller(client)

    if args.trigger is not None:
        ok = view.simulate_hardware_press(args.trigger)
        console.print(f"[bold]Mesa {args.trigger}[/bold]: " + ("replay requested" if ok else "[red]trigger failed[/red]"))

    view.mount()
    notifier.mount()
    try:
        with Live(render(view, notifier), console=console, refresh_per_second=4, screen=True) as live:
            while True:
                live.update(render(view, notifier))
                time.sleep(REFRESH_RATE)
    except KeyboardInterrupt:
        pass
    finally:
        view.unmount()
        notifier.unmount()
        client.close()


if __name__ == "__main__":
    main()
