from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from rentledger.cli.prompts import ask_amount, ask_reading
from rentledger.constants import STATUS_LABELS
from rentledger.errors import InvalidMeterReading, RoomNotFound
from rentledger.models import format_vnd
from rentledger.models.room import Room, RoomStatus
from rentledger.services.meter_service import MeterService
from rentledger.services.room_service import RoomService

console = Console()


def _room_choice(room: Room) -> str:
    return f"{room.id} - {room.name} ({STATUS_LABELS.get(room.status, room.status.value)})"


def _show_rooms(rooms: list[Room]) -> None:
    table = Table(title="Rooms")
    table.add_column("Room")
    table.add_column("Status", justify="center")
    table.add_column("Rent", justify="right")
    table.add_column("Electricity", justify="right")
    table.add_column("Water", justify="right")
    table.add_column("Staged", justify="center")

    for room in rooms:
        pending = room.pending
        table.add_row(
            room.name,
            STATUS_LABELS.get(room.status, room.status.value),
            format_vnd(room.rent),
            str(room.current.electricity),
            str(room.current.water),
            f"{pending.electricity} / {pending.water}" if pending else "-",
        )
    console.print(table)


def create_room_menu(room_service: RoomService) -> None:
    console.print()
    console.print("[bold]New Room[/bold]", style="cyan")

    name = questionary.text("Room name:").ask()
    if not name:
        console.print("[yellow]Cancelled.[/yellow]")
        return
    room_type = questionary.text("Room type (optional):").ask() or ""
    rent = ask_amount("Monthly rent:", allow_zero=False)
    if rent is None:
        return
    deposit = ask_amount("Deposit:", default=0) or 0
    electricity = ask_reading("Electricity meter:", 0)
    water = ask_reading("Water meter:", 0)
    if electricity is None or water is None:
        return

    room = room_service.create_room(
        name,
        rent,
        room_type=room_type,
        deposit=deposit,
        electricity_meter=electricity,
        water_meter=water,
    )
    console.print(f"[green]Room {room.name} created.[/green]")


def stage_readings_menu(room_service: RoomService, meter_service: MeterService) -> None:
    """Walk through every occupied room and capture its meters."""
    console.print()
    console.print("[bold]Record Meter Readings[/bold]", style="cyan")

    rooms = room_service.list_occupied()
    if not rooms:
        console.print("[yellow]No occupied rooms.[/yellow]")
        return

    staged = 0
    for room in rooms:
        console.print(
            f"\n  [bold]{room.name}[/bold]  last billed: {room.current.electricity} kWh / {room.current.water} m³"
        )
        default = room.pending or room.current
        electricity = ask_reading("  Electricity:", room.current.electricity, default.electricity)
        if electricity is None:
            break
        water = ask_reading("  Water:", room.current.water, default.water)
        if water is None:
            break
        try:
            meter_service.stage_reading(room, electricity, water)
            staged += 1
        except (InvalidMeterReading, RoomNotFound) as exc:
            console.print(f"[red]{exc}[/red]")

    console.print(f"\n[green]{staged} reading(s) recorded, waiting to be billed.[/green]")


def _room_actions_menu(room: Room, room_service: RoomService, meter_service: MeterService) -> None:
    choices = []
    if room.status == RoomStatus.AVAILABLE:
        choices += ["Check in", "Mark under maintenance"]
    elif room.status == RoomStatus.OCCUPIED:
        choices.append("Check out")
    else:
        choices.append("End maintenance")
    if room.is_staged:
        choices.append("Discard staged reading")
    choices.append("Back")

    action = questionary.select(f"{room.name}", choices=choices).ask()
    if action is None or action == "Back":
        return
    try:
        if action == "Check in":
            room_service.check_in(room)
        elif action == "Check out":
            room_service.check_out(room)
        elif action == "Mark under maintenance":
            room_service.set_maintenance(room, True)
        elif action == "End maintenance":
            room_service.set_maintenance(room, False)
        elif action == "Discard staged reading":
            meter_service.discard_staging(room)
    except (ValueError, RoomNotFound) as exc:
        console.print(f"[red]{exc}[/red]")
        return
    console.print("[green]Done.[/green]")


def rooms_menu(room_service: RoomService, meter_service: MeterService) -> None:
    while True:
        rooms = room_service.list_rooms()
        console.print()
        if rooms:
            _show_rooms(rooms)
        else:
            console.print("[yellow]No rooms yet.[/yellow]")

        choices = [_room_choice(room) for room in rooms] + ["New room", "Back"]
        choice = questionary.select("Select a room:", choices=choices).ask()
        if choice is None or choice == "Back":
            return
        if choice == "New room":
            create_room_menu(room_service)
            continue

        room_id = int(choice.split(" - ")[0])
        room = next((r for r in rooms if r.id == room_id), None)
        if room is None:
            console.print("[red]Room not found.[/red]")
            continue
        _room_actions_menu(room, room_service, meter_service)
