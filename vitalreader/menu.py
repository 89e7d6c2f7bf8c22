"""The interactive menu loop."""

from __future__ import annotations

from . import commands, ui

_ACTIONS = {
    "1": commands.list_ports,
    "2": commands.test_port,
    "3": commands.connect_and_read,
    "4": commands.send_fake_data,
    "5": commands.generate_command,
}


def run_cli_mode() -> None:
    """Show the main menu and run the chosen commands until the user quits."""
    ui.print_header()
    while True:
        ui.print_main_menu()
        try:
            choice = ui.prompt("\nSelect option: ")
        except EOFError:
            choice = "q"
        if choice in ("q", "Q"):
            print("\nGoodbye!")
            return
        action = _ACTIONS.get(choice)
        if action is None:
            print("Invalid option. Please try again.")
        else:
            action()