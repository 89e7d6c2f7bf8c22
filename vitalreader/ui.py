"""Console helpers for the interactive mode: banners and prompts."""

from __future__ import annotations

_RULE = "════════════════════════════════════════════════════"

_HEADER = "\n".join(
    [
        "\n╔════════════════════════════════════════════════════╗",
        "║     VITAL READER - INTERACTIVE CLI MODE           ║",
        "╚════════════════════════════════════════════════════╝\n",
    ]
)

_MAIN_MENU = "\n".join(
    [
        "\n╔════════════════════════════════════════════════════╗",
        "║  Main Menu                                         ║",
        "╠════════════════════════════════════════════════════╣",
        "║  [1] List available serial ports                   ║",
        "║  [2] Test port connectivity                        ║",
        "║  [3] Connect and read from port                    ║",
        "║  [4] Send fake data to port (testing)              ║",
        "║  [5] Generate command for listener                 ║",
        "║  [q] Quit                                          ║",
        "╚════════════════════════════════════════════════════╝",
    ]
)


def print_header() -> str:
    """Print the interactive mode banner and return it."""
    text = _HEADER
    print(text)
    return text


def print_main_menu() -> str:
    """Print the main menu and return it."""
    text = _MAIN_MENU
    print(text)
    return text


def print_section_header(title: str) -> None:
    """Print a title between two rules."""
    print(f"\n{_RULE}")
    print(title)
    print(_RULE)


def prompt(message: str) -> str:
    """Show message and return the trimmed line typed in reply."""
    return input(message).strip()


def prompt_with_default(message: str, default: str) -> str:
    """Like prompt, but return default when the reply is empty."""
    return prompt(message) or default


def wait_for_enter() -> None:
    """Pause until Enter is pressed (end of input also continues)."""
    print("\nPress Enter to continue...")
    try:
        input()
    except EOFError:
        pass