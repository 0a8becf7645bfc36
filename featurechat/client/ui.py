from typing import Dict, List, Optional

RESET = "\u001b[0m"
BLACK = "\u001b[30m"
RED = "\u001b[31m"
GREEN = "\u001b[32m"
YELLOW = "\u001b[33m"
BLUE = "\u001b[34m"

COLORS: Dict[str, str] = {
    "black": BLACK,
    "red": RED,
    "green": GREEN,
    "yellow": YELLOW,
    "blue": BLUE,
}


class View:
    """
    Console view of a chat client.

    Keeps every rendered line so the most recent one can be inspected;
    nothing is written to the terminal here.
    """

    def __init__(self):
        self.history: List[str] = []

    def print_message(self, sender: int, text: str, color: Optional[str] = None) -> None:
        line = f"[{sender}] {text}"
        if color is not None:
            line = f"{RESET}{color}{line}{RESET}"
        self.history.append(line)

    @property
    def last_displayed_message(self) -> str:
        return self.history[-1] if self.history else ""
