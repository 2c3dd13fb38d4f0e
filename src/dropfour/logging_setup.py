from __future__ import annotations

import logging

from rich.highlighter import Highlighter
from rich.logging import RichHandler
from rich.text import Text

COLOR = {
    "player_1": "bold #e5484d",
    "player_2": "bold #f5d90a",
    "bomb": "bold bright_red",
    "jackpot": "bold #ffaf00",
    "alien": "bold #23d18b",
    "round": "bold #29b8db",
    "champion": "bold magenta",
    "warning": "bold bright_red",
}


class GameLogHighlighter(Highlighter):
    def highlight(self, text: Text) -> None:
        text.highlight_regex(r"\b[Pp]layer 1\b", COLOR["player_1"])
        text.highlight_regex(r"\b[Pp]layer 2\b", COLOR["player_2"])
        text.highlight_regex(r"\bBOOM\b", COLOR["bomb"])
        text.highlight_regex(r"\bJACKPOT\b", COLOR["jackpot"])
        text.highlight_regex(r"\bALIEN\b", COLOR["alien"])
        text.highlight_regex(r"\bRound \d+\b", COLOR["round"])
        text.highlight_regex(r"\bchampion\b", COLOR["champion"])
        text.highlight_regex(r"\blost\b", COLOR["warning"])


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger("dropfour")
    logger.setLevel(level)
    handler = RichHandler(
        show_path=False,
        show_time=False,
        highlighter=GameLogHighlighter(),
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
