"""
ChatPanel - scrollable transcript of the messages sent from the composer.
"""

from rich.panel import Panel
from rich.text import Text
from textual.widgets import RichLog

MENTION_PATTERN = r"@\w+"


class ChatPanel(RichLog):
    """
    Transcript panel built on RichLog.

    Message text is written as ``Text`` objects, never as markup, so user
    input containing square brackets is shown verbatim.
    """

    BORDER_TITLE = "Chat"

    def __init__(self, **kwargs):
        super().__init__(
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self.message_count = 0

    def add_user_message(self, pseudonym: str, text: str, mode_label: str | None = None):
        """
        Add a sent message to the transcript.

        Args:
            pseudonym: Author shown before the message
            text: Message text as typed
            mode_label: Restricted input mode the message was written in
        """
        line = Text()
        line.append(f"{pseudonym}", style="bold cyan")
        if mode_label:
            line.append(f" ({mode_label})", style="italic yellow")
        line.append(": ")

        body = Text(text)
        body.highlight_regex(MENTION_PATTERN, "bold magenta")
        line.append_text(body)

        self.write(line)
        self.message_count += 1

    def add_panel(self, content: str, title: str = "", style: str = "cyan"):
        """
        Add a styled panel (system messages, notifications).

        Args:
            content: Panel content (Rich markup allowed)
            title: Optional panel title
            style: Border style/color
        """
        self.write(Panel(content, title=title, border_style=style))

    def clear_chat(self):
        """Clear all chat history."""
        self.clear()
        self.message_count = 0
