"""Interactive series menu.

The menu follows a small update/view loop: :class:`MenuState` turns a key
into at most one :class:`MenuAction`, :class:`ActionRunner` performs it and
hands back a one-line status message, and :func:`render_menu` draws the
state. Only one action is in flight at a time; keys pressed while one is
pending are rejected, not queued.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import pyperclip
from rich.console import Console, Group
from rich.text import Text

from sumppi.config.schema import SeriesEntry
from sumppi.feeds.fetcher import SeriesFetcher
from sumppi.feeds.generator import generate_feed
from sumppi.feeds.latest import latest_episode_date
from sumppi.feeds.models import SeriesData
from sumppi.storage.local import feed_filename, write_feed
from sumppi.storage.s3 import S3Uploader, public_url
from sumppi.ui.theme import Theme, get_theme
from sumppi.utils.errors import (
    ClipboardError,
    EpisodeDateError,
    FeedGenerationError,
    FetchError,
    SumppiError,
)

logger = logging.getLogger(__name__)


class MenuAction(str, Enum):
    """Actions a key press can trigger."""

    GENERATE = "generate"
    UPLOAD = "upload"
    COPY_URL = "copy_url"
    LATEST_DATE = "latest_date"
    QUIT = "quit"


QUIT_KEYS = {"q", "quit", "ctrl+c"}
UP_KEYS = {"k", "up"}
DOWN_KEYS = {"j", "down"}
GENERATE_KEYS = {"", "enter", "space"}

PENDING_MESSAGES = {
    MenuAction.GENERATE: "Generating feed...",
    MenuAction.UPLOAD: "Generating and uploading feed...",
    MenuAction.COPY_URL: "Copying URL...",
    MenuAction.LATEST_DATE: "Looking up latest episode...",
}


@dataclass
class MenuState:
    """Everything the menu view needs to render."""

    series: list[SeriesEntry]
    upload_enabled: bool = False
    cursor: int = 0
    loading: bool = False
    status: str = ""
    pending: MenuAction | None = field(default=None, repr=False)

    @property
    def selected(self) -> SeriesEntry | None:
        """The series under the cursor, if any."""
        if not self.series:
            return None
        return self.series[self.cursor]

    def handle_key(self, key: str) -> MenuAction | None:
        """Apply a key press and return the action to run, if any.

        Args:
            key: Key name or typed line (``"j"``, ``"up"``, ``""`` for enter)

        Returns:
            The action to perform, or None when the key only moved the
            cursor, was unknown, or was rejected because an action is pending
        """
        key = key.strip().lower()

        if key in QUIT_KEYS:
            return MenuAction.QUIT

        if key in UP_KEYS:
            if self.cursor > 0:
                self.cursor -= 1
            return None

        if key in DOWN_KEYS:
            if self.cursor < len(self.series) - 1:
                self.cursor += 1
            return None

        if self.loading or self.selected is None:
            return None

        if key in GENERATE_KEYS:
            action = MenuAction.GENERATE
        elif key == "u" and self.upload_enabled:
            action = MenuAction.UPLOAD
        elif key == "c":
            action = MenuAction.COPY_URL
        elif key == "d":
            action = MenuAction.LATEST_DATE
        else:
            return None

        self.loading = True
        self.pending = action
        return action

    def complete(self, message: str) -> None:
        """Record the result of the pending action and accept input again."""
        self.loading = False
        self.pending = None
        self.status = message


def copy_to_clipboard(text: str) -> None:
    """Copy text to the system clipboard.

    Raises:
        ClipboardError: If no clipboard mechanism is available
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(str(e)) from e


def describe_error(action: MenuAction, error: SumppiError) -> str:
    """Turn a failed action into a one-line status message."""
    if isinstance(error, FetchError):
        context = "fetching series data"
    elif isinstance(error, FeedGenerationError):
        context = "generating RSS feed"
    elif isinstance(error, EpisodeDateError):
        context = "finding latest episode"
    elif isinstance(error, ClipboardError):
        context = "copying to clipboard"
    elif action is MenuAction.UPLOAD:
        context = "uploading to S3"
    elif action is MenuAction.COPY_URL:
        context = "generating URL"
    else:
        context = "writing RSS file"
    return f"Error {context}: {error}"


def _summary(series: SeriesData) -> str:
    return f"{series.title} by {series.author}, {len(series.episodes)} episodes"


class ActionRunner:
    """Performs menu actions against the fetcher, storage, and clipboard."""

    def __init__(
        self,
        fetcher: SeriesFetcher,
        uploader: S3Uploader | None = None,
        output_dir: Path | None = None,
        s3_region: str | None = None,
        clipboard: Callable[[str], None] = copy_to_clipboard,
    ) -> None:
        self.fetcher = fetcher
        self.uploader = uploader
        self.output_dir = output_dir or Path.cwd()
        self.s3_region = s3_region
        self.clipboard = clipboard

    def run(self, action: MenuAction, entry: SeriesEntry) -> str:
        """Run one action to completion and return its status message.

        Errors never escape; they are reported in the returned message.
        """
        handlers = {
            MenuAction.GENERATE: self.generate,
            MenuAction.UPLOAD: self.upload,
            MenuAction.COPY_URL: self.copy_url,
            MenuAction.LATEST_DATE: self.latest_date,
        }
        try:
            return handlers[action](entry)
        except SumppiError as e:
            logger.error("%s failed for %s: %s", action.value, entry.guid, e)
            return describe_error(action, e)

    def generate(self, entry: SeriesEntry) -> str:
        series = self.fetcher.fetch(entry.guid)
        rss_xml = generate_feed(series)
        path = write_feed(rss_xml, self.output_dir / feed_filename(entry.guid, entry.s3_path))
        return f"RSS feed written to {path.name} ({_summary(series)})"

    def upload(self, entry: SeriesEntry) -> str:
        if self.uploader is None:
            return "Upload unavailable: S3 client is not configured"
        series = self.fetcher.fetch(entry.guid)
        rss_xml = generate_feed(series)
        self.uploader.upload_feed(rss_xml, entry.s3_path)
        return f"RSS feed uploaded to {entry.s3_path} ({_summary(series)})"

    def copy_url(self, entry: SeriesEntry) -> str:
        url = public_url(entry.s3_path, region=self.s3_region)
        self.clipboard(url)
        return f"URL copied to clipboard: {url}"

    def latest_date(self, entry: SeriesEntry) -> str:
        series = self.fetcher.fetch(entry.guid)
        return f"Latest episode date: {latest_episode_date(series.episodes)}"


def render_menu(state: MenuState, theme: Theme | None = None) -> Group:
    """Build the menu view for the current state."""
    theme = theme or get_theme()

    lines: list[Text] = [
        Text("RSS Feed Generator", style=theme.header),
        Text(""),
        Text("Select a series to generate RSS feed:"),
        Text(""),
    ]

    if not state.series:
        lines.append(Text("No series configured.", style=theme.status))

    for index, entry in enumerate(state.series):
        if index == state.cursor:
            lines.append(Text(f"> {entry.name}", style=theme.selected))
        else:
            lines.append(Text(f"  {entry.name}", style=theme.normal))

    upload_help = " • u: upload to S3" if state.upload_enabled else ""
    lines.append(Text(""))
    lines.append(
        Text(
            f"j/k: navigate • enter: generate feed{upload_help} • "
            "d: show latest episode • c: copy URL • q: quit",
            style=theme.status,
        )
    )

    if state.loading and state.pending is not None:
        lines.extend([Text(""), Text(PENDING_MESSAGES[state.pending], style=theme.status)])
    elif state.status:
        style = theme.error if state.status.startswith("Error") else theme.status
        lines.extend([Text(""), Text(state.status, style=style)])

    return Group(*lines)


def read_key(console: Console) -> str:
    """Read one command line from the terminal; EOF and Ctrl-C mean quit."""
    try:
        return console.input("> ")
    except (EOFError, KeyboardInterrupt):
        return "q"


def run_menu(
    state: MenuState,
    runner: ActionRunner,
    console: Console | None = None,
    theme: Theme | None = None,
    key_reader: Callable[[], str] | None = None,
) -> None:
    """Run the interactive menu until the user quits."""
    console = console or Console()
    theme = theme or get_theme()
    key_reader = key_reader or (lambda: read_key(console))

    while True:
        console.clear()
        console.print(render_menu(state, theme))

        action = state.handle_key(key_reader())
        if action is MenuAction.QUIT:
            break
        if action is None or state.selected is None:
            continue

        with console.status(theme.status_text(PENDING_MESSAGES[action])):
            message = runner.run(action, state.selected)
        state.complete(message)
