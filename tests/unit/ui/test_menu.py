"""Tests for the interactive series menu."""

import io
from pathlib import Path
from unittest.mock import Mock, patch

import pyperclip
import pytest
from rich.console import Console

from sumppi.config.schema import SeriesEntry
from sumppi.feeds.models import SeriesData
from sumppi.ui.menu import (
    ActionRunner,
    MenuAction,
    MenuState,
    copy_to_clipboard,
    describe_error,
    render_menu,
    run_menu,
)
from sumppi.ui.theme import DARK_THEME
from sumppi.utils.errors import (
    ClipboardError,
    FetchError,
    NoValidEpisodesError,
    StorageError,
)


@pytest.fixture
def entries() -> list[SeriesEntry]:
    return [
        SeriesEntry(guid="guid-1", s3_path="s3://feeds/morning-show.rss"),
        SeriesEntry(guid="guid-2", s3_path="s3://feeds/evening/talk.rss"),
        SeriesEntry(guid="guid-3", s3_path="s3://feeds/late.rss"),
    ]


@pytest.fixture
def fetcher(sample_series: SeriesData) -> Mock:
    mock = Mock()
    mock.fetch.return_value = sample_series
    return mock


def render_text(state: MenuState) -> str:
    console = Console(record=True, width=160, file=io.StringIO())
    console.print(render_menu(state, DARK_THEME))
    return console.export_text()


class TestMenuState:
    """Tests for key handling."""

    def test_starts_on_first_series(self, entries: list[SeriesEntry]) -> None:
        """Test initial cursor position."""
        state = MenuState(series=entries)

        assert state.cursor == 0
        assert state.selected == entries[0]
        assert not state.loading

    def test_navigation_stays_in_bounds(self, entries: list[SeriesEntry]) -> None:
        """Test the cursor moves within the list and stops at both ends."""
        state = MenuState(series=entries)

        assert state.handle_key("k") is None
        assert state.cursor == 0

        for _ in range(5):
            state.handle_key("j")
        assert state.cursor == 2

        state.handle_key("up")
        assert state.cursor == 1
        state.handle_key("down")
        assert state.cursor == 2

    @pytest.mark.parametrize("key", ["q", "Q", "quit", "ctrl+c"])
    def test_quit_keys(self, entries: list[SeriesEntry], key: str) -> None:
        """Test every quit key ends the menu."""
        assert MenuState(series=entries).handle_key(key) is MenuAction.QUIT

    @pytest.mark.parametrize(
        ("key", "action"),
        [
            ("", MenuAction.GENERATE),
            ("enter", MenuAction.GENERATE),
            ("space", MenuAction.GENERATE),
            ("c", MenuAction.COPY_URL),
            ("d", MenuAction.LATEST_DATE),
            ("u", MenuAction.UPLOAD),
        ],
    )
    def test_action_keys(
        self, entries: list[SeriesEntry], key: str, action: MenuAction
    ) -> None:
        """Test action keys start exactly one pending action."""
        state = MenuState(series=entries, upload_enabled=True)

        assert state.handle_key(key) is action
        assert state.loading
        assert state.pending is action

    def test_upload_requires_uploader(self, entries: list[SeriesEntry]) -> None:
        """Test u is ignored when uploading is disabled."""
        state = MenuState(series=entries, upload_enabled=False)

        assert state.handle_key("u") is None
        assert not state.loading

    def test_actions_rejected_while_loading(self, entries: list[SeriesEntry]) -> None:
        """Test a second action is not accepted while one is pending."""
        state = MenuState(series=entries)
        state.handle_key("d")

        assert state.handle_key("") is None
        assert state.handle_key("c") is None
        assert state.pending is MenuAction.LATEST_DATE

    def test_navigation_allowed_while_loading(self, entries: list[SeriesEntry]) -> None:
        """Test the cursor still moves while an action is pending."""
        state = MenuState(series=entries)
        state.handle_key("d")

        state.handle_key("j")

        assert state.cursor == 1

    def test_quit_allowed_while_loading(self, entries: list[SeriesEntry]) -> None:
        """Test quitting is always possible."""
        state = MenuState(series=entries)
        state.handle_key("")

        assert state.handle_key("q") is MenuAction.QUIT

    def test_no_series(self) -> None:
        """Test an empty menu accepts only quit and navigation."""
        state = MenuState(series=[])

        assert state.selected is None
        assert state.handle_key("j") is None
        assert state.cursor == 0
        assert state.handle_key("") is None
        assert not state.loading

    def test_unknown_key(self, entries: list[SeriesEntry]) -> None:
        """Test unknown keys do nothing."""
        state = MenuState(series=entries)

        assert state.handle_key("x") is None
        assert not state.loading

    def test_complete(self, entries: list[SeriesEntry]) -> None:
        """Test completing an action clears loading and stores the message."""
        state = MenuState(series=entries)
        state.handle_key("")

        state.complete("RSS feed written")

        assert not state.loading
        assert state.pending is None
        assert state.status == "RSS feed written"
        assert state.handle_key("d") is MenuAction.LATEST_DATE


class TestDescribeError:
    """Tests for error status messages."""

    @pytest.mark.parametrize(
        ("action", "error", "expected"),
        [
            (MenuAction.GENERATE, FetchError("boom"), "Error fetching series data: boom"),
            (
                MenuAction.LATEST_DATE,
                NoValidEpisodesError("no valid episodes found"),
                "Error finding latest episode: no valid episodes found",
            ),
            (MenuAction.COPY_URL, ClipboardError("boom"), "Error copying to clipboard: boom"),
            (MenuAction.UPLOAD, StorageError("boom"), "Error uploading to S3: boom"),
            (MenuAction.GENERATE, StorageError("boom"), "Error writing RSS file: boom"),
        ],
    )
    def test_messages(self, action: MenuAction, error: Exception, expected: str) -> None:
        """Test each failure names what went wrong."""
        assert describe_error(action, error) == expected


class TestActionRunner:
    """Tests for ActionRunner."""

    def test_generate_writes_file(
        self, fetcher: Mock, entries: list[SeriesEntry], tmp_path: Path
    ) -> None:
        """Test generate writes the feed named after the S3 object."""
        runner = ActionRunner(fetcher, output_dir=tmp_path)

        message = runner.run(MenuAction.GENERATE, entries[0])

        assert message == (
            "RSS feed written to morning-show.rss (Morning Show by Radio Team, 3 episodes)"
        )
        fetcher.fetch.assert_called_once_with("guid-1")
        content = (tmp_path / "morning-show.rss").read_text(encoding="utf-8")
        assert content.startswith('<?xml version="1.0" encoding="UTF-8"?>')

    def test_upload(self, fetcher: Mock, entries: list[SeriesEntry]) -> None:
        """Test upload sends the feed to the entry's S3 path."""
        uploader = Mock()
        runner = ActionRunner(fetcher, uploader=uploader)

        message = runner.run(MenuAction.UPLOAD, entries[1])

        assert message.startswith("RSS feed uploaded to s3://feeds/evening/talk.rss")
        content, s3_path = uploader.upload_feed.call_args.args
        assert s3_path == "s3://feeds/evening/talk.rss"
        assert "<title>Morning Show</title>" in content

    def test_upload_without_uploader(
        self, fetcher: Mock, entries: list[SeriesEntry]
    ) -> None:
        """Test upload reports a missing S3 client without fetching."""
        message = ActionRunner(fetcher).run(MenuAction.UPLOAD, entries[0])

        assert message == "Upload unavailable: S3 client is not configured"
        fetcher.fetch.assert_not_called()

    def test_upload_failure(self, fetcher: Mock, entries: list[SeriesEntry]) -> None:
        """Test S3 errors become an error status."""
        uploader = Mock()
        uploader.upload_feed.side_effect = StorageError("failed to upload to S3: denied")

        message = ActionRunner(fetcher, uploader=uploader).run(MenuAction.UPLOAD, entries[0])

        assert message == "Error uploading to S3: failed to upload to S3: denied"

    def test_copy_url(self, fetcher: Mock, entries: list[SeriesEntry]) -> None:
        """Test the public URL goes to the clipboard."""
        clipboard = Mock()
        runner = ActionRunner(fetcher, s3_region="eu-north-1", clipboard=clipboard)

        message = runner.run(MenuAction.COPY_URL, entries[2])

        url = "https://feeds.s3.eu-north-1.amazonaws.com/late.rss"
        clipboard.assert_called_once_with(url)
        assert message == f"URL copied to clipboard: {url}"
        fetcher.fetch.assert_not_called()

    def test_copy_url_clipboard_failure(
        self, fetcher: Mock, entries: list[SeriesEntry]
    ) -> None:
        """Test clipboard errors become an error status."""
        clipboard = Mock(side_effect=ClipboardError("no clipboard available"))

        message = ActionRunner(fetcher, clipboard=clipboard).run(
            MenuAction.COPY_URL, entries[0]
        )

        assert message == "Error copying to clipboard: no clipboard available"

    def test_latest_date(self, fetcher: Mock, entries: list[SeriesEntry]) -> None:
        """Test the latest valid episode date is reported."""
        message = ActionRunner(fetcher).run(MenuAction.LATEST_DATE, entries[0])

        assert message == "Latest episode date: Mar 15, 2024"

    def test_fetch_failure(self, fetcher: Mock, entries: list[SeriesEntry]) -> None:
        """Test fetch errors are reported, not raised."""
        fetcher.fetch.side_effect = FetchError("API returned status code 404")

        message = ActionRunner(fetcher).run(MenuAction.LATEST_DATE, entries[0])

        assert message == "Error fetching series data: API returned status code 404"


class TestCopyToClipboard:
    """Tests for copy_to_clipboard."""

    def test_copies(self) -> None:
        """Test text is handed to pyperclip."""
        with patch("sumppi.ui.menu.pyperclip.copy") as mock_copy:
            copy_to_clipboard("https://example.com/feed.rss")

        mock_copy.assert_called_once_with("https://example.com/feed.rss")

    def test_missing_clipboard_raises(self) -> None:
        """Test pyperclip failures become ClipboardError."""
        with patch(
            "sumppi.ui.menu.pyperclip.copy",
            side_effect=pyperclip.PyperclipException("no copy mechanism"),
        ):
            with pytest.raises(ClipboardError, match="no copy mechanism"):
                copy_to_clipboard("x")


class TestRenderMenu:
    """Tests for the menu view."""

    def test_lists_series_with_cursor(self, entries: list[SeriesEntry]) -> None:
        """Test the selected row is marked."""
        state = MenuState(series=entries, cursor=1)

        text = render_text(state)

        assert "RSS Feed Generator" in text
        assert "Select a series to generate RSS feed:" in text
        assert "  morning-show.rss" in text
        assert "> talk.rss" in text
        assert "  late.rss" in text

    def test_help_mentions_upload_only_when_enabled(
        self, entries: list[SeriesEntry]
    ) -> None:
        """Test the upload key is advertised only with an uploader."""
        assert "u: upload to S3" not in render_text(MenuState(series=entries))
        assert "u: upload to S3" in render_text(
            MenuState(series=entries, upload_enabled=True)
        )

    def test_pending_message(self, entries: list[SeriesEntry]) -> None:
        """Test a pending action shows its progress message."""
        state = MenuState(series=entries, status="old news")
        state.handle_key("d")

        text = render_text(state)

        assert "Looking up latest episode..." in text
        assert "old news" not in text

    def test_status_message(self, entries: list[SeriesEntry]) -> None:
        """Test the last status is shown."""
        state = MenuState(series=entries, status="Latest episode date: Mar 15, 2024")

        assert "Latest episode date: Mar 15, 2024" in render_text(state)

    def test_empty(self) -> None:
        """Test the empty list message."""
        assert "No series configured." in render_text(MenuState(series=[]))


class TestRunMenu:
    """Tests for the menu loop."""

    def test_runs_selected_action_then_quits(self, entries: list[SeriesEntry]) -> None:
        """Test keys drive the loop until quit."""
        keys = iter(["j", "d", "q"])
        runner = Mock()
        runner.run.return_value = "Latest episode date: Mar 15, 2024"
        state = MenuState(series=entries)
        console = Console(file=io.StringIO(), width=120)

        run_menu(state, runner, console=console, theme=DARK_THEME, key_reader=lambda: next(keys))

        runner.run.assert_called_once_with(MenuAction.LATEST_DATE, entries[1])
        assert state.status == "Latest episode date: Mar 15, 2024"
        assert not state.loading

    def test_quit_immediately(self, entries: list[SeriesEntry]) -> None:
        """Test quitting without running anything."""
        runner = Mock()
        console = Console(file=io.StringIO(), width=120)

        run_menu(
            MenuState(series=entries),
            runner,
            console=console,
            theme=DARK_THEME,
            key_reader=lambda: "q",
        )

        runner.run.assert_not_called()
        assert "RSS Feed Generator" in console.file.getvalue()
