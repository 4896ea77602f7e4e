import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer

from thoth.config import ThothConfig, load_config
from thoth.preview import render_markdown
from thoth.theme import create_thoth_theme
from thoth.ui import PreviewPane

logger = logging.getLogger(__name__)


class ThothApp(App):
    TITLE = "Thoth Preview"

    BINDINGS = [
        Binding("q,ctrl+q", "quit", "Quit"),
        Binding("f2", "toggle_footer", "Toggle Help"),
    ]

    def __init__(self, source: str, title: str, config: ThothConfig):
        self.source = source
        self.note_title = title
        self.config = config
        self.footer_visible = False
        super().__init__()

    def compose(self) -> ComposeResult:
        yield PreviewPane(self.source, self.note_title, config=self.config)
        footer = Footer()
        footer.display = False
        yield footer

    def on_mount(self) -> None:
        self.register_theme(create_thoth_theme())
        self.theme = "thoth"
        self.query_one(PreviewPane).focus()

    def action_toggle_footer(self) -> None:
        """Toggle the visibility of the footer."""
        footer = self.query_one(Footer)
        self.footer_visible = not self.footer_visible
        footer.display = self.footer_visible


def print_preview(source: str, width: int, config: ThothConfig, console: Console) -> None:
    """Write the rendered preview to ``console`` without starting the TUI."""
    preview = render_markdown(source, width, config=config)
    for line in preview.lines:
        console.print(line.to_rich(), soft_wrap=False, overflow="fold")


def main(argv=None):
    """Main entry point for the thoth-preview command."""
    parser = argparse.ArgumentParser(description="Preview a markdown note in the terminal")
    parser.add_argument("file", help="Markdown file to preview")
    parser.add_argument("--width", type=int, default=None, help="Preview width in columns")
    parser.add_argument(
        "--print", dest="print_only", action="store_true", help="Print the preview and exit"
    )
    parser.add_argument("--theme", default=None, help="Pygments style for code blocks")
    parser.add_argument(
        "--logging", action="store_true", default=None, help="Enable logging"
    )
    args = parser.parse_args(argv)

    if args.logging:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            filename="thoth_preview.log",
            filemode="a",  # append mode
        )
        logging.getLogger("thoth.preview").setLevel(logging.DEBUG)

    # Load configuration from ~/.config/thoth/init.py
    config, config_error = load_config()
    if config_error:
        logger.warning(config_error)

    # Command-line arguments override config
    if args.width is not None:
        config.width = args.width
    if args.theme is not None:
        config.code_theme = args.theme

    path = Path(args.file)
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"thoth-preview: cannot read {path}: {e}", file=sys.stderr)
        return 1

    if args.print_only:
        console = Console()
        width = config.width if config.width is not None else console.width
        print_preview(source, width, config, console)
        return 0

    app = ThothApp(source, path.stem, config)

    # Show config error if any (as a notification once app starts)
    if config_error:
        app.call_later(
            lambda: app.notify(
                f"Config error: {config_error}", severity="warning", timeout=10
            )
        )

    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
