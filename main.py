"""Entry point: opens the picker window with the saved options."""

import logging
import os

from picker_window import PickerWindow
from selection import PickerOutput
from settings import load_options

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Root logger at INFO, or the level named by DATE_PICKER_LOG_LEVEL."""
    level_name = os.getenv("DATE_PICKER_LOG_LEVEL", "").upper()
    level = getattr(logging, level_name) if level_name in (
        "DEBUG", "INFO", "WARNING", "ERROR") else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)


def main() -> None:
    configure_logging()

    def on_confirm(output: PickerOutput) -> None:
        print(output.to_dict())

    window = PickerWindow(load_options(), on_confirm=on_confirm)
    # The picker still schedules on root after on_cancel returns
    window.picker.on_cancel = lambda: window.root.after(0, window.root.destroy)
    window.root.title("Pick a date")
    window.root.mainloop()


if __name__ == "__main__":
    main()
