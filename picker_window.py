"""Single-month date picker window (tkinter) driven by a DatePicker."""

import calendar as _cal
import logging
import tkinter as tk
from typing import Callable

from calendar_logic import GRID_COLS, GRID_ROWS, grid_rows, week_numbers
from picker import DatePicker
from scheduler import TkScheduler
from selection import Mode, PickerOutput

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
OTHER_FG = "#AAAAAA"
DISABLED_FG = "#DDDDDD"
WN_FG = "#888888"


class PickerWindow:
    """Header with month navigation, a 6x7 day grid and a footer."""

    def __init__(
        self,
        options: dict | None = None,
        root: tk.Misc | None = None,
        on_confirm: Callable[[PickerOutput], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self.root = root if root is not None else tk.Tk()
        self.frame = tk.Frame(self.root, bg=GRID_BG, padx=8, pady=8)
        self.frame.pack(fill="both", expand=True)

        self.picker = DatePicker(
            options,
            scheduler=TkScheduler(self.root),
            on_confirm=on_confirm,
            on_cancel=on_cancel,
            on_change=lambda _picker: self.render(),
        )

        self._build_header()
        self._build_year_chooser()
        self._build_grid()
        self._build_footer()
        self.render()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_header(self) -> None:
        self.header = tk.Frame(self.frame, bg=HEADER_BG)
        self.header.pack(fill="x")
        tk.Button(self.header, text="‹", width=3, relief="flat",
                  command=self.picker.prev).pack(side="left")
        self.title = tk.Button(self.header, relief="flat", bg=HEADER_BG,
                               command=self.picker.open_year_chooser)
        self.title.pack(side="left", expand=True)
        tk.Button(self.header, text="›", width=3, relief="flat",
                  command=self.picker.next).pack(side="right")

    def _build_year_chooser(self) -> None:
        self.year_frame = tk.Frame(self.frame, bg=GRID_BG, pady=12)
        self.year_var = tk.StringVar()
        self.year_spin = tk.Spinbox(self.year_frame, textvariable=self.year_var,
                                    width=6, justify="center")
        self.year_spin.pack(side="left", padx=4)
        tk.Button(self.year_frame, text="OK", width=6,
                  command=self._on_year_chosen).pack(side="left", padx=4)

    def _build_grid(self) -> None:
        self.grid_frame = tk.Frame(self.frame, bg=GRID_BG)
        first = self.picker.options["first_weekday"]
        tk.Label(self.grid_frame, text="Wk", bg=GRID_BG, fg=WN_FG, width=3).grid(row=0, column=0)
        for col in range(GRID_COLS):
            abbr = _cal.day_abbr[(first + col) % 7]
            tk.Label(self.grid_frame, text=abbr[:2], bg=GRID_BG, width=3).grid(
                row=0, column=col + 1)

        self.week_labels: list[tk.Label] = []
        self.day_buttons: list[list[tk.Button]] = []
        for r in range(GRID_ROWS):
            wk = tk.Label(self.grid_frame, bg=GRID_BG, fg=WN_FG, width=3)
            wk.grid(row=r + 1, column=0)
            self.week_labels.append(wk)
            row_buttons = []
            for c in range(GRID_COLS):
                btn = tk.Button(self.grid_frame, width=3, relief="flat",
                                command=lambda r=r, c=c: self._on_day(r, c))
                btn.grid(row=r + 1, column=c + 1, padx=1, pady=1)
                row_buttons.append(btn)
            self.day_buttons.append(row_buttons)

    def _build_footer(self) -> None:
        footer = tk.Frame(self.frame, bg=GRID_BG)
        footer.pack(side="bottom", fill="x", pady=(6, 0))
        tk.Button(footer, text="Today", command=self.picker.go_today).pack(side="left")
        tk.Button(footer, text="Cancel", command=self.picker.cancel).pack(side="right")
        self.ok_button = tk.Button(footer, text="OK", command=self.picker.confirm)
        self.ok_button.pack(side="right", padx=4)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self) -> None:
        shown = self.picker.displayed
        self.title.config(text=f"{_cal.month_name[shown.month + 1]} {shown.year}")

        if self.picker.phase == "year":
            self.grid_frame.pack_forget()
            years = self.picker.year_choices()
            self.year_spin.config(from_=years[0], to=years[-1])
            self.year_var.set(str(shown.year))
            self.year_frame.pack()
            return
        self.year_frame.pack_forget()
        self.grid_frame.pack()

        cells = self.picker.grid
        for label, wk in zip(self.week_labels, week_numbers(cells)):
            label.config(text=wk)
        for buttons, row in zip(self.day_buttons, grid_rows(cells)):
            for btn, cell in zip(buttons, row):
                if cell is None:
                    btn.config(text="", state="disabled", bg=GRID_BG)
                    continue
                selected = self.picker.is_selected(cell.as_date())
                if cell.disabled:
                    fg = DISABLED_FG
                elif selected:
                    fg = "white"
                elif cell.is_current_month:
                    fg = "black"
                else:
                    fg = OTHER_FG
                btn.config(
                    text=str(cell.date),
                    state="disabled" if cell.disabled else "normal",
                    fg=fg,
                    disabledforeground=DISABLED_FG,
                    bg=ACCENT if selected else GRID_BG,
                )

        multi = self.picker.mode is Mode.MULTI
        self.ok_button.config(state="normal" if multi else "disabled")

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def _on_day(self, row: int, col: int) -> None:
        self.picker.tap(self.picker.grid[row * GRID_COLS + col])

    def _on_year_chosen(self) -> None:
        try:
            year = int(self.year_var.get())
        except ValueError:
            logger.warning("Ignoring year %r", self.year_var.get())
            return
        self.picker.choose_year(year)
