# app.py
# CustomTkinter GUI for the phrase generator (dark theme).
# - Load a corpus file or folder; the chain is built on a background thread.
# - Generate phrases with adjustable prefix length, max length and count.
# - Results & event log panes.

from __future__ import annotations
import threading
from typing import Optional

import tkinter.filedialog as fd
import tkinter.messagebox as mb
import customtkinter as ctk

# Project imports (pip install -e . or PYTHONPATH=src)
from headlines import Engine, ChainError, ChainStats
from headlines import config as CFG


# -------------------- small helpers --------------------

def shorten_path(p: str, max_chars: int = 60) -> str:
    """Shorten long paths neatly for labels."""
    if len(p) <= max_chars:
        return p
    keep = max_chars // 2 - 3
    return p[:keep] + "..." + p[-keep:]


def parse_int(text: str, default: int, lo: int, hi: int) -> int:
    """Parse an entry's text as an int clamped to [lo, hi]; fall back to default."""
    try:
        v = int(text.strip())
    except ValueError:
        return default
    return max(lo, min(hi, v))


# -------------------- main app --------------------

class HeadlinesApp(ctk.CTk):
    """Dark-themed GUI that builds a chain from a corpus and generates phrases."""

    def __init__(self) -> None:
        super().__init__()

        # Theme
        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        # Window
        self.title("Headlines Generator")
        self.geometry("900x650")
        self.minsize(820, 560)

        # State
        self._engine = Engine()
        self._building_thread: Optional[threading.Thread] = None
        self._current_source_label: str = "No corpus selected"

        # Fonts
        self.font_title = ctk.CTkFont(size=18, weight="bold")
        self.font_label = ctk.CTkFont(size=13)
        self.font_mono = ctk.CTkFont(family="Cascadia Mono, Menlo, Consolas, Courier New", size=13)

        # Layout grid
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)  # results
        self.grid_rowconfigure(4, weight=1)  # log

        # Build UI
        self._build_header()
        self._build_source_bar()
        self._build_controls()
        self._build_results()
        self._build_log()

        self._set_status("Ready")
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # --------- UI sections ---------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, corner_radius=10)
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        header.grid_columnconfigure(0, weight=1)

        title = ctk.CTkLabel(header, text="Headlines Generator", font=self.font_title)
        title.grid(row=0, column=0, sticky="w", padx=12, pady=10)

    def _build_source_bar(self) -> None:
        bar = ctk.CTkFrame(self, corner_radius=10)
        bar.grid(row=1, column=0, sticky="ew", padx=12, pady=6)
        bar.grid_columnconfigure(2, weight=1)

        btn_file = ctk.CTkButton(bar, text="Choose File", command=self._choose_file)
        btn_file.grid(row=0, column=0, padx=(12, 6), pady=10)

        btn_folder = ctk.CTkButton(bar, text="Choose Folder", command=self._choose_folder)
        btn_folder.grid(row=0, column=1, padx=(0, 6), pady=10, sticky="w")

        self.lbl_source = ctk.CTkLabel(bar, text=self._current_source_label, anchor="w", font=self.font_label)
        self.lbl_source.grid(row=0, column=2, sticky="ew", padx=(6, 6), pady=10)

        self.progress = ctk.CTkProgressBar(bar, mode="indeterminate", determinate_speed=1.2)
        self.progress.grid(row=0, column=3, sticky="e", padx=(0, 6), pady=10)

        self.lbl_status = ctk.CTkLabel(bar, text="Status: —", anchor="e")
        self.lbl_status.grid(row=0, column=4, sticky="e", padx=12, pady=10)

    def _build_controls(self) -> None:
        box = ctk.CTkFrame(self, corner_radius=10)
        box.grid(row=2, column=0, sticky="ew", padx=12, pady=(6, 6))

        ctk.CTkLabel(box, text="Prefix length:", font=self.font_label).grid(row=0, column=0, padx=(12, 4), pady=10)
        self.entry_prefix = ctk.CTkEntry(box, width=56)
        self.entry_prefix.insert(0, str(CFG.PREFIX_LENGTH))
        self.entry_prefix.grid(row=0, column=1, padx=(0, 12), pady=10)

        ctk.CTkLabel(box, text="Max tokens:", font=self.font_label).grid(row=0, column=2, padx=(0, 4), pady=10)
        self.entry_max = ctk.CTkEntry(box, width=56)
        self.entry_max.insert(0, str(CFG.MAX_LENGTH))
        self.entry_max.grid(row=0, column=3, padx=(0, 12), pady=10)

        ctk.CTkLabel(box, text="Phrases:", font=self.font_label).grid(row=0, column=4, padx=(0, 4), pady=10)
        self.entry_count = ctk.CTkEntry(box, width=56)
        self.entry_count.insert(0, "5")
        self.entry_count.grid(row=0, column=5, padx=(0, 12), pady=10)

        self.btn_generate = ctk.CTkButton(box, text="Generate", command=self._do_generate, state="disabled")
        self.btn_generate.grid(row=0, column=6, padx=(6, 12), pady=10)

    def _build_results(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=3, column=0, sticky="nsew", padx=12, pady=(6, 6))
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(frame, text="Phrases", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 2)
        )

        self.txt_results = ctk.CTkTextbox(frame, wrap="word", font=self.font_mono)
        self.txt_results.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self.txt_results.configure(state="disabled")
        self._set_results("(no phrases yet — load a corpus and press Generate)")

    def _build_log(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=4, column=0, sticky="nsew", padx=12, pady=(6, 12))
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(frame, text="Event log", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 2)
        )

        self.txt_log = ctk.CTkTextbox(frame, height=110, wrap="word", font=ctk.CTkFont(size=12))
        self.txt_log.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self._log("GUI ready. Choose a corpus file or folder to begin.")

    # --------- source selection ---------

    def _choose_file(self) -> None:
        path = fd.askopenfilename(
            title="Choose corpus file",
            filetypes=[("Text files", "*.txt"), ("All files", "*.*")]
        )
        if path:
            self._start_building(path)

    def _choose_folder(self) -> None:
        path = fd.askdirectory(title="Choose corpus folder")
        if path:
            self._start_building(path)

    # --------- build pipeline (threaded) ---------

    def _start_building(self, source: str) -> None:
        # prevent re-entrancy
        if self._building_thread and self._building_thread.is_alive():
            mb.showinfo("Building", "A chain is already being built. Please wait.")
            return

        prefix_length = parse_int(self.entry_prefix.get(), CFG.PREFIX_LENGTH, 1, 10)
        self._current_source_label = shorten_path(source)
        self.lbl_source.configure(text=self._current_source_label)
        self._set_status(f"Building chain (prefix length {prefix_length})…")
        self.btn_generate.configure(state="disabled")
        self.progress.start()

        # The engine only exposes the new chain once build() has returned.
        self._building_thread = threading.Thread(
            target=self._build_worker, args=(source, prefix_length), daemon=True
        )
        self._building_thread.start()

    def _build_worker(self, source: str, prefix_length: int) -> None:
        try:
            stats = self._engine.build(source, prefix_length=prefix_length, seed=CFG.SEED)
        except (OSError, ValueError, RuntimeError) as exc:
            self.after(0, lambda e=exc: self._on_build_error(e))
            return
        self.after(0, lambda: self._on_build_ok(stats))

    def _on_build_ok(self, stats: ChainStats) -> None:
        self.progress.stop()
        self.btn_generate.configure(state="normal")
        self._set_status(f"{stats.tokens:,} tokens, {stats.states:,} states.")
        self._log(
            f"Chain ready: prefix_length={stats.prefix_length} tokens={stats.tokens} "
            f"starting_prefixes={stats.starting_prefixes} transitions={stats.transitions}"
        )

    def _on_build_error(self, exc: Exception) -> None:
        self.progress.stop()
        # a failed rebuild leaves the previous chain in place
        if self._engine.ready:
            self.btn_generate.configure(state="normal")
        self._set_status("Error while building chain.")
        self._log(f"ERROR: {exc!r}")
        mb.showerror("Build error", "Failed to build the chain.\nSee event log for details.")

    # --------- generation ---------

    def _do_generate(self) -> None:
        if not self._engine.ready:
            self._set_results("error: please load a corpus before generating.")
            return
        prefix_length = self._engine.stats().prefix_length
        max_length = parse_int(self.entry_max.get(), CFG.MAX_LENGTH, prefix_length, CFG.MAX_LENGTH_LIMIT)
        count = parse_int(self.entry_count.get(), 5, 1, CFG.MAX_COUNT)

        try:
            phrases = self._engine.generate(max_length, count=count)
        except ChainError as exc:
            self._set_results(f"error while generating: {exc}")
            self._log(f"ERROR in generate: {exc!r}")
            return

        self._set_results("\n".join(f"{i:>2}. {p.text}" for i, p in enumerate(phrases, 1)))
        self._log(f"Generated {len(phrases)} phrase(s), max {max_length} tokens.")

    # --------- misc UI helpers ---------

    def _set_status(self, text: str) -> None:
        self.lbl_status.configure(text=f"Status: {text}")

    def _set_results(self, text: str) -> None:
        self.txt_results.configure(state="normal")
        self.txt_results.delete("0.0", "end")
        if text:
            self.txt_results.insert("end", text)
        self.txt_results.configure(state="disabled")

    def _log(self, msg: str) -> None:
        self.txt_log.insert("end", msg + "\n")
        self.txt_log.see("end")

    # --------- lifecycle ---------

    def _on_close(self) -> None:
        self._engine.shutdown()
        self.destroy()


if __name__ == "__main__":
    app = HeadlinesApp()
    app.mainloop()
