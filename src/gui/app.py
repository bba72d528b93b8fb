import tkinter as tk
from tkinter import ttk, filedialog, messagebox
from tkinter.scrolledtext import ScrolledText
import threading

from mpascan.config import ScanConfig, DEFAULT_MAX_HEADERS
from mpascan.exceptions import LoadError
from mpascan.loader import read_mpeg_file
from mpascan.report import TABLE_COLUMNS, header_row, format_header_details, format_stats
from mpascan.stream import MPAStream


def run_scan(path, cfg: ScanConfig, on_done, on_error):
    """Scan ``path`` and hand the stream to ``on_done``, or an error message to ``on_error``."""
    try:
        st = MPAStream(read_mpeg_file(path), cfg)
    except LoadError as e:
        on_error(str(e))
        return
    except Exception as e:
        on_error(f"scan failed: {e}")
        return
    on_done(st)


class App(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title("MPEG Audio Header Inspector")
        self.geometry("900x680")
        # ui state vars
        self.path_var = tk.StringVar()
        self.count_var = tk.IntVar(value=DEFAULT_MAX_HEADERS)
        self.same_var = tk.BooleanVar(value=False)
        self.id3_var = tk.BooleanVar(value=True)
        self.emph_var = tk.BooleanVar(value=False)

        self._build()

    def _setup_style(self):
        style = ttk.Style(self)
        try:
            style.theme_use("clam")
        except tk.TclError:
            pass
        style.configure("Title.TLabel", font=("Segoe UI", 16, "bold"))
        style.configure("Card.TFrame", padding=10)

    def _build(self):
        self._setup_style()

        header = ttk.Frame(self, style="Card.TFrame")
        header.pack(fill="x", padx=8, pady=(8, 0))
        ttk.Label(header, text="MPEG Audio Headers", style="Title.TLabel").pack(side="left")

        f = ttk.Frame(self, style="Card.TFrame")
        f.pack(fill="x", padx=8)
        pad = dict(padx=6, pady=4, sticky="w")
        ttk.Label(f, text="File:").grid(row=0, column=0, **pad)
        ttk.Entry(f, textvariable=self.path_var, width=70).grid(row=0, column=1, **pad)
        ttk.Button(f, text="Browse...", command=self._pick_file).grid(row=0, column=2, **pad)

        opts = ttk.Frame(f); opts.grid(row=1, column=0, columnspan=3, sticky="w", padx=6, pady=4)
        ttk.Label(opts, text="Headers (0 = all):").grid(row=0, column=0, padx=6)
        ttk.Spinbox(opts, from_=0, to=100000, width=8, textvariable=self.count_var).grid(row=0, column=1, padx=4)
        ttk.Checkbutton(opts, text="Same version/layer only", variable=self.same_var).grid(row=0, column=2, padx=8)
        ttk.Checkbutton(opts, text="Skip ID3v2 tag", variable=self.id3_var).grid(row=0, column=3, padx=8)
        ttk.Checkbutton(opts, text="Reject reserved emphasis", variable=self.emph_var).grid(row=0, column=4, padx=8)
        self.btn_scan = ttk.Button(f, text="Scan", command=self._scan)
        self.btn_scan.grid(row=2, column=0, **pad)

        self.table = ttk.Treeview(self, columns=TABLE_COLUMNS, show="headings", height=14)
        for col in TABLE_COLUMNS:
            self.table.heading(col, text=col)
            self.table.column(col, width=90 if col == "Location" else 60, anchor="e")
        self.table.pack(fill="both", expand=True, padx=8, pady=(4, 4))

        self.log = ScrolledText(self, height=12, font=("Consolas", 10), wrap="word")
        self.log.pack(fill="both", expand=False, padx=8, pady=(0, 6))

    def _pick_file(self):
        p = filedialog.askopenfilename(title="Select MPEG audio file",
                                       filetypes=[("MPEG audio", "*.mp3 *.mp2 *.mp1"), ("All files", "*.*")])
        if p: self.path_var.set(p)

    def _append_log(self, txt: str):
        self.log.insert(tk.END, txt + "\n"); self.log.see(tk.END)

    def _config(self) -> ScanConfig:
        count = int(self.count_var.get())
        return ScanConfig(
            max_headers=count if count > 0 else None,
            same_format_only=bool(self.same_var.get()),
            skip_id3=bool(self.id3_var.get()),
            reject_reserved_emphasis=bool(self.emph_var.get()),
        )

    def _scan(self):
        path = self.path_var.get().strip()
        if not path:
            messagebox.showwarning("Missing", "Please choose a file."); return
        try:
            cfg = self._config()
        except (tk.TclError, ValueError):
            messagebox.showwarning("Headers", "Header count must be a number."); return

        self.btn_scan.configure(state="disabled")
        self._append_log(f"Scanning {path}...")

        def task():
            run_scan(path, cfg,
                     lambda st: self.after(0, self._show, st),
                     lambda msg: self.after(0, self._scan_failed, msg))
        threading.Thread(target=task, daemon=True).start()

    def _scan_failed(self, msg: str):
        self.btn_scan.configure(state="normal")
        messagebox.showerror("Error", msg)

    def _show(self, st: MPAStream):
        self.btn_scan.configure(state="normal")
        self.table.delete(*self.table.get_children())
        self._append_log(f"Search started at {st.start_offset:08x}")
        self._append_log(format_header_details(st.first))
        for hdr in st.frames:
            self.table.insert("", tk.END, values=header_row(hdr))
        self._append_log(format_stats(st.stats()))


def main():
    app = App(); app.mainloop()

if __name__ == "__main__":
    main()
