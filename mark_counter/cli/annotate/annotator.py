import logging
import tkinter as tk
from gettext import gettext as _
from pathlib import Path
from tkinter import filedialog, messagebox, ttk

from PIL import Image, ImageTk

from mark_counter.core.errors import SinkError
from mark_counter.core.marking import EventType, MarkingSession, Section, Thickness
from mark_counter.core.marking.image_io import load_image_file
from mark_counter.core.report import FileSink, ReportFormat
from mark_counter.interfaces import GUIMarkingAdapter
from mark_counter.interfaces.gui_adapter import color_to_rgb
from mark_counter.utils.config import load_config

logger = logging.getLogger(__name__)

NO_THICKNESS = "-"
SECTION_LABELS = {
    Section.WHOLE: _("Whole"),
    Section.HALF_VERTICAL: _("0.5 Vertical"),
    Section.HALF_HORIZONTAL: _("0.5 Horizontal"),
}


class MarkCounterApp(ttk.Frame):
    def __init__(
        self,
        master,
        session: MarkingSession,
        cfg,
        report_path=None,
        report_format=ReportFormat.GENERAL,
    ):
        super().__init__(master)
        self.master = master
        self.session = session
        self.cfg = cfg
        self.report_path = report_path
        self.report_format = report_format
        self.adapter = GUIMarkingAdapter(
            session,
            update_image_callback=self._update_image,
            mark_radius=int(cfg.marks.radius),
            border=int(cfg.marks.border),
        )
        self._photo = None
        self._drag_enabled = tk.BooleanVar(value=False)
        self._syncing_tools = False

        self._add_widgets()
        self.pack(fill="both", expand=True)

        session.events.on(EventType.MODE_CHANGED, lambda e: self._sync_controls())
        session.events.on(
            EventType.SELECTION_CHANGED, lambda e: self._sync_controls()
        )
        session.events.on(
            EventType.TOOL_ATTRIBUTES_CHANGED, lambda e: self._sync_controls()
        )
        self._sync_controls()

    def _add_widgets(self):
        toolbar = ttk.Frame(self)
        toolbar.pack(side="top", fill="x", padx=4, pady=4)

        for text, command in (
            (_("Open image"), self._open_image),
            (_("Zoom In"), self.session.zoom_in),
            (_("Zoom Out"), self.session.zoom_out),
        ):
            ttk.Button(toolbar, text=text, command=command).pack(side="left")
        ttk.Checkbutton(
            toolbar, text=_("Drag"), variable=self._drag_enabled
        ).pack(side="left", padx=4)

        self.add_button = ttk.Button(
            toolbar, text=_("Add Point"), command=self._toggle_add_mode
        )
        self.add_button.pack(side="left", padx=4)

        self.color_var = tk.StringVar()
        self.color_menu = ttk.Combobox(
            toolbar, textvariable=self.color_var, state="readonly", width=12
        )
        self.color_menu.pack(side="left")
        self.color_menu.bind("<<ComboboxSelected>>", self._on_color_selected)

        self.thickness_var = tk.StringVar()
        ttk.Combobox(
            toolbar,
            textvariable=self.thickness_var,
            state="readonly",
            width=5,
            values=[NO_THICKNESS] + [str(t.value) for t in Thickness],
        ).pack(side="left")
        self.thickness_var.trace_add("write", self._on_thickness_selected)

        self.section_var = tk.StringVar()
        ttk.Combobox(
            toolbar,
            textvariable=self.section_var,
            state="readonly",
            width=14,
            values=list(SECTION_LABELS.values()),
        ).pack(side="left")
        self.section_var.trace_add("write", self._on_section_selected)

        self.delete_button = ttk.Button(
            toolbar, text=_("Delete Selected"), command=self.session.delete_selected
        )
        self.delete_button.pack(side="left", padx=4)
        ttk.Button(
            toolbar, text=_("Delete All"), command=self.session.clear_marks
        ).pack(side="left")

        body = ttk.Frame(self)
        body.pack(side="top", fill="both", expand=True)

        self.canvas = tk.Canvas(body, background="#1f2937", highlightthickness=0)
        xscroll = ttk.Scrollbar(body, orient="horizontal", command=self.canvas.xview)
        yscroll = ttk.Scrollbar(body, orient="vertical", command=self.canvas.yview)
        self.canvas.configure(xscrollcommand=xscroll.set, yscrollcommand=yscroll.set)
        yscroll.pack(side="right", fill="y")
        xscroll.pack(side="bottom", fill="x")
        self.canvas.pack(side="left", fill="both", expand=True)
        self.canvas.bind("<ButtonPress-1>", self._on_press)
        self.canvas.bind("<B1-Motion>", self._on_drag)

        panel = ttk.Frame(self, padding=8)
        panel.pack(side="right", fill="y", before=body)
        ttk.Label(panel, text=_("Color Labels")).pack(anchor="w")
        self.label_vars = {}
        for definition in self.session.registry:
            row = ttk.Frame(panel)
            row.pack(fill="x", pady=2)
            swatch = "#%02x%02x%02x" % color_to_rgb(definition.color)
            tk.Label(row, width=2, background=swatch).pack(side="left")
            var = tk.StringVar(value=definition.label)
            var.trace_add("write", self._label_changed_callback(definition.color, var))
            ttk.Entry(row, textvariable=var, width=18).pack(side="left", padx=4)
            self.label_vars[definition.color] = var
        ttk.Button(
            panel, text=_("Generate Report"), command=self._export_report
        ).pack(fill="x", pady=8)

    def _label_changed_callback(self, color, var):
        def callback(*args):
            self.session.set_color_label(color, var.get())
            self._refresh_color_menu()

        return callback

    def _refresh_color_menu(self):
        labels = [d.label for d in self.session.registry]
        self.color_menu.configure(values=labels)
        current = self.session.selection.tool_attributes.color
        self.color_var.set(self.session.registry.label_for(current))

    def _sync_controls(self):
        """Show the tool attributes of the selected mark or the create defaults."""
        attrs = self.session.selection.tool_attributes
        self._syncing_tools = True
        try:
            self._refresh_color_menu()
            self.thickness_var.set(
                str(attrs.thickness.value) if attrs.thickness else NO_THICKNESS
            )
            self.section_var.set(SECTION_LABELS[attrs.section])
        finally:
            self._syncing_tools = False
        adding = self.session.selection.is_adding
        self.add_button.configure(
            text=_("Adding Points...") if adding else _("Add Point")
        )
        self.delete_button.state(
            ["!disabled"] if self.session.selection.can_delete else ["disabled"]
        )

    def _set_tool(self, **changes):
        if self._syncing_tools:
            return
        self.session.set_tool_attributes(**changes)

    def _on_color_selected(self, event=None):
        index = self.color_menu.current()
        if index >= 0:
            self._set_tool(color=self.session.registry.colors[index])

    def _on_thickness_selected(self, *args):
        value = self.thickness_var.get()
        if value:
            self._set_tool(thickness=None if value == NO_THICKNESS else int(value))

    def _on_section_selected(self, *args):
        label = self.section_var.get()
        for section, section_label in SECTION_LABELS.items():
            if section_label == label:
                self._set_tool(section=section)

    def _toggle_add_mode(self):
        self.session.selection.toggle_add_mode()

    def _open_image(self):
        path = filedialog.askopenfilename(
            filetypes=[(_("Images"), "*.png *.jpg *.jpeg")]
        )
        if path:
            self.open_image(Path(path))

    def open_image(self, path: Path):
        try:
            image = load_image_file(path)
        except ValueError as e:
            logger.warning(str(e))
            messagebox.showerror(_("Could not open image"), str(e))
            return
        self.session.load_image(image, str(path))
        self.master.title(f"mark_counter - {path.name}")

    def _on_press(self, event):
        if self._drag_enabled.get() and not self.session.selection.is_adding:
            self.canvas.scan_mark(event.x, event.y)
            return
        if self.session.image is None:
            return
        # canvas coordinates, the image is drawn at the canvas origin
        x = self.canvas.canvasx(event.x)
        y = self.canvas.canvasy(event.y)
        self.adapter.click(x, y)

    def _on_drag(self, event):
        if self._drag_enabled.get() and not self.session.selection.is_adding:
            self.canvas.scan_dragto(event.x, event.y, gain=1)

    def _update_image(self):
        vis = self.adapter.get_visualization()
        self.canvas.delete("all")
        if vis is None:
            return
        self._photo = ImageTk.PhotoImage(Image.fromarray(vis))
        self.canvas.create_image(0, 0, anchor="nw", image=self._photo)
        self.canvas.configure(scrollregion=(0, 0, vis.shape[1], vis.shape[0]))

    def _export_report(self):
        initial = self.report_path or Path(self.cfg.report.filename)
        path = filedialog.asksaveasfilename(
            initialfile=initial.name,
            initialdir=str(initial.parent.resolve()),
            defaultextension=".csv",
            filetypes=[(_("CSV files"), "*.csv")],
        )
        if not path:
            return
        try:
            self.session.export_report(
                FileSink(path),
                fmt=self.report_format,
                escape=bool(self.cfg.report.escape),
            )
        except SinkError as e:
            logger.error(str(e))
            messagebox.showerror(_("Export failed"), str(e))


def handle(args):
    cfg = load_config()
    if args.reduced:
        report_format = ReportFormat.REDUCED
    else:
        report_format = ReportFormat(cfg.report.format)
    session = MarkingSession.from_config(cfg)

    root = tk.Tk()
    root.title("mark_counter")
    root.geometry("1200x800")
    app = MarkCounterApp(
        root, session, cfg, report_path=args.output, report_format=report_format
    )
    if args.image is not None:
        app.open_image(args.image)
    root.mainloop()
