# -------------------------------------------------------------------------------------------------
# gui code sections
# -------------------------------------------------------------------------------------------------
# constants and defaults
# gui controller
# initialization
# login gate
# window utilities
# layout and panels
# form helpers
# event workflows
# participant registration
# reports
# theme
# upcoming event notifications
# view refresh
# run loop
# entrypoint
# -------------------------------------------------------------------------------------------------

import queue
import sys
import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox

import ttkbootstrap as ttk
from ttkbootstrap.constants import BOTH, LEFT, RIGHT, W, X

from unievents import reports, settings, utils
from unievents.app import authenticate, open_store
from unievents.config import Config, load_config
from unievents.errors import DomainError
from unievents.event import Event, EventDraft
from unievents.notifications import UpcomingEventNotifier
from unievents.participant import ParticipantType
from unievents.pdf import generate_report_pdf
from unievents.store import ID_CONFLICT, Conflict, EventStore, Rejected

# constants and defaults -------------------------------------------------------------------
# centralizes user interface labels and theme names so both stay consistent
LIGHT_THEME = "flatly"
DARK_THEME = "darkly"
EVENT_COLUMNS = {
    "event_id": ("Event ID", 90),
    "name": ("Name", 200),
    "date_time": ("Date & Time", 140),
    "venue": ("Venue", 140),
    "organizer": ("Organizer", 140),
    "category": ("Category", 110),
    "participants": ("Participants", 90),
}
PARTICIPANT_COLUMNS = {
    "participant_id": ("Participant ID", 110),
    "full_name": ("Full Name", 220),
    "type": ("Type", 90),
}
POLL_INTERVAL_MS = 500


def conflict_question(conflict: Conflict) -> tuple[str, str]:
    """Build the title and message asking whether to accept a replacement id or name.

    Args:
        conflict: Collision reported by the store.

    Returns:
        tuple[str, str]: Dialog title and message.
    """
    candidate = conflict.candidates[0]
    if conflict.kind == ID_CONFLICT:
        return (
            "Duplicate Event ID",
            f"Event ID {conflict.existing.event_id} is already used by "
            f'"{conflict.existing.name}".\n\nAuto-generate new ID {candidate}?',
        )
    return (
        "Duplicate Event Name",
        f'An event named "{conflict.existing.name}" already exists.\n\n'
        f'Auto-rename to "{candidate}"?',
    )


def notification_message(event: Event) -> str:
    return (
        f"Upcoming event: {event.name}\n"
        f"{event.date_time_label} @ {event.venue}"
    )


# gui controller ---------------------------------------------------------------------------
# encapsulates the window state, widgets, and workflows so user interface logic stays central
class UniEventsGUI:
    """GUI controller for managing university events."""

    # initialization ---------------------------------------------------------------------------
    # establishes window state and styles so startup is predictable
    def __init__(
        self,
        config: Config | None = None,
        store: EventStore | None = None,
        require_login: bool = True,
    ):
        """Initialize GUI state, resources, and layout.

        Args:
            config: Session configuration; defaults are used when omitted.
            store: Preloaded event store; opened from the config when omitted.
            require_login: Ask for credentials before showing the main window.
        """
        self.config = config or Config()
        self.dark_theme = settings.load_theme_preference(self.config.settings_path)
        self.root = ttk.Window(
            themename=DARK_THEME if self.dark_theme else LIGHT_THEME
        )
        self.root.title("University Event Manager")
        self.root.geometry("1300x760")
        self.root.minsize(1000, 600)

        self.store = store
        self.notifier: UpcomingEventNotifier | None = None
        self.notification_queue: queue.Queue[Event] = queue.Queue()
        self.selected_event_id: str | None = None
        self.is_authenticated = not require_login

        self.event_id_variable = tk.StringVar()
        self.name_variable = tk.StringVar()
        self.date_variable = tk.StringVar()
        self.time_variable = tk.StringVar()
        self.venue_variable = tk.StringVar()
        self.organizer_variable = tk.StringVar()
        self.category_variable = tk.StringVar()
        self.status_variable = tk.StringVar(value="Ready")

        style = ttk.Style()
        # remove dotted focus outlines that distract in a dense form
        self.root.option_add("*TButton.takefocus", "0")
        style.configure("TLabel", font=("Segoe UI", 10))
        style.configure("TButton", font=("Segoe UI", 10))
        style.configure("Treeview", rowheight=28)
        style.configure("Treeview.Heading", font=("Segoe UI", 9, "bold"))
        style.configure("Status.TLabel", font=("Segoe UI", 9))

        # keep window close wired for clean shutdown
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

        if require_login:
            self.root.withdraw()
            self._login_dialog()
            if not self.is_authenticated:
                return
            self.root.deiconify()

        if self.store is None:
            try:
                self.store = open_store(self.config)
            except DomainError as exc:
                messagebox.showerror("Error", f"Failed to open event data: {exc}")
                self.root.destroy()
                self.is_authenticated = False
                return

        self._build_layout()
        self.name_variable.trace_add("write", self._on_name_changed)
        self._clear_form()
        self._refresh_event_table()
        self._start_notifier()

    # login gate -------------------------------------------------------------------------------
    # blocks the main window until the coordinator credentials are entered
    def _login_dialog(self) -> None:
        """Show the login dialog and wait until it closes."""
        dialog = tk.Toplevel(self.root)
        dialog.title("Login")
        dialog.resizable(False, False)

        username_variable = tk.StringVar()
        password_variable = tk.StringVar()

        ttk.Label(dialog, text="Username").grid(row=0, column=0, sticky=W, padx=8, pady=6)
        username_entry = ttk.Entry(dialog, textvariable=username_variable, width=28)
        username_entry.grid(row=0, column=1, padx=8, pady=6)
        ttk.Label(dialog, text="Password").grid(row=1, column=0, sticky=W, padx=8, pady=6)
        password_entry = ttk.Entry(
            dialog, textvariable=password_variable, show="*", width=28
        )
        password_entry.grid(row=1, column=1, padx=8, pady=6)

        def on_login(*_) -> None:
            if authenticate(username_variable.get(), password_variable.get(), self.config):
                self.is_authenticated = True
                dialog.destroy()
                return
            messagebox.showerror("Login Failed", "Invalid credentials.")
            password_variable.set("")
            password_entry.focus_set()

        def on_cancel() -> None:
            dialog.destroy()
            self.root.destroy()

        button_row = ttk.Frame(dialog)
        button_row.grid(row=2, column=0, columnspan=2, pady=8)
        ttk.Button(button_row, text="Cancel", command=on_cancel).pack(side=RIGHT, padx=4)
        ttk.Button(
            button_row, text="Login", bootstyle="primary", command=on_login
        ).pack(side=RIGHT, padx=4)

        dialog.bind("<Return>", on_login)
        dialog.protocol("WM_DELETE_WINDOW", on_cancel)
        username_entry.focus_set()
        self._center_dialog(dialog)
        dialog.grab_set()
        self.root.wait_window(dialog)

    # window utilities -------------------------------------------------------------------------
    # keeps dialog placement consistent
    def _prepare_dialog(self, dialog: tk.Toplevel, title: str) -> None:
        dialog.title(title)
        dialog.transient(self.root)
        dialog.resizable(False, False)

    def _center_dialog(self, dialog: tk.Toplevel) -> None:
        """Size the dialog to its content and center it on screen."""
        dialog.update_idletasks()
        width = dialog.winfo_reqwidth()
        height = dialog.winfo_reqheight()
        x = max((dialog.winfo_screenwidth() - width) // 2, 0)
        y = max((dialog.winfo_screenheight() - height) // 2, 0)
        dialog.geometry(f"{width}x{height}+{x}+{y}")

    def _on_close(self) -> None:
        if self.notifier is not None:
            self.notifier.stop(timeout=1)
        self.root.destroy()

    # layout and panels ------------------------------------------------------------------------
    # constructs the main window layout so panel changes stay localized
    def _build_layout(self) -> None:
        """Build the top-level layout containers."""
        container = ttk.Frame(self.root, padding=10)
        container.pack(fill=BOTH, expand=True)
        container.columnconfigure(0, weight=0)
        container.columnconfigure(1, weight=1)
        container.rowconfigure(0, weight=1)

        self.form_panel = ttk.Labelframe(container, text="Event Details", padding=10)
        self.form_panel.grid(row=0, column=0, sticky="nsew", padx=(0, 10))
        self._build_form_panel(self.form_panel)

        data_column = ttk.Frame(container)
        data_column.grid(row=0, column=1, sticky="nsew")
        data_column.columnconfigure(0, weight=1)
        data_column.rowconfigure(0, weight=3)
        data_column.rowconfigure(1, weight=2)

        events_panel = ttk.Labelframe(data_column, text="Events", padding=10)
        events_panel.grid(row=0, column=0, sticky="nsew", pady=(0, 10))
        self.event_tree = self._build_tree(events_panel, EVENT_COLUMNS)
        self.event_tree.bind("<<TreeviewSelect>>", self._on_event_selected)

        participants_panel = ttk.Labelframe(data_column, text="Participants", padding=10)
        participants_panel.grid(row=1, column=0, sticky="nsew")
        self.participant_tree = self._build_tree(participants_panel, PARTICIPANT_COLUMNS)

        status_row = ttk.Frame(self.root, padding=(10, 0, 10, 6))
        status_row.pack(fill=X)
        ttk.Label(
            status_row, textvariable=self.status_variable, anchor=W, style="Status.TLabel"
        ).pack(side=LEFT)

    def _build_tree(self, parent: ttk.Labelframe, columns: dict) -> ttk.Treeview:
        tree = ttk.Treeview(
            parent, columns=list(columns), show="headings", selectmode="browse"
        )
        for column, (heading, width) in columns.items():
            tree.heading(column, text=heading, anchor=W)
            tree.column(column, width=width, anchor=W)
        scrollbar = ttk.Scrollbar(parent, orient="vertical", command=tree.yview)
        tree.configure(yscrollcommand=scrollbar.set)
        tree.pack(side=LEFT, fill=BOTH, expand=True)
        scrollbar.pack(side=RIGHT, fill="y")
        return tree

    def _build_form_panel(self, parent: ttk.Labelframe) -> None:
        """Build the event form and the action buttons.

        Args:
            parent: Container to populate with form widgets.
        """
        fields = [
            ("Event ID", ttk.Entry(parent, textvariable=self.event_id_variable, width=30)),
            (
                "Event Name",
                ttk.Combobox(
                    parent,
                    textvariable=self.name_variable,
                    values=self.config.event_names,
                    width=28,
                ),
            ),
            ("Date (YYYY-MM-DD)", ttk.Entry(parent, textvariable=self.date_variable, width=30)),
            ("Time (HH:MM)", ttk.Entry(parent, textvariable=self.time_variable, width=30)),
            (
                "Venue",
                ttk.Combobox(
                    parent,
                    textvariable=self.venue_variable,
                    values=self.config.venues,
                    state="readonly",
                    width=28,
                ),
            ),
            (
                "Organizer",
                ttk.Combobox(
                    parent,
                    textvariable=self.organizer_variable,
                    values=self.config.organizers,
                    state="readonly",
                    width=28,
                ),
            ),
            (
                "Category",
                ttk.Entry(
                    parent, textvariable=self.category_variable, state="readonly", width=30
                ),
            ),
        ]
        for row, (label, widget) in enumerate(fields):
            ttk.Label(parent, text=label).grid(row=row, column=0, sticky=W, pady=4)
            widget.grid(row=row, column=1, sticky="ew", padx=(8, 0), pady=4)

        # keep primary actions grouped for faster scanning
        buttons = [
            ("Add Event", "success", self._add_event),
            ("Update Event", "primary", self._update_event),
            ("Delete Event", "danger", self._delete_event),
            ("Clear Form", "secondary", self._clear_form),
            ("Register Participants", "info", self._register_dialog),
            ("Reports", "info", self._reports_dialog),
            ("Toggle Theme", "secondary-outline", self._toggle_theme),
        ]
        button_column = ttk.Frame(parent)
        button_column.grid(row=len(fields), column=0, columnspan=2, sticky="ew", pady=(12, 0))
        for text, bootstyle, command in buttons:
            ttk.Button(
                button_column, text=text, bootstyle=bootstyle, command=command
            ).pack(fill=X, pady=3)

    # form helpers -----------------------------------------------------------------------------
    # converts between form variables and event drafts
    def _on_name_changed(self, *_) -> None:
        name = self.name_variable.get().strip()
        self.category_variable.set(
            utils.category_for_name(name, self.config.name_categories) if name else ""
        )

    def _clear_form(self) -> None:
        self.selected_event_id = None
        if self.event_tree.selection():
            self.event_tree.selection_remove(self.event_tree.selection())
        self.event_id_variable.set(self.store.next_event_id())
        self.name_variable.set("")
        self.date_variable.set("")
        self.time_variable.set("")
        self.venue_variable.set("")
        self.organizer_variable.set("")
        self._refresh_participant_table(None)

    def _fill_form(self, event: Event) -> None:
        self.event_id_variable.set(event.event_id)
        self.name_variable.set(event.name)
        self.date_variable.set(event.date.isoformat())
        self.time_variable.set(event.time.strftime("%H:%M") if event.time else "")
        self.venue_variable.set(event.venue)
        self.organizer_variable.set(event.organizer)
        # keep a stored category even when the name maps elsewhere
        self.category_variable.set(event.category)

    def _read_form(self) -> EventDraft | None:
        """Build a draft from the form, or warn and return None if a value is malformed."""
        try:
            event_date = utils.parse_date(self.date_variable.get())
        except ValueError:
            messagebox.showwarning("Invalid Date", "Enter the date as YYYY-MM-DD.")
            return None
        try:
            event_time = utils.parse_time(self.time_variable.get())
        except ValueError:
            messagebox.showwarning("Invalid Time", "Enter the time as HH:MM.")
            return None
        return EventDraft(
            name=self.name_variable.get(),
            date=event_date,
            time=event_time,
            venue=self.venue_variable.get(),
            organizer=self.organizer_variable.get(),
            category=self.category_variable.get(),
            event_id=self.event_id_variable.get(),
        )

    def _on_event_selected(self, _event=None) -> None:
        selection = self.event_tree.selection()
        if not selection:
            return
        event = self.store.get(selection[0])
        if event is None:
            return
        self.selected_event_id = event.event_id
        self._fill_form(event)
        self._refresh_participant_table(event)

    # event workflows --------------------------------------------------------------------------
    # runs store mutations and asks about collisions through dialogs
    def _run_mutation(self, action) -> object | None:
        """Run a store mutation, asking to resolve id or name collisions.

        Args:
            action: Callable accepting resolve_id and resolve_name keywords.

        Returns:
            Ok | None: The result, or None when rejected or cancelled.
        """
        resolve = {"resolve_id": False, "resolve_name": False}
        while True:
            try:
                result = action(**resolve)
            except DomainError as exc:
                messagebox.showerror("Error", str(exc))
                self._set_status("Save failed")
                return None
            if isinstance(result, Rejected):
                messagebox.showwarning("Invalid Event", result.reason)
                return None
            if isinstance(result, Conflict):
                title, message = conflict_question(result)
                if not messagebox.askyesno(title, message):
                    self._set_status("Operation cancelled")
                    return None
                resolve["resolve_id" if result.kind == ID_CONFLICT else "resolve_name"] = True
                continue
            return result

    def _add_event(self) -> None:
        draft = self._read_form()
        if draft is None:
            return
        if self.selected_event_id and draft.event_id == self.selected_event_id:
            # the form still shows a selected event; add it under a new id
            draft.event_id = None
        result = self._run_mutation(
            lambda **resolve: self.store.add_event(draft, **resolve)
        )
        if result is None:
            return
        self._refresh_event_table()
        self._clear_form()
        self._set_status(f"Event added: {result.event}")
        messagebox.showinfo("Success", "Event added successfully!")

    def _update_event(self) -> None:
        if not self.selected_event_id:
            messagebox.showwarning("Update Event", "Select an event to update.")
            return
        draft = self._read_form()
        if draft is None:
            return
        changes = self.store.preview_changes(self.selected_event_id, draft)
        if not changes:
            messagebox.showinfo("Update Event", "No changes to update.")
            return
        summary = "\n".join(str(change) for change in changes)
        if not messagebox.askyesno(
            "Confirm Update", f"Apply the following changes?\n\n{summary}"
        ):
            self._set_status("Update cancelled")
            return
        event_id = self.selected_event_id
        result = self._run_mutation(
            lambda **resolve: self.store.update_event(event_id, draft, **resolve)
        )
        if result is None:
            return
        self._refresh_event_table(select=result.event.event_id)
        self._set_status(f"Event updated: {result.event}")

    def _delete_event(self) -> None:
        if not self.selected_event_id:
            messagebox.showwarning("Delete Event", "Select an event to delete.")
            return
        event = self.store.get(self.selected_event_id)
        if event is None or not messagebox.askyesno(
            "Confirm Delete",
            f'Delete "{event.name}" and its {event.participant_count} participant(s)?',
        ):
            return
        try:
            self.store.delete_event(event.event_id)
        except DomainError as exc:
            messagebox.showerror("Error", str(exc))
            return
        self._refresh_event_table()
        self._clear_form()
        self._set_status(f"Event deleted: {event}")

    # participant registration -----------------------------------------------------------------
    # keeps the dialog open so several participants can be entered in a row
    def _register_dialog(self) -> None:
        """Prompt for participants of the selected event."""
        if not self.selected_event_id:
            messagebox.showwarning("Register Participants", "Select an event first.")
            return
        event_id = self.selected_event_id
        event = self.store.get(event_id)

        dialog = tk.Toplevel(self.root)
        self._prepare_dialog(dialog, f"Register - {event.name}")
        dialog.grab_set()

        participant_id_variable = tk.StringVar(value=self.store.next_participant_id(event_id))
        full_name_variable = tk.StringVar()
        type_variable = tk.StringVar(value=ParticipantType.STUDENT.value)

        ttk.Label(dialog, text="Participant ID").grid(row=0, column=0, sticky=W, padx=8, pady=6)
        ttk.Entry(
            dialog, textvariable=participant_id_variable, state="readonly", width=28
        ).grid(row=0, column=1, padx=8, pady=6)
        ttk.Label(dialog, text="Full Name").grid(row=1, column=0, sticky=W, padx=8, pady=6)
        name_entry = ttk.Entry(dialog, textvariable=full_name_variable, width=28)
        name_entry.grid(row=1, column=1, padx=8, pady=6)
        ttk.Label(dialog, text="Type").grid(row=2, column=0, sticky=W, padx=8, pady=6)
        ttk.Combobox(
            dialog,
            textvariable=type_variable,
            values=[t.value for t in ParticipantType],
            state="readonly",
            width=26,
        ).grid(row=2, column=1, padx=8, pady=6)

        def on_register(*_) -> None:
            try:
                result = self.store.register_participant(
                    event_id, full_name_variable.get(), type_variable.get()
                )
            except DomainError as exc:
                messagebox.showerror("Error", str(exc), parent=dialog)
                return
            if isinstance(result, Rejected):
                messagebox.showwarning("Register Participant", result.reason, parent=dialog)
                return
            self._set_status(f"Registered {result.participant} for {result.event}")
            full_name_variable.set("")
            participant_id_variable.set(self.store.next_participant_id(event_id))
            self._refresh_event_table(select=event_id)
            name_entry.focus_set()

        button_row = ttk.Frame(dialog)
        button_row.grid(row=3, column=0, columnspan=2, pady=8)
        ttk.Button(button_row, text="Done", command=dialog.destroy).pack(side=RIGHT, padx=4)
        ttk.Button(
            button_row, text="Register", bootstyle="primary", command=on_register
        ).pack(side=RIGHT, padx=4)
        dialog.bind("<Return>", on_register)
        name_entry.focus_set()
        self._center_dialog(dialog)

    # reports ----------------------------------------------------------------------------------
    # shows every report view in one tabbed dialog with export actions
    def _reports_dialog(self) -> None:
        events = self.store.events
        dialog = tk.Toplevel(self.root)
        self._prepare_dialog(dialog, "Reports")
        dialog.resizable(True, True)
        dialog.geometry("900x520")

        notebook = ttk.Notebook(dialog)
        notebook.pack(fill=BOTH, expand=True, padx=8, pady=8)

        for title, rows, columns, empty in (
            (
                "Upcoming Schedule",
                reports.upcoming_schedule(events),
                reports.SCHEDULE_COLUMNS,
                "No events scheduled yet.",
            ),
            (
                "Participant Roster",
                reports.participant_roster(events),
                reports.ROSTER_COLUMNS,
                "No participants have registered yet.",
            ),
        ):
            frame = ttk.Frame(notebook, padding=6)
            notebook.add(frame, text=title)
            if not rows:
                ttk.Label(frame, text=empty).pack(anchor=W)
                continue
            tree = self._build_tree(
                frame, {c: (c.replace("_", " ").title(), 110) for c in columns}
            )
            for row in rows:
                tree.insert("", "end", values=[row[c] for c in columns])

        stats = reports.statistics(events)
        clash_lines = reports.venue_clash_lines(events) or ["No venue clashes detected."]
        stats_frame = ttk.Frame(notebook, padding=10)
        notebook.add(stats_frame, text="Statistics")
        ttk.Label(
            stats_frame,
            justify=LEFT,
            text=(
                f"Total Events: {stats['total_events']}\n"
                f"Total Participants: {stats['total_participants']}\n"
                f"Busiest Event: {reports.busiest_label(stats)}\n\n"
                "Date/Venue Conflicts:\n" + "\n".join(clash_lines)
            ),
        ).pack(anchor=W)

        def export_csv() -> None:
            path = filedialog.asksaveasfilename(
                parent=dialog, defaultextension=".csv", filetypes=[("CSV", "*.csv")]
            )
            if path:
                self._export(lambda: reports.to_csv(events, path), path)

        def export_pdf() -> None:
            path = filedialog.asksaveasfilename(
                parent=dialog, defaultextension=".pdf", filetypes=[("PDF", "*.pdf")]
            )
            if path:
                self._export(lambda: generate_report_pdf(events, path), path)

        button_row = ttk.Frame(dialog)
        button_row.pack(fill=X, padx=8, pady=(0, 8))
        ttk.Button(button_row, text="Close", command=dialog.destroy).pack(side=RIGHT, padx=4)
        ttk.Button(button_row, text="Export PDF", command=export_pdf).pack(side=RIGHT, padx=4)
        ttk.Button(button_row, text="Export CSV", command=export_csv).pack(side=RIGHT, padx=4)

    def _export(self, write, path) -> None:
        try:
            write()
        except OSError as exc:
            messagebox.showerror("Error", f"Failed to export report: {exc}")
            return
        self._set_status(f"Report saved to {path}")

    # theme ------------------------------------------------------------------------------------
    # switches between the light and dark themes and remembers the choice
    def _toggle_theme(self) -> None:
        self.dark_theme = not self.dark_theme
        ttk.Style().theme_use(DARK_THEME if self.dark_theme else LIGHT_THEME)
        if not settings.save_theme_preference(self.config.settings_path, self.dark_theme):
            self._set_status("Theme changed, but the preference could not be saved")
            return
        self._set_status(f"{'Dark' if self.dark_theme else 'Light'} theme enabled")

    # upcoming event notifications -------------------------------------------------------------
    # the notifier thread only queues events; the Tk thread shows them
    def _start_notifier(self) -> None:
        self.notifier = UpcomingEventNotifier(
            self.store,
            self.notification_queue.put,
            minutes_before=self.config.notify_minutes_before,
            interval_seconds=self.config.notify_interval_seconds,
            initial_delay_seconds=self.config.notify_initial_delay_seconds,
        )
        self.notifier.start()
        self.root.after(POLL_INTERVAL_MS, self._check_notification_queue)

    def _check_notification_queue(self) -> None:
        """Show queued upcoming event notices, then poll again."""
        while True:
            try:
                event = self.notification_queue.get_nowait()
            except queue.Empty:
                break
            message = notification_message(event)
            self._set_status(message.replace("\n", " - "))
            messagebox.showinfo("Upcoming Event", message)
        self.root.after(POLL_INTERVAL_MS, self._check_notification_queue)

    # view refresh -----------------------------------------------------------------------------
    # keeps the tables in sync with the store after each change
    def _refresh_event_table(self, select: str | None = None) -> None:
        self.event_tree.delete(*self.event_tree.get_children())
        for event in self.store.events:
            self.event_tree.insert(
                "",
                "end",
                iid=event.event_id,
                values=(
                    event.event_id,
                    event.name,
                    event.date_time_label,
                    event.venue,
                    event.organizer,
                    event.category,
                    event.participant_count,
                ),
            )
        if select and self.event_tree.exists(select):
            self.event_tree.selection_set(select)
            self.event_tree.see(select)
            self._on_event_selected()

    def _refresh_participant_table(self, event: Event | None) -> None:
        self.participant_tree.delete(*self.participant_tree.get_children())
        if event is None:
            return
        for participant in event.participants:
            self.participant_tree.insert(
                "",
                "end",
                values=(
                    participant.participant_id,
                    participant.full_name,
                    str(participant.participant_type),
                ),
            )

    def _set_status(self, text: str) -> None:
        """Update the status message under the tables.

        Args:
            text: Status text to display.
        """
        self.status_variable.set(text)

    # run loop --------------------------------------------------------------------------------
    # starts the tkinter event loop for the application
    def run(self) -> None:
        """Start the Tkinter main loop."""
        if self.is_authenticated:
            self.root.mainloop()


# entrypoint -------------------------------------------------------------------------------------
def main() -> None:
    """Launch the GUI, optionally with a YAML config path as the only argument."""
    config_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    try:
        config = load_config(config_path)
    except Exception as exc:
        sys.exit(f"Failed to load config: {exc}")
    UniEventsGUI(config).run()


if __name__ == "__main__":
    main()
