import logging
import time as time_module
from dataclasses import dataclass
from pathlib import Path

import click
import questionary
from pydantic import ValidationError

from unievents import reports, settings, utils
from unievents.app import authenticate, open_store
from unievents.config import Config, load_config
from unievents.errors import AuthenticationError, DomainError
from unievents.event import Event, EventDraft
from unievents.notifications import UpcomingEventNotifier
from unievents.participant import ParticipantType
from unievents.pdf import generate_report_pdf
from unievents.store import ID_CONFLICT, NAME_CONFLICT, Conflict, EventStore, Ok, Rejected

CONFLICT_CHOICES = ["ask", "auto", "cancel"]
RESOLVE_LABELS = {ID_CONFLICT: "Auto-generate new ID", NAME_CONFLICT: "Auto-rename"}


@dataclass
class Session:
    """Objects shared by every command once the coordinator has logged in."""

    config: Config
    store: EventStore


def _load_config_option(ctx, param, value: Path | None) -> Config:
    try:
        return load_config(value)
    except (ValidationError, FileNotFoundError, ValueError) as e:
        raise click.BadParameter(f"Invalid config: {e}")
    except Exception as e:
        raise click.BadParameter(f"Failed to load config: {e}")


def _parse_date_option(ctx, param, value):
    if value is None:
        return None
    try:
        return utils.parse_date(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _parse_time_option(ctx, param, value):
    if value is None:
        return None
    try:
        return utils.parse_time(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _canonical(value: str | None, choices: list[str]) -> str | None:
    """Match a typed value to the catalog spelling, keeping unknown values as typed."""
    if value is None:
        return None
    for choice in choices:
        if choice.casefold() == value.strip().casefold():
            return choice
    return value


def _resolve_conflict(conflict: Conflict, on_conflict: str) -> bool:
    """Decide whether to accept the proposed replacement for a colliding id or name."""
    label = RESOLVE_LABELS[conflict.kind]
    if on_conflict == "auto":
        return True
    if on_conflict == "cancel":
        return False
    message = (
        f"An event with this {conflict.kind} already exists ({conflict.existing}). "
        f"{label} ({conflict.candidates[0]}) or cancel?"
    )
    choice = questionary.select(
        message, choices=[label, "Cancel"], qmark="", instruction=" "
    ).ask()
    return choice == label


def _run_mutation(action, on_conflict: str) -> Ok | None:
    """
    Runs a store mutation, resolving collisions until it succeeds or is cancelled.

    Args:
        action: Callable accepting resolve_id and resolve_name keywords.
        on_conflict: One of CONFLICT_CHOICES.

    Returns:
        Ok | None: The result, or None when the user cancelled.
    """
    resolve = {"resolve_id": False, "resolve_name": False}
    while True:
        try:
            result = action(**resolve)
        except DomainError as e:
            raise click.ClickException(str(e))
        if isinstance(result, Rejected):
            raise click.ClickException(result.reason)
        if isinstance(result, Conflict):
            if not _resolve_conflict(result, on_conflict):
                click.echo("Operation cancelled.")
                return None
            resolve["resolve_id" if result.kind == ID_CONFLICT else "resolve_name"] = True
            continue
        return result


def _format_events(events: list[Event]) -> str:
    if not events:
        return "No events scheduled yet."
    rows = [
        (
            e.event_id,
            e.name,
            e.date_time_label,
            e.venue,
            e.organizer,
            e.category,
            str(e.participant_count),
        )
        for e in events
    ]
    headers = ("Event ID", "Name", "Date & Time", "Venue", "Organizer", "Category", "Participants")
    widths = [max(len(r[i]) for r in rows + [headers]) for i in range(len(headers))]
    lines = ["  ".join(h.ljust(w) for h, w in zip(headers, widths))]
    lines.append("-" * len(lines[0]))
    lines += ["  ".join(c.ljust(w) for c, w in zip(row, widths)) for row in rows]
    return "\n".join(lines)


def _format_participants(event: Event) -> str:
    header = f"{event} ({event.participant_count} participants)"
    lines = [header, "-" * len(header)]
    if not event.participants:
        lines.append("No participants have registered yet.")
    for p in event.participants:
        lines.append(f"{p.participant_id}  {p.full_name}  ({p.participant_type})")
    return "\n".join(lines)


def _require_event(store: EventStore, event_id: str) -> Event:
    event = store.get(event_id)
    if event is None:
        raise click.ClickException(f"Event {event_id} not found.")
    return event


@click.group(context_settings={"max_content_width": 120})
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
    callback=_load_config_option,
    help="Path to a YAML configuration file.",
)
@click.option("--username", prompt=True, envvar="UNIEVENTS_USERNAME", help="Coordinator username.")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    envvar="UNIEVENTS_PASSWORD",
    help="Coordinator password.",
)
@click.option("--verbose", is_flag=True, help="Log store activity to stderr.")
@click.pass_context
def cli(ctx, config: Config, username: str, password: str, verbose: bool):
    """Manage university events and their participants."""

    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        if not authenticate(username, password, config):
            raise AuthenticationError()
        store = open_store(config)
    except DomainError as e:
        raise click.ClickException(str(e))
    ctx.obj = Session(config=config, store=store)


@cli.command("list")
@click.pass_obj
def list_events(session: Session):
    """List scheduled events sorted by date."""
    click.echo(_format_events(session.store.events))


@cli.command()
@click.option("--name", required=True, help="Event name.")
@click.option("--date", "event_date", required=True, callback=_parse_date_option, help="YYYY-MM-DD.")
@click.option("--time", "event_time", callback=_parse_time_option, help="HH:MM (optional).")
@click.option("--venue", required=True, help="Venue.")
@click.option("--organizer", required=True, help="Organizer.")
@click.option("--category", help="Category; derived from the name when omitted.")
@click.option("--event-id", help="Event ID; the next free ID is used when omitted.")
@click.option(
    "--on-conflict",
    type=click.Choice(CONFLICT_CHOICES),
    default="ask",
    show_default=True,
    help="How to handle a duplicate event ID or name.",
)
@click.pass_obj
def add(session: Session, name, event_date, event_time, venue, organizer, category, event_id, on_conflict):
    """Add a new event."""
    config = session.config
    draft = EventDraft(
        name=name,
        date=event_date,
        time=event_time,
        venue=_canonical(venue, config.venues),
        organizer=_canonical(organizer, config.organizers),
        category=_canonical(category, config.categories),
        event_id=event_id,
    )
    result = _run_mutation(
        lambda **resolve: session.store.add_event(draft, **resolve), on_conflict
    )
    if result:
        click.echo(f"Event added successfully: {result.event} ({result.event.date_time_label})")


@cli.command()
@click.argument("event_id")
@click.option("--name", help="New event name.")
@click.option("--date", "event_date", callback=_parse_date_option, help="YYYY-MM-DD.")
@click.option("--time", "event_time", callback=_parse_time_option, help="HH:MM.")
@click.option("--clear-time", is_flag=True, help="Remove the event time.")
@click.option("--venue", help="New venue.")
@click.option("--organizer", help="New organizer.")
@click.option("--category", help="New category; derived from a new name when omitted.")
@click.option("--new-id", help="New event ID.")
@click.option("--yes", is_flag=True, help="Apply without confirmation.")
@click.option(
    "--on-conflict",
    type=click.Choice(CONFLICT_CHOICES),
    default="ask",
    show_default=True,
    help="How to handle a duplicate event ID or name.",
)
@click.pass_obj
def update(
    session: Session,
    event_id,
    name,
    event_date,
    event_time,
    clear_time,
    venue,
    organizer,
    category,
    new_id,
    yes,
    on_conflict,
):
    """Update the fields of an existing event."""
    config = session.config
    original = _require_event(session.store, event_id)

    # a new name without an explicit category picks its own category
    if category is None and name is None:
        category = original.category

    def make_draft():
        return EventDraft(
            name=name if name is not None else original.name,
            date=event_date or original.date,
            time=None if clear_time else (event_time or original.time),
            venue=_canonical(venue, config.venues) or original.venue,
            organizer=_canonical(organizer, config.organizers) or original.organizer,
            category=_canonical(category, config.categories),
            event_id=new_id or original.event_id,
        )

    changes = session.store.preview_changes(original.event_id, make_draft())
    if not changes:
        click.echo("No changes to update.")
        return
    if not yes:
        summary = "\n".join(f"  {c}" for c in changes)
        click.echo(f"You are about to apply the following changes:\n\n{summary}\n")
        if not questionary.confirm("Proceed?", qmark="").ask():
            click.echo("Update cancelled.")
            return

    draft = make_draft()
    result = _run_mutation(
        lambda **resolve: session.store.update_event(original.event_id, draft, **resolve),
        on_conflict,
    )
    if result:
        click.echo(f"Event updated successfully: {result.event}")


@cli.command()
@click.argument("event_id")
@click.option("--yes", is_flag=True, help="Delete without confirmation.")
@click.pass_obj
def delete(session: Session, event_id, yes):
    """Delete an event and its participants."""
    event = _require_event(session.store, event_id)
    if not yes and not questionary.confirm(f'Delete event "{event.name}"?', qmark="").ask():
        click.echo("Deletion cancelled.")
        return
    try:
        result = session.store.delete_event(event.event_id)
    except DomainError as e:
        raise click.ClickException(str(e))
    if isinstance(result, Rejected):
        raise click.ClickException(result.reason)
    click.echo("Event deleted.")


@cli.command()
@click.argument("event_id")
@click.argument("names", nargs=-1, required=True)
@click.option(
    "--type",
    "participant_type",
    type=click.Choice([t.value for t in ParticipantType], case_sensitive=False),
    default=ParticipantType.STUDENT.value,
    show_default=True,
    help="Participant type.",
)
@click.pass_obj
def register(session: Session, event_id, names, participant_type):
    """Register one or more participants for an event."""
    event = _require_event(session.store, event_id)
    failed = False
    for full_name in names:
        try:
            result = session.store.register_participant(
                event.event_id, full_name, participant_type
            )
        except DomainError as e:
            raise click.ClickException(str(e))
        if isinstance(result, Rejected):
            click.echo(f"{full_name}: {result.reason}", err=True)
            failed = True
            continue
        p = result.participant
        click.echo(f"Participant registered: {p.participant_id} {p.full_name} ({p.participant_type})")
    if failed:
        raise click.exceptions.Exit(1)


@cli.command()
@click.argument("event_id")
@click.pass_obj
def participants(session: Session, event_id):
    """Show the participants registered for an event."""
    click.echo(_format_participants(_require_event(session.store, event_id)))


@cli.command()
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False, path_type=Path), help="Write the schedule CSV.")
@click.option("--roster-csv", type=click.Path(dir_okay=False, path_type=Path), help="Write the roster CSV.")
@click.option("--pdf", "pdf_path", type=click.Path(dir_okay=False, path_type=Path), help="Write the PDF report.")
@click.pass_obj
def report(session: Session, csv_path, roster_csv, pdf_path):
    """Print the schedule, roster, and statistics reports."""
    events = session.store.events
    click.echo(reports.format_report(events))
    try:
        if csv_path:
            reports.to_csv(events, csv_path)
            click.echo(f"\nSchedule saved to {csv_path}")
        if roster_csv:
            reports.roster_to_csv(events, roster_csv)
            click.echo(f"\nRoster saved to {roster_csv}")
        if pdf_path:
            generate_report_pdf(events, pdf_path)
            click.echo(f"\nReport saved to {pdf_path}")
    except OSError as e:
        raise click.ClickException(f"Failed to write report: {e}")


@cli.command()
@click.option("--dark/--light", default=None, help="Set the theme; show it when omitted.")
@click.pass_obj
def theme(session: Session, dark):
    """Show or set the theme preference."""
    path = session.config.settings_path
    if dark is None:
        click.echo("dark" if settings.load_theme_preference(path) else "light")
        return
    if not settings.save_theme_preference(path, dark):
        raise click.ClickException(f"Failed to save settings to {path}")
    click.echo(f"Theme set to {'dark' if dark else 'light'}.")


@cli.command()
@click.option("--minutes", type=int, help="Notify this many minutes before an event starts.")
@click.pass_obj
def watch(session: Session, minutes):
    """Print a notice when an event is about to start. Stop with Ctrl+C."""
    config = session.config

    def notify(event: Event):
        click.echo(f"Upcoming event: {event.name} - {event.date_time_label} @ {event.venue}")

    notifier = UpcomingEventNotifier(
        session.store,
        notify,
        minutes_before=minutes if minutes is not None else config.notify_minutes_before,
        interval_seconds=config.notify_interval_seconds,
        initial_delay_seconds=0,
    )
    click.echo("Watching for upcoming events. Press Ctrl+C to stop.")
    notifier.start()
    try:
        while notifier.is_running:
            time_module.sleep(0.5)
    except KeyboardInterrupt:
        pass
    finally:
        notifier.stop()


@cli.command()
@click.pass_obj
def interactive(session: Session):
    """Manage events through interactive prompts."""
    store = session.store
    config = session.config

    choices = [
        "List events",
        "Add an event",
        "Update an event",
        "Delete an event",
        "Register participants",
        "Show participants",
        "Generate reports",
        "Quit",
    ]

    def pick_event():
        events = store.events
        if not events:
            click.echo("\nNo events scheduled yet.")
            return None
        labels = {f"{e.event_id}  {e.name}  ({e.date_time_label})": e for e in events}
        label = questionary.select("\nEvent:", choices=list(labels), qmark="", instruction=" ").ask()
        return labels.get(label)

    def ask_fields(defaults: Event | None):
        name = questionary.select(
            "\nName:",
            choices=config.event_names,
            default=defaults.name if defaults and defaults.name in config.event_names else None,
            qmark="",
            instruction=" ",
        ).ask()
        if name is None:
            return None
        event_date = questionary.text(
            "\nDate (YYYY-MM-DD):",
            default=defaults.date.isoformat() if defaults else "",
            qmark="",
            validate=lambda v: _is_valid(utils.parse_date, v),
        ).ask()
        event_time = questionary.text(
            "\nTime (HH:MM, blank for none):",
            default=defaults.time.strftime("%H:%M") if defaults and defaults.time else "",
            qmark="",
            validate=lambda v: _is_valid(utils.parse_time, v),
        ).ask()
        venue = questionary.select("\nVenue:", choices=config.venues, qmark="", instruction=" ").ask()
        organizer = questionary.select(
            "\nOrganizer:", choices=config.organizers, qmark="", instruction=" "
        ).ask()
        if None in (event_date, event_time, venue, organizer):
            return None
        return EventDraft(
            name=name,
            date=utils.parse_date(event_date),
            time=utils.parse_time(event_time),
            venue=venue,
            organizer=organizer,
            category=utils.category_for_name(name, config.name_categories),
            event_id=defaults.event_id if defaults else None,
        )

    while True:
        click.echo("\n---")
        choice = questionary.select("\nAction:", choices=choices, qmark="", instruction=" ").ask()

        try:
            if choice == "List events":
                click.echo()
                click.echo(_format_events(store.events))

            elif choice == "Add an event":
                click.echo(f"\nEvent ID: {store.next_event_id()}")
                draft = ask_fields(None)
                if draft:
                    result = _run_mutation(lambda **r: store.add_event(draft, **r), "ask")
                    if result:
                        click.echo(f"\nEvent added successfully: {result.event}")

            elif choice == "Update an event":
                event = pick_event()
                draft = ask_fields(event) if event else None
                if draft:
                    changes = store.preview_changes(event.event_id, draft)
                    if not changes:
                        click.echo("\nNo changes to update.")
                    elif questionary.confirm(
                        "\n" + "\n".join(str(c) for c in changes) + "\n\nProceed?", qmark=""
                    ).ask():
                        result = _run_mutation(
                            lambda **r: store.update_event(event.event_id, draft, **r), "ask"
                        )
                        if result:
                            click.echo(f"\nEvent updated successfully: {result.event}")
                    else:
                        click.echo("\nUpdate cancelled.")

            elif choice == "Delete an event":
                event = pick_event()
                if event and questionary.confirm(f'\nDelete event "{event.name}"?', qmark="").ask():
                    store.delete_event(event.event_id)
                    click.echo("\nEvent deleted.")

            elif choice == "Register participants":
                event = pick_event()
                while event:
                    click.echo(f"\nParticipant ID: {store.next_participant_id(event.event_id)}")
                    full_name = questionary.text("Full name (blank when done):", qmark="").ask()
                    if not full_name or not full_name.strip():
                        break
                    participant_type = questionary.select(
                        "Type:", choices=[t.value for t in ParticipantType], qmark="", instruction=" "
                    ).ask()
                    result = store.register_participant(event.event_id, full_name, participant_type)
                    if isinstance(result, Rejected):
                        click.echo(f"  {result.reason}")
                    else:
                        click.echo(f"  Participant registered: {result.participant}")

            elif choice == "Show participants":
                event = pick_event()
                if event:
                    click.echo()
                    click.echo(_format_participants(event))

            elif choice == "Generate reports":
                click.echo()
                click.echo(reports.format_report(store.events))

            else:
                click.echo("\nProgram terminated.\n")
                return
        except click.ClickException as e:
            click.echo(f"\nError: {e.message}")
        except DomainError as e:
            click.echo(f"\nError: {e}")


def _is_valid(parser, value) -> bool | str:
    try:
        parser(value)
    except ValueError as e:
        return str(e)
    return True


if __name__ == "__main__":
    cli()
