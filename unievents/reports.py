"""Report views derived from the event list: schedule, roster, statistics."""

import csv
from pathlib import Path

from unievents import conflicts
from unievents.event import Event

SCHEDULE_COLUMNS = ["event", "category", "date", "time", "venue", "organizer", "participants"]
ROSTER_COLUMNS = ["event", "participant_id", "participant", "type"]


def upcoming_schedule(events: list[Event]) -> list[dict]:
    """
    Returns one row per event, sorted by date.

    Return format is for input to format_report, to_csv, and the PDF report.
    """
    return [
        {
            "event": e.name,
            "category": e.category,
            "date": e.date.isoformat(),
            "time": e.time.strftime("%H:%M") if e.time else "",
            "venue": e.venue,
            "organizer": e.organizer,
            "participants": e.participant_count,
        }
        for e in sorted(events, key=lambda e: e.date)
    ]


def participant_roster(events: list[Event]) -> list[dict]:
    """Returns one row per registered participant, grouped by event."""
    return [
        {
            "event": e.name,
            "participant_id": p.participant_id,
            "participant": p.full_name,
            "type": str(p.participant_type),
        }
        for e in events
        for p in e.participants
    ]


def statistics(events: list[Event]) -> dict:
    """
    Summarizes the event list.

    Returns:
        dict: total_events, total_participants, and busiest_event (the first
        event with the most participants, or None when there are no events).
    """
    busiest = None
    for e in events:
        if busiest is None or e.participant_count > busiest.participant_count:
            busiest = e
    return {
        "total_events": len(events),
        "total_participants": sum(e.participant_count for e in events),
        "busiest_event": busiest,
    }


def busiest_label(stats: dict) -> str:
    busiest = stats["busiest_event"]
    if busiest is None:
        return "N/A"
    return f"{busiest.name} ({busiest.participant_count})"


def venue_clash_lines(events: list[Event]) -> list[str]:
    """Describes each date/venue pair booked by more than one event."""
    return [
        f"{group[0].date.isoformat()} @ {group[0].venue} -> "
        + ", ".join(e.name for e in group)
        for group in conflicts.venue_clashes(events)
    ]


def _format_table(rows: list[dict], columns: list[str]) -> list[str]:
    widths = {
        c: max([len(c)] + [len(str(row[c])) for row in rows]) for c in columns
    }
    header = "  ".join(c.replace("_", " ").title().ljust(widths[c]) for c in columns)
    lines = [header, "-" * len(header)]
    for row in rows:
        lines.append("  ".join(str(row[c]).ljust(widths[c]) for c in columns))
    return lines


def format_report(events: list[Event]) -> str:
    """
    Renders every report section as plain text.

    Args:
        events (list[Event]): Events to report on.

    Returns:
        str: Upcoming schedule, participant roster, statistics, and venue conflicts.
    """
    lines = ["Upcoming Schedule", "=================", ""]
    schedule = upcoming_schedule(events)
    lines += _format_table(schedule, SCHEDULE_COLUMNS) if schedule else [
        "No events scheduled yet."
    ]

    lines += ["", "Participant Roster", "==================", ""]
    roster = participant_roster(events)
    lines += _format_table(roster, ROSTER_COLUMNS) if roster else [
        "No participants have registered yet."
    ]

    stats = statistics(events)
    lines += [
        "",
        "Statistics",
        "==========",
        "",
        f"Total Events:       {stats['total_events']}",
        f"Total Participants: {stats['total_participants']}",
        f"Busiest Event:      {busiest_label(stats)}",
        "",
        "Date/Venue Conflicts",
        "--------------------",
    ]
    lines += venue_clash_lines(events) or ["No venue clashes detected."]
    return "\n".join(lines)


def to_csv(events: list[Event], path: Path | str) -> Path:
    """Writes the upcoming schedule to a CSV file."""
    path = Path(path)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=SCHEDULE_COLUMNS)
        writer.writeheader()
        writer.writerows(upcoming_schedule(events))
    return path


def roster_to_csv(events: list[Event], path: Path | str) -> Path:
    """Writes the participant roster to a CSV file."""
    path = Path(path)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=ROSTER_COLUMNS)
        writer.writeheader()
        writer.writerows(participant_roster(events))
    return path
