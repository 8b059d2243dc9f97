from datetime import datetime, timezone
from uuid import uuid4


def build_ics(uid_domain, title, start, end, location="", description=""):
    uid = f"{uuid4()}@{uid_domain}"

    def to_dt(dt):
        if dt.tzinfo:
            return dt.astimezone(timezone.utc).strftime('%Y%m%dT%H%M%SZ')
        # naive datetimes are floating local times
        return dt.strftime('%Y%m%dT%H%M%S')

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//HirePath//Interview//EN",
        "BEGIN:VEVENT",
        f"UID:{uid}",
        f"DTSTAMP:{to_dt(datetime.now(timezone.utc))}",
        f"DTSTART:{to_dt(start)}",
        f"DTEND:{to_dt(end)}",
        f"SUMMARY:{title}",
        f"LOCATION:{location}",
        f"DESCRIPTION:{description}",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines)
