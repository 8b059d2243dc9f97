"""Queue reminders for interviews starting in the next 24 hours.

Usage:
  python scripts/send_interview_reminders.py          # default window
  python scripts/send_interview_reminders.py 48       # window in hours

Meant for cron; interviews that already got a reminder are skipped.
"""

import sys
import os
from datetime import timedelta

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from hirepath import create_app
from hirepath.services.interviews import REMINDER_WINDOW, send_due_reminders


def main(argv):
    window = timedelta(hours=int(argv[0])) if argv else REMINDER_WINDOW
    app = create_app()
    with app.app_context():
        queued = send_due_reminders(within=window)
        print(f'Queued {len(queued)} reminder(s): {", ".join(map(str, queued)) or "-"}')
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
