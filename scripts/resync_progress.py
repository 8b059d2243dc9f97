"""Recompute every application's current stage, progress and status from
its stage rows.

Usage:
  python scripts/resync_progress.py            # all applications
  python scripts/resync_progress.py 12 40      # only these ids

Repairs drift left by manual HR overrides or by writes made before stage
outcomes and progress were committed together.
"""

import sys
import os

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from hirepath import create_app
from hirepath.errors import HirePathError
from hirepath.models.application import Application
from hirepath.services.stage_tracker import recompute_progress


def main(argv):
    app = create_app()
    with app.app_context():
        ids = [int(a) for a in argv] or [row.id for row in Application.query.with_entities(Application.id).all()]
        failed = 0
        for app_id in ids:
            try:
                a = recompute_progress(app_id)
            except HirePathError as e:
                failed += 1
                app.logger.error('Application %s: %s', app_id, e.message)
                continue
            print(f'{a.id}: {a.current_stage} {a.progress_percentage}% ({a.status})')
        print(f'Resynced {len(ids) - failed} of {len(ids)} applications.')
        return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
