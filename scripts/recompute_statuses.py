#!/usr/bin/env python3
"""Re-derive every candidate's pipeline status from its stored rounds.

Useful after changing HIRE_THRESHOLD or after rounds were deleted. Only
candidates that have both a scored technical and a scored director round
change.

Run from project root: python scripts/recompute_statuses.py [--dry-run]
"""
import argparse
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from careerweek import create_app
from careerweek.extensions import db
from careerweek.models.candidate import Candidate
from careerweek.services.rounds import recompute_status


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--dry-run', action='store_true', help='report changes without writing them')
    args = parser.parse_args(argv)

    app = create_app()
    with app.app_context():
        total = 0
        changed = 0
        for c in Candidate.query.order_by(Candidate.id).all():
            total += 1
            before = c.status
            if recompute_status(c):
                changed += 1
                app.logger.info('candidate %s: %s -> %s', c.id, before, c.status)
        if args.dry_run:
            db.session.rollback()
        else:
            db.session.commit()
        print(f'Checked {total} candidates, {changed} changed{" (dry run)" if args.dry_run else ""}.')
    return changed


if __name__ == '__main__':
    main()
