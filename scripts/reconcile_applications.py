#!/usr/bin/env python3
"""
Application Reconciliation Script

Re-points job applications whose job_id went stale (job re-created
under a new id) back to the job they were made for.

Usage:
    python scripts/reconcile_applications.py --dry-run
    python scripts/reconcile_applications.py --job-id 65f0c2...
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.services.reconciliation_service import get_application_reconciler

logger = logging.getLogger("reconcile_applications")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Repair applications with stale job ids")
    parser.add_argument("--dry-run", action="store_true",
                        help="report what would change without writing")
    parser.add_argument("--job-id", help="only reconcile this job")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    reconciler = get_application_reconciler()

    if args.job_id:
        job = reconciler.jobs.find_by_id(args.job_id)
        if job is None:
            logger.error(f"Job not found: {args.job_id}")
            return 1
        reports = [reconciler.reconcile_job(job, dry_run=args.dry_run)]
    else:
        reports = reconciler.reconcile_all(dry_run=args.dry_run)

    label = "would_update" if args.dry_run else "updated"
    for report in reports:
        if not report.matched_application_ids:
            continue
        logger.info(
            f"{report.job_title} @ {report.company} ({report.job_id}): "
            f"matched={len(report.matched_application_ids)} "
            f"{label}={report.updated_application_ids}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
