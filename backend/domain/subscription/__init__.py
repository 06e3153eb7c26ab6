"""Subscription domain - recurring meal schedules, totals and billing."""
