"""ci-testgrid: turn Go test harness build logs into per-test records."""

__version__ = "1.0.0"
