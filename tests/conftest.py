from collections import defaultdict

from rich.console import Console
from rich.table import Table

# Keep in sync with [tool.pytest.ini_options].markers in pyproject.toml
KNOWN_MARKERS = ("unit_common", "unit_app", "unit_gui", "unit_ui")


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """
    Print per-marker pass/fail counts and durations after the session.
    """
    _ = (exitstatus, config)
    marker_stats = defaultdict(
        lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0, "duration": 0.0}
    )

    for outcome in ("passed", "failed", "skipped"):
        for report in terminalreporter.stats.get(outcome, []):
            # Count the test call, plus skips raised during setup
            if report.when != "call" and not (
                report.when == "setup" and report.outcome == "skipped"
            ):
                continue
            for marker in KNOWN_MARKERS:
                if marker in report.keywords:
                    stats = marker_stats[marker]
                    stats[outcome] += 1
                    stats["total"] += 1
                    stats["duration"] += getattr(report, "duration", 0.0)

    if not marker_stats:
        return

    table = Table(title="Tests by layer", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")
    table.add_column("Duration (s)", justify="right", style="blue")

    for marker in KNOWN_MARKERS:
        stats = marker_stats.get(marker)
        if not stats:
            continue
        table.add_row(
            marker,
            str(stats["total"]),
            str(stats["passed"]),
            str(stats["failed"]),
            str(stats["skipped"]),
            f"{stats['duration']:.2f}",
        )

    console = Console()
    console.print("\n")
    console.print(table)
