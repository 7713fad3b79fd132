from collections import defaultdict
from pathlib import Path

import pytest
from rich.console import Console
from rich.table import Table

from aw_common.config.workflow import WorkflowConfig
from aw_menu.icons import IconResolver

KNOWN_MARKERS = {"unit_common", "unit_menu", "unit_producers", "unit_ui"}
SHIPPED_ICONS = ("alfred.png", "bash.png", "emoji.png", "github.png", "url.png", "command.png")


@pytest.fixture
def icon_dir(tmp_path: Path) -> Path:
    """An icon folder holding a handful of real (empty) icon files."""
    root = tmp_path / "img" / "icons"
    root.mkdir(parents=True)
    for name in SHIPPED_ICONS:
        (root / name).write_bytes(b"")
    return root


@pytest.fixture
def icons(icon_dir: Path) -> IconResolver:
    return IconResolver(str(icon_dir))


@pytest.fixture
def workflow_config(icon_dir: Path, tmp_path: Path) -> WorkflowConfig:
    return WorkflowConfig(icon_dir=str(icon_dir), data_dir=str(tmp_path))


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print pass/fail statistics per marker at the end of the session."""
    _ = (exitstatus, config)
    marker_stats = defaultdict(lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0})

    for outcome in ["passed", "failed", "skipped"]:
        for report in terminalreporter.stats.get(outcome, []):
            if report.when == "call" or (report.when == "setup" and report.outcome == "skipped"):
                for marker in KNOWN_MARKERS:
                    if marker in report.keywords:
                        stats = marker_stats[marker]
                        stats[outcome] += 1
                        stats["total"] += 1

    if not marker_stats:
        return

    table = Table(title="Test Statistics by Marker", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")

    for marker in sorted(marker_stats):
        stats = marker_stats[marker]
        table.add_row(
            marker,
            str(stats["total"]),
            str(stats["passed"]),
            str(stats["failed"]),
            str(stats["skipped"]),
        )

    console = Console()
    console.print("\n")
    console.print(table)
