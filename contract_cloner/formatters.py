"""Output formatters for Contract Cloner."""

import json
from enum import Enum
from pathlib import Path

from .types import MaterializationReport, ResolvedTarget


def format_target(target: ResolvedTarget, chain: str) -> str:
    """One-line description of what is about to be fetched."""
    return f"Fetching contract source for {target.contract_address} on {chain}..."


def format_report(report: MaterializationReport) -> str:
    """Format a materialization report as a table."""
    lines = []
    divider = "─" * 70

    lines.append(divider)
    lines.append(f"DESTINATION: {report.destination}")
    lines.append(f"Mode:        {report.policy.value}")
    lines.append(divider)

    # written and skipped files are already logged as they happen
    if report.conflicts:
        for result in report.conflicts:
            lines.append(f"  ⚠️  Conflict: {result.relative_path}")
            lines.append(f"    Saved new content as: {result.path}")
        lines.append(divider)

    lines.append(
        f"Written: {len(report.written)}  "
        f"Skipped: {len(report.skipped)}  "
        f"Conflicts: {len(report.conflicts)}"
    )

    if report.conflicts:
        lines.append("⚠️  Review the .conflict files before building.")
    lines.append("✅ Contract source code fetched successfully!")

    return "\n".join(lines)


def format_report_json(report: MaterializationReport, pretty: bool = True) -> str:
    """Format as JSON."""
    def to_dict(obj):
        if hasattr(obj, "__dataclass_fields__"):
            return {k: to_dict(v) for k, v in obj.__dict__.items()}
        elif isinstance(obj, list):
            return [to_dict(item) for item in obj]
        elif isinstance(obj, Enum):
            return obj.value
        elif isinstance(obj, Path):
            return str(obj)
        else:
            return obj

    data = to_dict(report)
    data["summary"] = {
        "written": len(report.written),
        "skipped": len(report.skipped),
        "conflicts": len(report.conflicts),
    }
    if pretty:
        return json.dumps(data, indent=2)
    return json.dumps(data)
