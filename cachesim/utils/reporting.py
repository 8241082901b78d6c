from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List
from ..config import SimConfig
from . import viz


def format_rate(rate: float | None) -> str:
    """Formats a hit/miss rate, or 'n/a' when nothing was probed."""
    if rate is None:
        return "n/a"
    return f"{rate:.2%}"


def generate_report_json(stats: Dict[str, Any], config: SimConfig) -> Dict[str, Any]:
    """Generates a JSON-compatible dictionary from the run statistics."""
    report_data = dict(stats)
    report_data["config"] = dict(config.__dict__)
    return report_data


def format_summary(stats: Dict[str, Any]) -> str:
    lines = [
        f"Simulating {stats['organization']} cache",
        f"Cache size: {stats['cache_size_bytes']}",
        f"Line size: {stats['line_size_bytes']}",
        f"Lines in cache: {stats['total_lines']}",
        f"Associativity: {stats['associativity']} way",
        f"Replacement policy: {stats['policy']}",
        "",
        f"Accesses: {stats['probes']} ({stats['hits']} hits, {stats['misses']} misses, "
        f"{stats['evictions']} evictions)",
        f"Hit rate: {format_rate(stats['hit_rate'])}",
        f"Miss rate: {format_rate(stats['miss_rate'])}",
    ]
    if stats.get("elapsed_ms") is not None:
        lines.append(f"Time taken: {stats['elapsed_ms']:.2f} milliseconds")
    return "\n".join(lines)


def generate_report(stats: Dict[str, Any], config: SimConfig):
    """Writes report.json and prints the run summary."""
    report_data = generate_report_json(stats, config)
    output_dir = Path(config.report_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    with open(output_dir / "report.json", "w") as f:
        json.dump(report_data, f, indent=4)

    print(format_summary(stats))
    print(f"\nReports generated in {output_dir.absolute()}")


def generate_sweep_report(rows: List[Dict[str, Any]], config: SimConfig):
    """Writes sweep.json and sweep.html and prints an ASCII chart of the sweep."""
    output_dir = Path(config.report_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    with open(output_dir / "sweep.json", "w") as f:
        json.dump({"rows": rows, "config": dict(config.__dict__)}, f, indent=4)

    viz.export_sweep_chart(rows, str(output_dir / "sweep.html"))
    print(viz.export_sweep_ascii(rows))

    print(f"\nReports generated in {output_dir.absolute()}")
