"""ASCII visualisation of an assignment trace for development-time checks.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from fleet_sizing.types import FleetResult

_LABELS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def show_timeline(result: FleetResult, width: int = 60) -> str:
    """Print one row per physical resource with its bookings over time.

    Legend: '.' = idle, 'A'-'Z' = booked (by request, in processing order).
    Traces without resource identity (unified strategy) get one row per
    request instead. Returns the string and also prints to stdout.
    """
    if not result.assignments:
        text = f"[{result.strategy}] (no requests)"
        print(text)
        return text

    begin = min(a.request.start for a in result.assignments)
    end = max(a.request.end for a in result.assignments)
    span = max(end - begin, 1)

    def column(t: int) -> int:
        return min(width - 1, (t - begin) * width // span)

    # Row key -> assignments, in first-use order
    rows: dict[str, list[int]] = {}
    legend: list[str] = []
    for idx, a in enumerate(result.assignments):
        key = a.resource_id or f"{a.request.request_id or idx + 1} ({a.category})"
        rows.setdefault(key, []).append(idx)
        flag = "reuse" if a.reused else "new"
        if a.upgraded:
            flag += ", upgrade"
        legend.append(f"{_LABELS[idx % len(_LABELS)]}={a.request} -> {a.category} [{flag}]")

    key_width = max(len(k) for k in rows)
    lines = [
        f"[{result.strategy}] fleet_size={result.fleet_size} "
        f"cars_needed={result.cars_needed}",
        f"{'':>{key_width}s}  {begin}{'':>{max(width - len(str(begin)) - len(str(end)), 1)}s}{end}",
    ]
    for key, indices in rows.items():
        row = list("." * width)
        for idx in indices:
            a = result.assignments[idx]
            for i in range(column(a.request.start), max(column(a.request.end), column(a.request.start) + 1)):
                row[i] = _LABELS[idx % len(_LABELS)]
        lines.append(f"{key:>{key_width}s}  {''.join(row)}")

    lines.append("\nLegend: . = idle")
    lines.extend(f"  {entry}" for entry in legend)

    text = "\n".join(lines)
    print(text)
    return text
