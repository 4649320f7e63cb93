"""End-of-run metrics report."""

from __future__ import annotations

from dingdong.core.metrics import MetricsSnapshot

RULE = "=" * 50


def render_report(snapshot: MetricsSnapshot) -> str:
    """Format ``snapshot`` as the console summary printed on shutdown."""

    total = snapshot.total_requests
    body = snapshot.total_body_size
    dropped = snapshot.dropped_bodies

    lines = [
        "",
        RULE,
        "SERVER METRICS",
        RULE,
        f"Total Requests:     {total}",
        f"Total Body Size:    {body} bytes ({body / (1024 * 1024):.2f} MB)",
    ]

    if body > 0:
        # Bodies are only consumed for counted requests, so total is non-zero here.
        lines.append(f"Average Body Size:  {body / total / 1024:.2f} KB")
    else:
        lines.append("Average Body Size:  0 KB (no request bodies)")

    dropped_line = f"Dropped Bodies:     {dropped}"
    if dropped > 0:
        dropped_line += f" ({dropped / total * 100:.2f}% of requests)"
    lines.append(dropped_line)

    lines.append("")
    lines.append("Requests by Method:")
    for method, count in snapshot.method_counts.items():
        percentage = count / total * 100 if total else 0.0
        lines.append(f"  {method:<8} {count} ({percentage:.1f}%)")

    lines.append(RULE)
    return "\n".join(lines)
