"""In-process metrics collector with Prometheus text exposition."""

from __future__ import annotations

from collections import defaultdict
from threading import Lock
import time
from typing import Dict, Tuple


_lock = Lock()
_started_at = time.time()

_http_requests_total: Dict[Tuple[str, str, str], int] = defaultdict(int)
_http_request_duration_sum: Dict[Tuple[str, str], float] = defaultdict(float)
_http_request_duration_count: Dict[Tuple[str, str], int] = defaultdict(int)
_votes_total: Dict[str, int] = defaultdict(int)
_vote_handler_errors_total: Dict[str, int] = defaultdict(int)


def _escape_label(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _normalize_label(value: str, *, fallback: str = "unknown") -> str:
    normalized = (value or "").strip()
    return normalized or fallback


def record_http_request(*, method: str, path: str, status_code: int, duration_seconds: float) -> None:
    status = str(status_code)
    method_label = method.upper()
    path_label = path or "unknown"
    duration = max(duration_seconds, 0.0)

    with _lock:
        _http_requests_total[(method_label, path_label, status)] += 1
        _http_request_duration_sum[(method_label, path_label)] += duration
        _http_request_duration_count[(method_label, path_label)] += 1


def record_vote_received(*, status: str, count: int = 1) -> None:
    if count <= 0:
        return
    with _lock:
        _votes_total[_normalize_label(status)] += int(count)


def record_vote_handler_error(*, handler: str, count: int = 1) -> None:
    if count <= 0:
        return
    with _lock:
        _vote_handler_errors_total[_normalize_label(handler)] += int(count)


def render_prometheus_metrics(*, app_name: str, app_version: str, env: str) -> str:
    uptime = max(time.time() - _started_at, 0.0)

    with _lock:
        http_total = dict(_http_requests_total)
        duration_sum = dict(_http_request_duration_sum)
        duration_count = dict(_http_request_duration_count)
        votes_total = dict(_votes_total)
        handler_errors_total = dict(_vote_handler_errors_total)

    lines = [
        "# HELP votehook_build_info Build metadata.",
        "# TYPE votehook_build_info gauge",
        (
            f'votehook_build_info{{app_name="{_escape_label(app_name)}",'
            f'version="{_escape_label(app_version)}",env="{_escape_label(env)}"}} 1'
        ),
        "# HELP votehook_process_uptime_seconds Process uptime in seconds.",
        "# TYPE votehook_process_uptime_seconds gauge",
        f"votehook_process_uptime_seconds {uptime:.6f}",
        "# HELP votehook_http_requests_total Total HTTP requests.",
        "# TYPE votehook_http_requests_total counter",
    ]

    for (method, path, status), value in sorted(http_total.items()):
        lines.append(
            (
                f'votehook_http_requests_total{{method="{_escape_label(method)}",'
                f'path="{_escape_label(path)}",status="{_escape_label(status)}"}} {value}'
            )
        )

    lines.extend(
        [
            "# HELP votehook_http_request_duration_seconds Request duration summary.",
            "# TYPE votehook_http_request_duration_seconds summary",
        ]
    )
    for (method, path), value in sorted(duration_sum.items()):
        lines.append(
            (
                f'votehook_http_request_duration_seconds_sum{{method="{_escape_label(method)}",'
                f'path="{_escape_label(path)}"}} {value:.6f}'
            )
        )
    for (method, path), value in sorted(duration_count.items()):
        lines.append(
            (
                f'votehook_http_request_duration_seconds_count{{method="{_escape_label(method)}",'
                f'path="{_escape_label(path)}"}} {value}'
            )
        )

    lines.extend(
        [
            "# HELP votehook_votes_total Vote webhook deliveries by outcome.",
            "# TYPE votehook_votes_total counter",
        ]
    )
    for status, value in sorted(votes_total.items()):
        lines.append(f'votehook_votes_total{{status="{_escape_label(status)}"}} {value}')

    lines.extend(
        [
            "# HELP votehook_vote_handler_errors_total Vote handler invocations that raised.",
            "# TYPE votehook_vote_handler_errors_total counter",
        ]
    )
    for handler, value in sorted(handler_errors_total.items()):
        lines.append(f'votehook_vote_handler_errors_total{{handler="{_escape_label(handler)}"}} {value}')

    return "\n".join(lines) + "\n"


def reset_metrics_for_tests() -> None:
    with _lock:
        _http_requests_total.clear()
        _http_request_duration_sum.clear()
        _http_request_duration_count.clear()
        _votes_total.clear()
        _vote_handler_errors_total.clear()
