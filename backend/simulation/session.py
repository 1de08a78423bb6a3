"""Process-wide session statistics."""

import dataclasses

from core.models import SessionStats


class SessionTracker:
    def __init__(self) -> None:
        self.stats = SessionStats()

    def open_session(self) -> None:
        self.stats.total_sessions += 1

    def record_overload(self) -> None:
        self.stats.overload_count += 1

    def record_efficient(self) -> None:
        self.stats.efficient_sessions += 1

    def record_devices(self, count: int) -> None:
        self.stats.current_devices_used = count
        self.stats.max_devices_used = max(self.stats.max_devices_used, count)

    def reset(self) -> None:
        """Zero all counters except the number of sessions opened."""
        self.stats = SessionStats(total_sessions=self.stats.total_sessions)

    def snapshot(self) -> SessionStats:
        return dataclasses.replace(self.stats)
