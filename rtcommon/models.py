"""Data model for real-time tasks.

An `RTTask` follows the Liu-Layland model: each task is characterized by
its Worst Case Execution Time (WCET), relative deadline and (minimum
inter-arrival) period.
"""

from __future__ import annotations

from dataclasses import dataclass

from rtcommon.units import Time, ieee_div


@dataclass(frozen=True)
class RTTask:
    """A periodic or sporadic real-time task.

    The task is a plain value holder: degenerate values (zero period,
    WCET larger than the deadline, ...) are accepted as they are and show
    up as inf/nan metrics or negative laxity.

    Attributes:
        wcet: Worst Case Execution Time.
        deadline: Relative deadline.
        period: (Minimum inter-arrival) period.
    """
    wcet: Time
    deadline: Time
    period: Time

    @classmethod
    def new_ns(cls, wcet: int, deadline: int, period: int) -> RTTask:
        """Build a task from nanosecond counts."""
        return cls(
            wcet=Time.nanos(float(wcet)),
            deadline=Time.nanos(float(deadline)),
            period=Time.nanos(float(period)),
        )

    def utilization(self) -> float:
        """WCET / Period"""
        return ieee_div(self.wcet.value_ns, self.period.value_ns)

    def density(self) -> float:
        """WCET / Deadline"""
        return ieee_div(self.wcet.value_ns, self.deadline.value_ns)

    def laxity(self) -> Time:
        """Deadline - WCET"""
        return self.deadline - self.wcet

    def has_implicit_deadline(self) -> bool:
        """Deadline == Period"""
        return self.deadline == self.period

    def has_constrained_deadline(self) -> bool:
        """Deadline <= Period"""
        return self.deadline <= self.period

    def __str__(self) -> str:
        return f"RTTask(wcet={self.wcet}, deadline={self.deadline}, period={self.period})"
