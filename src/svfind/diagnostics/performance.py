"""
Resource tracking between pipeline stages.
"""

import json
import logging
import time
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Dict, List, Optional

import psutil

logger = logging.getLogger(__name__)


@dataclass
class ResourceSnapshot:
    """Resources used by one stage (or in total)."""
    label: str
    wall_seconds: float
    cpu_seconds: float
    memory_mb: float

    def describe(self) -> str:
        return (f"{self.label}: {self.wall_seconds:.2f}s elapsed, "
                f"{self.cpu_seconds:.2f}s cpu, {self.memory_mb:.1f} MB resident")


class ResourceTracker:
    """Record elapsed time, CPU time and memory at named checkpoints."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger
        self.process = psutil.Process()
        self.start_wall = time.time()
        self.start_cpu = self._cpu_seconds()
        self.last_wall = self.start_wall
        self.last_cpu = self.start_cpu
        self.peak_memory_mb = self._memory_mb()
        self.stages: List[ResourceSnapshot] = []

    def _cpu_seconds(self) -> float:
        times = self.process.cpu_times()
        return times.user + times.system

    def _memory_mb(self) -> float:
        return self.process.memory_info().rss / (1024 * 1024)

    def update(self, label: str) -> ResourceSnapshot:
        """Close the current stage and log what it used."""
        wall, cpu, memory = time.time(), self._cpu_seconds(), self._memory_mb()
        self.peak_memory_mb = max(self.peak_memory_mb, memory)
        snapshot = ResourceSnapshot(label, wall - self.last_wall, cpu - self.last_cpu, memory)
        self.last_wall, self.last_cpu = wall, cpu
        self.stages.append(snapshot)
        self.log.info(snapshot.describe())
        return snapshot

    def total(self) -> ResourceSnapshot:
        """Log the resources used since the tracker was created."""
        memory = self._memory_mb()
        self.peak_memory_mb = max(self.peak_memory_mb, memory)
        snapshot = ResourceSnapshot('Total resources used',
                                    time.time() - self.start_wall,
                                    self._cpu_seconds() - self.start_cpu,
                                    self.peak_memory_mb)
        self.log.info(snapshot.describe())
        return snapshot

    def get_report(self) -> Dict:
        return {
            'start_time': datetime.fromtimestamp(self.start_wall).isoformat(),
            'total_time_seconds': time.time() - self.start_wall,
            'peak_memory_mb': self.peak_memory_mb,
            'stages': [asdict(s) for s in self.stages],
        }

    def save_report(self, filepath: str):
        """Save the resource report as JSON."""
        with open(filepath, 'w') as f:
            json.dump(self.get_report(), f, indent=2)


__all__ = [
    'ResourceSnapshot',
    'ResourceTracker',
]
