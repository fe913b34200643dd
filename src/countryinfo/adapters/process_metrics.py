"""Process CPU and memory metrics, read at scrape time."""

import logging
import time

import psutil

from countryinfo.core.metrics import (
    PROCESS_CPU_SECONDS,
    PROCESS_CPU_SYSTEM_SECONDS,
    PROCESS_CPU_USER_SECONDS,
    PROCESS_OPEN_FDS,
    PROCESS_RESIDENT_MEMORY,
    PROCESS_START_TIME,
    PROCESS_VIRTUAL_MEMORY,
)
from countryinfo.core.models import MetricSample

logger = logging.getLogger(__name__)


def collect_process_metrics(process: psutil.Process | None = None) -> list[MetricSample]:
    """Read one snapshot of the current process's resource usage.

    The values are cumulative or point-in-time readings from the OS, so
    they are returned for encoding rather than added to the registry.

    Args:
        process: Process to inspect (default: the running process).

    Returns:
        One unlabeled sample per available process metric. Metrics the
        platform cannot report are left out.
    """
    process = process or psutil.Process()
    now = time.time()

    def sample(name: str, value: float) -> MetricSample:
        return MetricSample(name=name, timestamp=now, value=float(value), labels={})

    samples: list[MetricSample] = []
    try:
        with process.oneshot():
            cpu = process.cpu_times()
            memory = process.memory_info()
            samples.extend(
                [
                    sample(PROCESS_CPU_USER_SECONDS.name, cpu.user),
                    sample(PROCESS_CPU_SYSTEM_SECONDS.name, cpu.system),
                    sample(PROCESS_CPU_SECONDS.name, cpu.user + cpu.system),
                    sample(PROCESS_RESIDENT_MEMORY.name, memory.rss),
                    sample(PROCESS_VIRTUAL_MEMORY.name, memory.vms),
                    sample(PROCESS_START_TIME.name, process.create_time()),
                ]
            )
            # POSIX only
            if hasattr(process, "num_fds"):
                samples.append(sample(PROCESS_OPEN_FDS.name, process.num_fds()))
    except psutil.Error as exc:
        logger.debug("Process metrics unavailable: %s", exc)
    return samples
