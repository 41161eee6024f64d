"""
Host system probes.
"""
import platform
from typing import Optional, TypedDict

import psutil


class CpuInfo(TypedDict):
    cores: int
    cpu_model: Optional[str]


def detect_cpu() -> CpuInfo:
    """Return the logical core count and, when known, the CPU model."""
    cores = psutil.cpu_count(logical=True) or 0
    return {"cores": cores, "cpu_model": platform.processor() or None}
