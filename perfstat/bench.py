"""
Benchmark Harness

Misura il tempo di esecuzione di implementazioni alternative della stessa
operazione e ne confronta i risultati:
- time_function: cronometra una singola funzione (perf_counter, mediana)
- compare: verifica che tutte le varianti diano lo stesso risultato della
  prima (riferimento), poi le cronometra
- BenchmarkReport: tabella pandas, speedup relativi, riga di sommario per il log
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

import numpy as np
import pandas as pd

from .logger import LogManager

log = LogManager("bench").get_logger()

DEFAULT_RUNS = 20
DEFAULT_WARMUP = 2

CheckFn = Callable[[Any, Any], bool]


class BenchmarkMismatchError(AssertionError):
    """Una variante ha prodotto un risultato diverso dal riferimento."""
    pass


@dataclass(slots=True)
class Timing:
    """Tempi di una singola implementazione (secondi)."""
    name: str
    runs: int
    min_s: float
    median_s: float
    mean_s: float

    @property
    def per_call_us(self) -> float:
        return self.median_s * 1e6


@dataclass
class BenchmarkReport:
    """Risultati di un confronto fra implementazioni."""
    label: str
    timings: List[Timing] = field(default_factory=list)

    @property
    def fastest(self) -> Optional[Timing]:
        if not self.timings:
            return None
        return min(self.timings, key=lambda t: t.median_s)

    def relative(self) -> Dict[str, float]:
        """Tempo mediano di ogni variante diviso per quello della più veloce."""
        best = self.fastest
        if best is None:
            return {}
        base = best.median_s if best.median_s > 0 else np.finfo(float).tiny
        return {t.name: t.median_s / base for t in self.timings}

    def to_frame(self) -> pd.DataFrame:
        rel = self.relative()
        rows = [
            {
                "name": t.name,
                "runs": t.runs,
                "min_us": t.min_s * 1e6,
                "median_us": t.per_call_us,
                "mean_us": t.mean_s * 1e6,
                "relative": rel.get(t.name, np.nan),
            }
            for t in self.timings
        ]
        columns = ["name", "runs", "min_us", "median_us", "mean_us", "relative"]
        return pd.DataFrame(rows, columns=columns).sort_values("median_us", ignore_index=True)

    def summary(self) -> str:
        """Single-line summary for logging"""
        best = self.fastest
        if best is None:
            return f"{self.label}: nessuna misura"
        parts = [f"{name}={ratio:.1f}x" for name, ratio in self.relative().items()]
        return f"{self.label}: fastest={best.name} ({best.per_call_us:.1f} μs) [{', '.join(parts)}]"


def time_function(
    func: Callable[..., Any],
    *args: Any,
    runs: int = DEFAULT_RUNS,
    warmup: int = DEFAULT_WARMUP,
    name: Optional[str] = None,
    **kwargs: Any,
) -> Timing:
    """Esegue func `warmup` volte senza misurare, poi `runs` volte misurando."""
    if runs < 1:
        raise ValueError("runs deve essere >= 1.")

    for _ in range(max(0, warmup)):
        func(*args, **kwargs)

    times = np.empty(runs, dtype=np.float64)
    for i in range(runs):
        start = time.perf_counter()
        func(*args, **kwargs)
        times[i] = time.perf_counter() - start

    return Timing(
        name=name or getattr(func, "__name__", "func"),
        runs=runs,
        min_s=float(times.min()),
        median_s=float(np.median(times)),
        mean_s=float(times.mean()),
    )


def compare(
    implementations: Mapping[str, Callable[..., Any]],
    *args: Any,
    runs: int = DEFAULT_RUNS,
    warmup: int = DEFAULT_WARMUP,
    check: Optional[CheckFn] = None,
    label: str = "benchmark",
    **kwargs: Any,
) -> BenchmarkReport:
    """
    Confronta più implementazioni sugli stessi argomenti.

    La prima voce di `implementations` è il riferimento: se `check` è fornito,
    check(riferimento, candidato) deve essere True per ogni altra variante,
    altrimenti BenchmarkMismatchError.
    """
    if not implementations:
        raise ValueError("Nessuna implementazione da confrontare.")

    if check is not None:
        items = list(implementations.items())
        ref_name, ref_func = items[0]
        reference = ref_func(*args, **kwargs)
        for name, func in items[1:]:
            if not check(reference, func(*args, **kwargs)):
                msg = f"'{name}' non coincide con il riferimento '{ref_name}'"
                log.error("%s: %s", label, msg)
                raise BenchmarkMismatchError(msg)

    report = BenchmarkReport(label=label)
    for name, func in implementations.items():
        report.timings.append(time_function(func, *args, runs=runs, warmup=warmup, name=name, **kwargs))

    log.info("%s", report.summary())
    return report
