from sentinel.backend.core.simulation.filters import RunFilter, run_sort_key
from sentinel.backend.core.simulation.run import SimulationRun
from sentinel.backend.core.simulation.service import RunChange, RunService
from sentinel.backend.core.simulation.store import InMemoryRunRepository

__all__ = [
    "SimulationRun",
    "RunFilter",
    "run_sort_key",
    "InMemoryRunRepository",
    "RunService",
    "RunChange",
]
