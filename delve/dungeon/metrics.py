from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'walkers': 0,
        'walker_steps': 0,
        'cells_carved': 0,
        'regions_joined': 0,
        'corridor_cells': 0,
        'spawn_points': 0,
        'floor_tiles': 0,
        'guard_candidates': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
