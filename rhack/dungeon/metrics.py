from typing import Dict


def init_metrics() -> Dict[str, int | float | bool | dict]:
    return {
        'rooms': 0,
        'room_attempts': 0,
        'room_failures': 0,
        'rects_peak': 0,
        'rects_dropped': 0,
        'joins_attempted': 0,
        'corridors_dug': 0,
        'corridors_abandoned': 0,
        'corridors_unlinked': 0,
        'corridor_steps_max': 0,
        'secret_corridors': 0,
        'doors_created': 0,
        'doors_dropped': 0,
        'convergence_scans': 0,
        'components': 0,
        'vault': False,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
