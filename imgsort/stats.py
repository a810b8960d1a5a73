"""
Statistics tracking for media sorting runs.
"""


class StatsManager:
    """Encapsulates counters and phase timings for one sorting run."""

    def __init__(self):
        self._stats = {
            'found': 0,
            'dated': 0,
            'undated': 0,
            'unreadable': 0,
            'copied': 0,
            'renamed': 0,
            'overwritten': 0,
        }
        self._durations = {
            'discovery': 0.0,
            'materialization': 0.0,
        }

    def record_found(self, dated: bool) -> None:
        """Count a discovered file, split by whether a capture date was found."""
        self._stats['found'] += 1
        if dated:
            self._stats['dated'] += 1
        else:
            self._stats['undated'] += 1

    def record_unreadable(self) -> None:
        """Count a discovered file that could not be opened and was skipped."""
        self._stats['found'] += 1
        self._stats['unreadable'] += 1

    def record_placement(self, outcome: str) -> None:
        """Record a file written to the destination with the given outcome."""
        self._stats['copied'] += 1
        if outcome in ('renamed', 'overwritten'):
            self._stats[outcome] += 1

    def set_duration(self, phase: str, seconds: float) -> None:
        self._durations[phase] = seconds

    def get_duration(self, phase: str) -> float:
        return self._durations[phase]

    # Individual stat getters for reporting
    def get_found(self) -> int:
        return self._stats['found']

    def get_dated(self) -> int:
        return self._stats['dated']

    def get_undated(self) -> int:
        return self._stats['undated']

    def get_unreadable(self) -> int:
        return self._stats['unreadable']

    def get_copied(self) -> int:
        return self._stats['copied']

    def get_renamed(self) -> int:
        return self._stats['renamed']

    def get_overwritten(self) -> int:
        return self._stats['overwritten']
