"""Statistics tracking for SharePoint Uploader (spupload)."""

from datetime import datetime


def _initial_stats():
    return {
        "folders_found": 0,
        "folders_created": 0,
        "chunks_uploaded": 0,
        "uploaded_size": 0,
        "start_time": datetime.now(),
    }


class OperationStats:
    """Counters for a single upload run."""

    def __init__(self):
        self.stats = _initial_stats()

    def update(self, **kwargs):
        """Increment the named counters."""
        for key, value in kwargs.items():
            if key in self.stats:
                self.stats[key] += value

    def get_stats(self):
        """Get a copy of current statistics."""
        return self.stats.copy()

    def get_duration(self):
        """Get operation duration."""
        return datetime.now() - self.stats["start_time"]

    def get_transfer_speed_mb_per_sec(self):
        """Calculate transfer speed in MB/s."""
        duration = self.get_duration()

        if duration.total_seconds() == 0:
            return 0.0

        mb_transferred = self.stats["uploaded_size"] / 1024 / 1024
        return mb_transferred / duration.total_seconds()
