from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterator

# Durations are integer nanoseconds throughout the engine.
Duration = int


def validate_sample(sample: Duration) -> Duration:
    if isinstance(sample, bool) or not isinstance(sample, int):
        raise TypeError(f"sample must be an integer nanosecond duration, got {sample!r}")
    if sample < 0:
        raise ValueError(f"sample must be >= 0, got {sample}")
    return sample


class OrderedSampleStore:
    """Append-only history of samples kept in ascending order."""

    def __init__(self) -> None:
        self._samples: list[Duration] = []

    def insert(self, sample: Duration) -> None:
        validate_sample(sample)
        index = bisect_right(self._samples, sample)
        self._samples.insert(index, sample)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Duration]:
        return iter(self._samples)

    def __getitem__(self, index: int) -> Duration:
        return self._samples[index]

    def as_tuple(self) -> tuple[Duration, ...]:
        return tuple(self._samples)
