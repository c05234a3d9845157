from __future__ import annotations

from typing import Protocol, Sequence

from utils.subprocess_utils import EngineRun


class IMediaEngine(Protocol):
    """The external transcoder, reduced to argv in and exit status/streams out."""

    def run(self, args: Sequence[str], operation_name: str = "FFmpeg") -> EngineRun:
        """Run the engine with ``args`` (binary excluded) and wait for it.

        Raises EngineNotFoundError / EngineLaunchError when it cannot start.
        """
        ...

    def version(self) -> str:
        """First line of the version banner; raises EngineUnavailableError."""
        ...
