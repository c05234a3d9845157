"""
Custom exception types

These are raised inside the infrastructure layer and converted into result
values (StitchResult, AudioInfo, ImageInfo, EngineStatus) before they reach a
caller of StitchService.
"""

from typing import Optional, Sequence


class StitchError(Exception):
    """Base exception for stitching errors"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ManifestError(StitchError):
    """Raised when the concat manifest cannot be created or written"""

    def __init__(self, message: str, manifest_path: Optional[str] = None):
        super().__init__(message, "MANIFEST_ERROR")
        self.manifest_path = manifest_path


class EngineError(StitchError):
    """
    Raised when the external engine could not be run.

    Carries the command that was attempted so logs show exactly what was
    executed.
    """

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
        error_code: str = "ENGINE_ERROR",
    ):
        super().__init__(message, error_code)
        self.command = list(command) if command else None
        self.returncode = returncode
        self.stderr = stderr

    def __str__(self):
        """Format the error message with available details."""
        parts = [self.message]
        if self.command:
            parts.append(f"Command: {' '.join(str(x) for x in self.command)}")
        if self.returncode is not None:
            parts.append(f"Exit code: {self.returncode}")
        if self.stderr:
            stderr = str(self.stderr)
            if len(stderr) > 500:
                stderr = stderr[:500] + "... [truncated]"
            parts.append(f"Error output: {stderr}")
        return "\n".join(parts)


class EngineNotFoundError(EngineError):
    """The executable is not installed or not on PATH"""

    def __init__(self, message: str, command: Optional[Sequence[str]] = None):
        super().__init__(message, command, error_code="ENGINE_NOT_FOUND")


class EngineLaunchError(EngineError):
    """The executable exists but the OS refused to start it"""

    def __init__(self, message: str, command: Optional[Sequence[str]] = None):
        super().__init__(message, command, error_code="ENGINE_LAUNCH_ERROR")


class EngineTimeoutError(EngineError):
    """The configured ffmpeg_timeout elapsed before the process exited"""

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(message, command, error_code="ENGINE_TIMEOUT")
        self.timeout = timeout


class EngineUnavailableError(StitchError):
    """Availability check failed

    Args:
        message (str): Human readable reason
        installed (bool): True when the binary ran but exited non-zero
    """

    def __init__(self, message: str, installed: bool = False):
        super().__init__(message, "ENGINE_UNAVAILABLE")
        self.installed = installed
