"""
Shared test configuration and fixtures for the stitcher.
"""

import logging
import os
import subprocess
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pytest

from traffic_stitcher.application.use_cases.stitch_service import StitchService
from traffic_stitcher.core.config import Settings
from traffic_stitcher.core.exceptions import EngineUnavailableError
from traffic_stitcher.infrastructure.adapters.bundles.stitch import (
    get_stitch_adapter_bundle,
)
from utils.subprocess_utils import EngineRun

logger = logging.getLogger(__name__)


def setup_logging():
    """Console logging for the whole test session."""
    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(console_handler)

    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("filelock").setLevel(logging.WARNING)


def pytest_configure(config):  # pylint: disable=unused-argument
    setup_logging()
    logging.getLogger("pytest").info("Working directory: %s", os.getcwd())


@pytest.fixture(autouse=True)
def log_test_name(request):
    """Log test name when test starts and finishes."""
    test_logger = logging.getLogger(request.node.nodeid)
    test_logger.info("Starting test: %s", request.node.name)
    start_time = datetime.now()

    def log_test_end():
        duration = (datetime.now() - start_time).total_seconds()
        has_rep_call = hasattr(request.node, "rep_call")
        if has_rep_call and request.node.rep_call.failed:
            test_logger.error("Test failed after %.2fs", duration)
        else:
            test_logger.info("Test finished after %.2fs", duration)

    request.addfinalizer(log_test_end)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Add test result to report object."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


# -------------------- Fake engine --------------------
class FakeEngine:
    """Records every invocation instead of running ffmpeg.

    For concat invocations the manifest is read at call time, so tests can
    check it was complete before the engine started.
    """

    def __init__(
        self,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        exc: Optional[Exception] = None,
        version: str = "ffmpeg version 6.1.1 Copyright (c) 2000-2023 the FFmpeg developers",
        version_error: Optional[EngineUnavailableError] = None,
        create_output: bool = False,
    ):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.exc = exc
        self._version = version
        self.version_error = version_error
        self.create_output = create_output
        self.calls: List[List[str]] = []
        self.manifests: List[Optional[str]] = []

    def run(self, args, operation_name="FFmpeg"):
        args = [str(a) for a in args]
        self.calls.append(args)
        manifest = None
        if "concat" in args:
            manifest_path = args[args.index("concat") + 4]
            manifest = Path(manifest_path).read_text(encoding="utf-8")
        self.manifests.append(manifest)
        if self.exc is not None:
            raise self.exc
        if self.create_output and self.returncode == 0:
            Path(args[-1]).write_bytes(b"stitched")
        return EngineRun(self.returncode, self.stdout, self.stderr)

    def version(self):
        if self.version_error is not None:
            raise self.version_error
        return self._version


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def clip_files(tmp_path) -> List[str]:
    """Three small placeholder audio files, one with a quote in its name."""
    names = ["01 intro.mp3", "02 it's.wav", "03 outro.flac"]
    paths = []
    for name in names:
        p = tmp_path / "clips" / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"\x00" * 64)
        paths.append(str(p))
    return paths


@pytest.fixture
def stitch_settings(tmp_path) -> Settings:
    manifest_dir = tmp_path / "manifests"
    manifest_dir.mkdir()
    return Settings(temp_dir=str(manifest_dir), _env_file=None)


@pytest.fixture
def fake_completed(monkeypatch):
    """Patch subprocess.run with a canned result; returns the list of commands run."""

    def _install(returncode: int = 0, stdout: str = "", stderr: str = ""):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append(list(cmd))
            return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)

        monkeypatch.setattr(subprocess, "run", fake_run)
        return calls

    return _install


@pytest.fixture
def real_service(stitch_settings) -> StitchService:
    """Service wired to the real ffmpeg adapters (subprocess may be patched)."""
    return StitchService(get_stitch_adapter_bundle(cfg=stitch_settings))


@pytest.fixture
def make_engine():
    """Factory for FakeEngine with custom behaviour."""
    return FakeEngine
