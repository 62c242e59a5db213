"""Request flows: record → normalize → transcribe, optionally behind a wake phrase.

Each flow is blocking. run_request() moves one onto a worker thread so the
server loop stays responsive, and turns failures into "Error: ..." strings.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from acquisition import record_samples
from audio.base import BaseAudio
from errors import EmptyCaptureError, SttError
from speech import load_stt, transcribe_once
from wake.phrase import WakePhraseDetector

log = logging.getLogger("stt-mcp.voice")


def record_and_transcribe(
    config: dict,
    audio: BaseAudio,
    duration: float,
    language: str = "en",
) -> str:
    """Record ``duration`` seconds and transcribe them with a freshly loaded model."""
    samples = record_samples(audio, duration)
    if samples.size == 0:
        raise EmptyCaptureError("no audio samples captured")
    return transcribe_once(config, samples, language)


def listen_and_transcribe(
    config: dict,
    audio: BaseAudio,
    record_duration: float = 5,
    timeout: float = 60,
    language: str = "en",
) -> str:
    """Wait for the wake phrase, then record and transcribe the command.

    The model is loaded once and shared by every polling chunk and the
    final command; it is released when the request finishes.
    """
    with load_stt(config) as stt:
        detector = WakePhraseDetector(audio, stt, config)
        return detector.listen(record_duration, timeout, language)


async def run_request(func: Callable[..., str], *args) -> str:
    """Run a blocking request flow on a worker thread.

    Returns the transcribed text, or a message starting with "Error: ".
    """
    name = getattr(func, "__name__", "request")
    try:
        return await asyncio.to_thread(func, *args)
    except SttError as e:
        log.warning("%s failed: %s", name, e)
        return f"Error: {e}"
    except Exception as e:
        log.exception("%s crashed", name)
        return f"Error: task failed: {e}"
