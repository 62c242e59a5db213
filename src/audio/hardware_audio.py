"""Hardware capture backend using sounddevice.

Captures audio from the system's default (or configured) input device.
Not required for local development; MockAudio covers that.
"""

import logging
import sys
import threading
import time

import numpy as np

from audio.base import SUPPORTED_DTYPES, BaseAudio, CaptureConfig, RawCapture
from errors import DeviceError

log = logging.getLogger(__name__)

INT16_MAX = 32767


def _import_sounddevice():
    """Import sounddevice with aarch64 Python 3.11 find_library workaround.

    ctypes.util.find_library is broken on aarch64 Python <3.12.4 — the
    ldconfig parser regex doesn't match the AArch64 tag format.
    See: https://github.com/python/cpython/issues/112417
    """
    import ctypes.util
    import platform

    if platform.machine() != "aarch64" or sys.version_info >= (3, 12, 4):
        import sounddevice

        return sounddevice

    _orig = ctypes.util.find_library

    def _patched(name):
        result = _orig(name)
        if result is None and name == "portaudio":
            return "libportaudio.so.2"
        return result

    ctypes.util.find_library = _patched
    try:
        import sounddevice

        return sounddevice
    finally:
        ctypes.util.find_library = _orig


class _FrameAccumulator:
    """Lock-guarded block list plus an error slot, shared with the stream callback.

    The callback is the only writer; the caller reads once, after the
    stream has been closed.
    """

    def __init__(self, dtype: str):
        self._lock = threading.Lock()
        self._blocks: list[np.ndarray] = []
        self._error: str | None = None
        self._divisor = INT16_MAX if dtype == "int16" else None

    def append(self, indata) -> None:
        # indata is reused by PortAudio after the callback returns
        block = np.asarray(indata).astype(np.float32).reshape(-1)
        if self._divisor is not None:
            block /= self._divisor
        with self._lock:
            self._blocks.append(block)

    def record_error(self, message: str) -> None:
        with self._lock:
            self._error = message

    def drain(self) -> tuple[np.ndarray, str | None]:
        with self._lock:
            blocks, self._blocks = self._blocks, []
            error = self._error
        if not blocks:
            return np.zeros(0, dtype=np.float32), error
        return np.concatenate(blocks), error


class HardwareAudio(BaseAudio):
    """Real microphone capture via sounddevice."""

    def __init__(self, config: dict):
        try:
            self._sd = _import_sounddevice()
        except (ImportError, OSError) as e:
            raise DeviceError(
                "sounddevice is required for hardware audio mode. "
                "Install it with: pip install sounddevice "
                "(and the PortAudio library, e.g. apt-get install libportaudio2)"
            ) from e
        self._device = self._parse_device(config.get("audio_device"))
        self._dtype = config.get("audio_dtype", "float32")
        # Optional overrides; by default the device's own settings are used
        self._sample_rate = config.get("audio_sample_rate")
        self._channels = config.get("audio_channels")
        log.info("HardwareAudio initialized: device=%r, dtype=%s", self._device, self._dtype)

    @staticmethod
    def _parse_device(value):
        """Parse device config: None, integer index, or string name."""
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return value  # string name/substring for sounddevice

    def _query_capture_config(self, duration: float) -> CaptureConfig:
        """Resolve the input device and its default rate and channel count."""
        sd = self._sd
        try:
            info = sd.query_devices(self._device, kind="input")
        except (sd.PortAudioError, ValueError) as e:
            raise DeviceError(f"no audio input device available: {e}") from e

        try:
            rate = int(self._sample_rate or info["default_samplerate"])
            max_channels = int(info["max_input_channels"])
        except (KeyError, TypeError, ValueError) as e:
            raise DeviceError(f"failed to get default input config: {e}") from e
        if rate <= 0 or max_channels < 1:
            raise DeviceError(
                f"failed to get default input config: {info.get('name', self._device)!r} "
                f"reports {rate}Hz, {max_channels} input channels"
            )

        # Virtual devices (pulse, pipewire) advertise dozens of channels
        channels = min(int(self._channels or 2), max_channels)
        log.debug("Input device %r: %dHz, %dch", info.get("name"), rate, channels)
        return CaptureConfig(
            native_sample_rate=rate,
            channel_count=channels,
            capture_duration=duration,
        )

    def capture(self, duration: float) -> RawCapture:
        """Record from the input device for exactly ``duration`` seconds."""
        if self._dtype not in SUPPORTED_DTYPES:
            raise DeviceError(f"unsupported sample format: {self._dtype}")

        sd = self._sd
        capture_config = self._query_capture_config(duration)
        accumulator = _FrameAccumulator(self._dtype)

        def callback(indata, frames, time_info, status):
            if status:
                accumulator.record_error(str(status))
            accumulator.append(indata)

        try:
            stream = sd.InputStream(
                samplerate=capture_config.native_sample_rate,
                channels=capture_config.channel_count,
                dtype=self._dtype,
                callback=callback,
                device=self._device,
            )
        except (sd.PortAudioError, ValueError) as e:
            raise DeviceError(f"failed to build input stream: {e}") from e

        log.info(
            "Recording %.1fs from mic (%dHz, %dch)...",
            capture_config.capture_duration, capture_config.native_sample_rate,
            capture_config.channel_count,
        )
        try:
            try:
                stream.start()
            except sd.PortAudioError as e:
                raise DeviceError(f"failed to start audio stream: {e}") from e
            time.sleep(capture_config.capture_duration)
        finally:
            stream.close()

        frames, error = accumulator.drain()
        if error:
            log.warning("Audio stream reported: %s (keeping %d samples)", error, frames.size)

        max_samples = (
            int(capture_config.native_sample_rate * capture_config.capture_duration)
            * capture_config.channel_count
        )
        return RawCapture(
            frames=frames[:max_samples],
            sample_rate=capture_config.native_sample_rate,
            channels=capture_config.channel_count,
            error=error,
        )
