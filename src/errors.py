"""Error types shared by capture, transcription and wake-phrase detection.

Every error carries a human-readable message; the request boundary in
voice_pipeline turns them into "Error: ..." strings for the caller.
"""


class SttError(Exception):
    """Base class for all expected failures of a request."""


class DeviceError(SttError):
    """No input device, bad device config, unsupported format, or stream failure."""


class EmptyCaptureError(SttError):
    """The device produced no samples in the capture window."""


class NoAudioAfterTriggerError(EmptyCaptureError):
    """The wake phrase was heard but the command capture came back empty."""


class ModelLoadError(SttError):
    """The speech model is missing, corrupt or unreadable."""


class TranscriptionError(SttError):
    """Inference failed on a given buffer."""


class WakePhraseTimeout(SttError, TimeoutError):
    """The wake phrase was not heard before the deadline."""
