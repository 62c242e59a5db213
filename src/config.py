"""Configuration management for the speech-to-text server."""

import os
from pathlib import Path

# Project root is one level up from src/
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"

# Conventional install location for a converted faster-whisper model
DEFAULT_MODEL_DIR = Path.home() / ".local" / "share" / "stt-mcp" / "faster-whisper-base"
DEFAULT_MODEL_NAME = "base"


def _load_env_file(path: Path) -> None:
    """Copy KEY=value lines from path into os.environ (existing vars win)."""
    if not path.exists():
        return
    with open(path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            key, _, value = line.partition("=")
            key, value = key.strip(), value.strip().strip("\"'")
            if key not in os.environ:
                os.environ[key] = value


def _optional_int(value: str | None) -> int | None:
    """Parse an optional integer setting; unset or empty means None."""
    if value is None or not value.strip():
        return None
    return int(value)


def resolve_model_path() -> str:
    """Pick the Whisper model: $WHISPER_MODEL_PATH, the install dir, or a model name."""
    env_path = os.getenv("WHISPER_MODEL_PATH")
    if env_path:
        return os.path.expanduser(env_path)
    if DEFAULT_MODEL_DIR.exists():
        return str(DEFAULT_MODEL_DIR)
    return DEFAULT_MODEL_NAME


def load_config(env_file: Path = ENV_FILE) -> dict:
    """Load configuration from environment variables and .env file."""
    _load_env_file(env_file)

    return {
        # Logging
        "log_level": os.getenv("STT_LOG_LEVEL", "INFO"),
        "log_dir": os.getenv("STT_LOG_DIR", str(PROJECT_ROOT / "logs")),

        # Audio capture
        "audio_mode": os.getenv("STT_AUDIO_MODE", "hardware"),  # "hardware" or "mock"
        "audio_device": os.getenv("STT_AUDIO_DEVICE") or None,
        "audio_dtype": os.getenv("STT_AUDIO_DTYPE", "float32"),  # "float32" or "int16"
        # Optional overrides of the device defaults
        "audio_sample_rate": _optional_int(os.getenv("STT_AUDIO_SAMPLE_RATE")),
        "audio_channels": _optional_int(os.getenv("STT_AUDIO_CHANNELS")),
        "audio_mock_input_file": os.getenv("STT_AUDIO_MOCK_INPUT") or None,

        # Speech-to-text
        "stt_mode": os.getenv("STT_MODE", "whisper"),  # "whisper" or "mock"
        "stt_model_path": resolve_model_path(),
        "stt_compute_type": os.getenv("STT_COMPUTE_TYPE", "int8"),
        "stt_language": os.getenv("STT_LANGUAGE", "en"),

        # Requests
        "voice_record_duration": int(os.getenv("STT_RECORD_DURATION", "5")),

        # Wake phrase polling
        "wake_phrase": os.getenv("STT_WAKE_PHRASE", "hey claude code"),
        "wake_chunk_duration": float(os.getenv("STT_WAKE_CHUNK_DURATION", "2")),
        "wake_timeout": float(os.getenv("STT_WAKE_TIMEOUT", "60")),
    }
