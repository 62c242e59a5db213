"""Tests for configuration loading."""

import sys
from pathlib import Path

# Add src to path so imports work
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import config as config_mod
from config import load_config, resolve_model_path

ENV_VARS = [
    "STT_AUDIO_MODE", "STT_MODE", "STT_WAKE_PHRASE", "STT_WAKE_TIMEOUT",
    "STT_RECORD_DURATION", "WHISPER_MODEL_PATH", "STT_AUDIO_DEVICE",
    "STT_WAKE_CHUNK_DURATION", "STT_LANGUAGE",
]


def _clear_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    monkeypatch.setattr(config_mod, "DEFAULT_MODEL_DIR", tmp_path / "missing")

    config = load_config(tmp_path / ".env")

    assert config["audio_mode"] == "hardware"
    assert config["stt_mode"] == "whisper"
    assert config["stt_model_path"] == "base"
    assert config["stt_language"] == "en"
    assert config["voice_record_duration"] == 5
    assert config["wake_phrase"] == "hey claude code"
    assert config["wake_chunk_duration"] == 2.0
    assert config["wake_timeout"] == 60.0
    assert config["audio_device"] is None


def test_env_file_values_are_loaded(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "STT_MODE=mock\n"
        "STT_WAKE_PHRASE='ok computer'\n"
        "\n"
        "STT_WAKE_TIMEOUT=15\n"
    )
    # Entries written to os.environ are undone by monkeypatch
    for name in ("STT_MODE", "STT_WAKE_PHRASE", "STT_WAKE_TIMEOUT"):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)

    config = load_config(env_file)

    assert config["stt_mode"] == "mock"
    assert config["wake_phrase"] == "ok computer"
    assert config["wake_timeout"] == 15.0


def test_existing_env_wins_over_env_file(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    monkeypatch.setenv("STT_MODE", "whisper")
    env_file = tmp_path / ".env"
    env_file.write_text("STT_MODE=mock\n")

    assert load_config(env_file)["stt_mode"] == "whisper"


def test_model_path_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("WHISPER_MODEL_PATH", str(tmp_path / "model"))
    assert resolve_model_path() == str(tmp_path / "model")


def test_model_path_falls_back_to_install_dir(monkeypatch, tmp_path):
    monkeypatch.delenv("WHISPER_MODEL_PATH", raising=False)
    monkeypatch.setattr(config_mod, "DEFAULT_MODEL_DIR", tmp_path)
    assert resolve_model_path() == str(tmp_path)


def test_audio_overrides_unset_by_default(monkeypatch, tmp_path):
    monkeypatch.delenv("STT_AUDIO_SAMPLE_RATE", raising=False)
    monkeypatch.delenv("STT_AUDIO_CHANNELS", raising=False)

    config = load_config(tmp_path / ".env")

    assert config["audio_sample_rate"] is None
    assert config["audio_channels"] is None


def test_audio_overrides_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("STT_AUDIO_SAMPLE_RATE", "44100")
    monkeypatch.setenv("STT_AUDIO_CHANNELS", "4")

    config = load_config(tmp_path / ".env")

    assert config["audio_sample_rate"] == 44100
    assert config["audio_channels"] == 4
