"""stt-mcp - microphone speech-to-text served as MCP tools over stdio."""

import logging
import logging.handlers
from pathlib import Path

from audio import get_audio
from config import load_config
from server import create_server

log = logging.getLogger("stt-mcp")


def setup_logging(config: dict) -> None:
    """Configure root logger with console (stderr) and rotating file handlers.

    stdout is reserved for the MCP stdio transport.
    """
    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    level = getattr(logging, config["log_level"].upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    console = logging.StreamHandler()  # stderr
    console.setFormatter(fmt)
    root.addHandler(console)

    log_dir = Path(config["log_dir"])
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / "stt-mcp.log",
        maxBytes=1_000_000,
        backupCount=3,
    )
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)


def main():
    config = load_config()
    setup_logging(config)

    log.info(
        "Starting stt-mcp (audio=%s, stt=%s, model=%s)",
        config["audio_mode"], config["stt_mode"], config["stt_model_path"],
    )
    audio = get_audio(config)
    server = create_server(config, audio)
    try:
        server.run(transport="stdio")
    finally:
        audio.close()
        log.info("stt-mcp stopped.")


if __name__ == "__main__":
    main()
