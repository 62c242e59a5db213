"""MCP tool surface: exposes the request flows to an MCP client over stdio."""

import logging

from mcp.server.fastmcp import FastMCP

from audio import get_audio
from audio.base import BaseAudio
from voice_pipeline import listen_and_transcribe, record_and_transcribe, run_request

log = logging.getLogger("stt-mcp.server")

INSTRUCTIONS = (
    "Speech-to-text server. Use record_and_transcribe to capture audio from the "
    "microphone and get transcribed text, or listen_for_wake_phrase to wait for "
    "the wake phrase before recording."
)


def create_server(config: dict, audio: BaseAudio | None = None) -> FastMCP:
    """Build the FastMCP server with both tools bound to config and audio."""
    audio = audio if audio is not None else get_audio(config)
    default_duration = config.get("voice_record_duration", 5)
    default_language = config.get("stt_language", "en")
    default_timeout = config.get("wake_timeout", 60)

    mcp = FastMCP("stt-mcp", instructions=INSTRUCTIONS)

    @mcp.tool(name="record_and_transcribe")
    async def record_and_transcribe_tool(
        duration_secs: int | None = None,
        language: str | None = None,
    ) -> str:
        """Record audio from the microphone and transcribe it to text using Whisper.

        duration_secs: how many seconds to record (default: 5).
        language: language hint for Whisper, e.g. "en", "es", "fr" (default: "en").
        """
        duration = duration_secs or default_duration
        if duration <= 0:
            return "Error: duration_secs must be a positive number of seconds"
        lang = language or default_language
        log.info("record_and_transcribe: %ss, language=%s", duration, lang)
        return await run_request(record_and_transcribe, config, audio, duration, lang)

    @mcp.tool()
    async def listen_for_wake_phrase(
        duration_secs: int | None = None,
        timeout_secs: int | None = None,
        language: str | None = None,
    ) -> str:
        """Wait for the wake phrase, then record the command and return its text.

        duration_secs: how long to record after the wake phrase (default: 5).
        timeout_secs: give up if the wake phrase is not heard in time (default: 60).
        language: language hint for Whisper (default: "en").
        """
        duration = duration_secs or default_duration
        if duration <= 0:
            return "Error: duration_secs must be a positive number of seconds"
        timeout = timeout_secs or default_timeout
        if timeout <= 0:
            return "Error: timeout_secs must be a positive number of seconds"
        lang = language or default_language
        log.info("listen_for_wake_phrase: %ss after trigger, timeout=%ss", duration, timeout)
        return await run_request(listen_and_transcribe, config, audio, duration, timeout, lang)

    return mcp
