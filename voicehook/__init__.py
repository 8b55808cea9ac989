"""voicehook: webhook bridge between a voice-agent platform and a streaming LLM."""

__version__ = "0.1.0"
