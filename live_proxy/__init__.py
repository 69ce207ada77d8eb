"""Realtime audio proxy between browsers and the Gemini Live API."""

__version__ = "0.1.0"
