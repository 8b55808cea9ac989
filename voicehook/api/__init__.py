"""HTTP API for voicehook."""
