"""Core — models, configuration, engine and use cases."""
