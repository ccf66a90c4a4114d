"""Upload client and telemetry interfaces."""
