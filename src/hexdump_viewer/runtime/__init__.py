"""Runtime services (telemetry) shared by the viewer."""
