"""Runtime services shared by the buffer and command layers."""
