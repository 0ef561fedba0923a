"""Reports and exports built on the attendance model."""
