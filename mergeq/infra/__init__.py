"""Infrastructure layer: bd/gt clients, configuration and console output."""
