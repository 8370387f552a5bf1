"""dockmenu command-line interface."""
