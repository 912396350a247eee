"""Host adapters that feed key events in and render frames out."""
