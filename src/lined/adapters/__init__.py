"""Host adapters for the mode machine."""
