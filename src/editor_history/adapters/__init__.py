"""Host adapters for editor sessions."""
