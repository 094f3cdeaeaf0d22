"""Request context and response value types."""
