"""Infrastructure layer — text codecs behind the Exportable text hooks."""
