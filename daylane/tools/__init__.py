"""daylane.tools: developer entrypoints (`python -m daylane.tools.bench`)."""

__all__: list[str] = []
