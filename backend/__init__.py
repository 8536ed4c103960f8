"""backend/ - FastAPI adapter for the NayaVed consultation engine."""
