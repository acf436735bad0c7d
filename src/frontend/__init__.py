"""Front ends for the phrase generator: CLI (python -m frontend) and Flask UI (frontend.web)."""
