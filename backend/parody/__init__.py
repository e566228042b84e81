"""Website parody generator backend."""
