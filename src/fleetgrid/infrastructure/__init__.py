"""Infrastructure adapters: persistence, auth, spreadsheet codec and HTTP API."""
