"""Command-line tools for evaluating payloads and zone catalogs."""
