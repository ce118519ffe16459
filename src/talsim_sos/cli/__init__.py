"""Command-line interface for talsim-sos."""
