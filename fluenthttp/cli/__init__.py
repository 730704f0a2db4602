"""Command line interface for fluenthttp."""
