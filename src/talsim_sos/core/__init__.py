"""Shared configuration, error and result types."""
