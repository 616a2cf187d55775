"""Shared configuration, logging, metrics and exceptions."""
