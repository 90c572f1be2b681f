"""Shared configuration, logging, errors and data models."""
