"""Shared configuration, errors, logging, and typed models."""
