"""Command workflows.

This package implements the version transitions and the command
dispatch boundary that turns every outcome into a reported result.
"""
