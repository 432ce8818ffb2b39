"""Command line entry points for dispatching alerts and reading reports."""
