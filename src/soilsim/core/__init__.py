"""Core configuration, types and errors shared by the solvers."""
