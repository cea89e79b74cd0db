"""cellcoloc — cell counting and colocalization for multi-channel microscopy."""

__version__ = "0.1.0"
