"""cellcoloc CLI — command-line interface."""
