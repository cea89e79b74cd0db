"""cellcoloc IO — image file reading and configuration files."""

from cellcoloc.io.config_file import dump_parameters, load_parameters, save_parameters
from cellcoloc.io.tiff import read_multichannel_tiff

__all__ = [
    "dump_parameters",
    "load_parameters",
    "read_multichannel_tiff",
    "save_parameters",
]
