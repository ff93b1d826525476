"""wpprov: WordPress site provisioner for VVV environments."""

__version__ = "0.1.0"
