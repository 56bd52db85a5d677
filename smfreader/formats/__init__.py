"""Format handlers."""

from smfreader.formats.smf import SMFReader

__all__ = ["SMFReader"]
