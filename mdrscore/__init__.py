"""MDR Score Engine: reputation scoring and tier classification for medical profiles."""

__version__ = "1.0.0"
