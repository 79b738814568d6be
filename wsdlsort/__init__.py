"""Split a WSDL into sorted, normalized fragments that diff cleanly."""

__version__ = "0.1.0"
