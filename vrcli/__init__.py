"""vrcli — command-line client for the VRChat API."""

__version__ = "0.1.0"
