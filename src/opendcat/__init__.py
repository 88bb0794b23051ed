"""OpenDCAT — DCAT-US catalog publishing for metadata search engines."""

__version__ = "0.1.0"
