"""Export layer — route manifest and props output for ``wilson build``."""

from wilson.export.manifest import ExportedFile, ExportResult, export_site

__all__ = ["ExportResult", "ExportedFile", "export_site"]
