from adapters.parsers.export_file import TeapplixExportFileParser
from adapters.parsers.upload_response import TeapplixUploadResponseParser

__all__ = [
    "TeapplixExportFileParser",
    "TeapplixUploadResponseParser",
]
