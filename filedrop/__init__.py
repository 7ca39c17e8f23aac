"""
Filedrop - Minimal HTTP file-transfer service.

This package provides:
- Raw-body and multipart file uploads keyed by filename
- File download with a Content-Disposition attachment header
- Listing of stored filenames
"""

__version__ = "1.0.0"
