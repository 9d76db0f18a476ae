"""
Reports module for Index Chart.

Writes rendered charts to PDF.
"""

from .export import export_pdf, pdf_path

__all__ = ['export_pdf', 'pdf_path']
