"""
docprint - PDF documents from Django templates through WeasyPrint.
"""
