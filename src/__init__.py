"""
File Mover Utility

Утилита для перемещения больших файлов из исходных папок в целевые.
"""

__version__ = "1.0.0"
__author__ = "File Mover Team"
__description__ = "Utility for moving large files from source directories to target directories"
