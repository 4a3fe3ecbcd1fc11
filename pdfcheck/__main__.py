"""
Module entry point for: python -m pdfcheck

Allows running the checker directly as a module:
    python -m pdfcheck check <pdf_path> [options]
    python -m pdfcheck batch <directory> [options]
"""

from .cli import cli


def main():
    cli()


if __name__ == "__main__":
    main()
