"""Textual user interface for SAR Attend."""

import pathlib

CSS_FOLDER = pathlib.Path(__file__).parent / "css"
