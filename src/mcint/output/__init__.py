"""Output formatting, export and plotting."""

from .console import ConsoleOutput
from .export import Exporter
from .plot import render_estimate, save_estimate_plot

__all__ = ["ConsoleOutput", "Exporter", "render_estimate", "save_estimate_plot"]
