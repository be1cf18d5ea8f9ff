from dataclasses import dataclass
from pathlib import Path


@dataclass
class PlotParams:
    output_path: Path = Path("output.svg")
    element_throughput_unit: str = "FLOP"
    title: str = ""
    x_label: str = "Problem size"
    width: int = 1920
    height: int = 1080
    dpi: int = 100
    colormap: str = "hsv"
    legend_position: str = "lower right"
    short_labels: bool = False

    @property
    def figsize(self) -> tuple[float, float]:
        """Figure size in inches, as matplotlib wants it."""
        return self.width / self.dpi, self.height / self.dpi

    def percent_height_pt(self, percent: float) -> float:
        """Convert a percentage of the image height into a font size in points."""
        return percent / 100 * self.height * 72 / self.dpi
