"""Visualization and export for the predator-prey simulation."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from matplotlib.patches import Patch
from pathlib import Path
from typing import List, Optional, Tuple, TYPE_CHECKING
from PIL import Image

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Visualizer:
    """
    Renders the field grid using matplotlib.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation

    GIF frames are drawn on one long-lived figure whose image data, title
    and legend are swapped per frame, then read straight off the Agg canvas.
    """

    # Color scheme
    COLORS = {
        'empty': '#ECF0F1',     # Light gray
        'Rabbit': '#F39C12',    # Orange
        'Fox': '#3498DB',       # Blue
        'Trap': '#E74C3C',      # Red
        'Pond': '#1ABC9C',      # Teal
    }
    UNKNOWN_COLOR = '#95A5A6'   # Gray

    FRAME_DPI = 80
    SNAPSHOT_DPI = 150

    def __init__(self, depth: int, width: int):
        self.depth = depth
        self.width = width
        self.frames: List[Image.Image] = []
        self._frame_figure: Optional[Tuple[plt.Figure, plt.Axes, object]] = None

    def color_for(self, kind: str) -> str:
        if not kind:
            return self.COLORS['empty']
        return self.COLORS.get(kind, self.UNKNOWN_COLOR)

    def to_rgb_image(self, kind_grid: np.ndarray) -> np.ndarray:
        """Map a grid of kind names to a (depth, width, 3) RGB array."""
        image = np.empty((self.depth, self.width, 3))
        image[:, :] = to_rgb(self.COLORS['empty'])
        for kind in np.unique(kind_grid):
            if kind:
                image[kind_grid == kind] = to_rgb(self.color_for(kind))
        return image

    def _create_figure(self) -> Tuple[plt.Figure, plt.Axes, object]:
        """Blank figure sized to the grid aspect, with an empty image artist."""
        aspect = self.width / self.depth
        fig_height = 6
        fig_width = max(8, fig_height * aspect)
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))

        artist = ax.imshow(np.zeros((self.depth, self.width, 3)),
                           origin='upper', aspect='equal',
                           interpolation='nearest')
        ax.set_xlabel('Column')
        ax.set_ylabel('Row')
        return fig, ax, artist

    def _draw_state(self, ax: plt.Axes, artist, state: "SimulationState") -> None:
        artist.set_data(self.to_rgb_image(state.kind_grid))
        ax.set_title(f'Step {state.step} | Population: '
                     f'{state.population_details()}')

        # One legend entry per censused kind, replacing the previous legend
        legend_elements = [
            Patch(facecolor=self.color_for(kind), edgecolor='black',
                  label=f'{kind} ({count})')
            for kind, count in state.census.items()
        ]
        if legend_elements:
            ax.legend(handles=legend_elements, loc='upper right', fontsize=8)
        elif ax.get_legend() is not None:
            ax.get_legend().remove()

    def buffer_frame(self, state: "SimulationState") -> None:
        """Render state onto the shared frame figure and keep the pixels."""
        if self._frame_figure is None:
            self._frame_figure = self._create_figure()
            fig = self._frame_figure[0]
            fig.set_dpi(self.FRAME_DPI)
            fig.tight_layout()
        fig, ax, artist = self._frame_figure

        self._draw_state(ax, artist, state)
        fig.canvas.draw()
        pixels = np.asarray(fig.canvas.buffer_rgba())
        self.frames.append(Image.fromarray(pixels[..., :3].copy()))

    def save_snapshot(self, state: "SimulationState", output_path: Path,
                      dpi: int = SNAPSHOT_DPI) -> None:
        """Write one PNG of state on a figure of its own."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig, ax, artist = self._create_figure()
        try:
            self._draw_state(ax, artist, state)
            fig.tight_layout()
            fig.savefig(output_path, dpi=dpi, bbox_inches='tight')
        finally:
            plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 10,
                     hold_last: int = 1000) -> None:
        """
        Compile buffered frames into a looping GIF.

        The final frame stays up for hold_last milliseconds so the end
        state of the run can be read before the loop restarts.
        """
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        frame_ms = int(1000 / fps)
        durations = [frame_ms] * (len(self.frames) - 1)
        durations.append(max(frame_ms, hold_last))

        # Per-frame adaptive palette keeps the flat kind colours exact
        palette_frames = [frame.convert('P', palette=Image.Palette.ADAPTIVE)
                          for frame in self.frames]
        palette_frames[0].save(
            output_path,
            save_all=True,
            append_images=palette_frames[1:],
            duration=durations,
            loop=0
        )

    def clear_frames(self) -> None:
        """Drop buffered frames and release the frame figure."""
        self.frames.clear()
        if self._frame_figure is not None:
            plt.close(self._frame_figure[0])
            self._frame_figure = None
