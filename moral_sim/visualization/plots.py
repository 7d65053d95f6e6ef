"""
Plotting utilities for simulation visualization.

Generates visualizations for:
- The community moral spectrum
- Moral score trajectories over each life story
- A plain text summary report
"""

from typing import List, Dict, Optional, Any, Sequence
import json
import os

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from ..analysis.spectrum import SpectrumStop, map_range, moral_score_to_rgb
from ..simulation.story import Story

GRADIENT_SAMPLES = 200


class SpectrumPlotter:
    """
    Creates visualizations for simulation results.

    Figures are built with matplotlib's object API, so nothing is shown
    on screen; pass ``save_path`` to write them out.
    """

    def __init__(self, output_dir: str = "."):
        """Initialize the spectrum plotter.

        Args:
            output_dir: Directory path for saving output files. Defaults to
                current directory.
        """
        self.output_dir = output_dir

    def _save(self, fig: Figure, save_path: Optional[str]) -> None:
        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')

    def _gradient_row(self, spectrum: Sequence[SpectrumStop]) -> List[List[Any]]:
        """Interpolate moral scores between stops into one row of RGB pixels."""
        if len(spectrum) == 1:
            rgb = moral_score_to_rgb(spectrum[0].person.moral_score)
            return [[rgb] * GRADIENT_SAMPLES]

        row = []
        segment = 0
        for i in range(GRADIENT_SAMPLES):
            x = i / (GRADIENT_SAMPLES - 1)
            while segment < len(spectrum) - 2 and x > spectrum[segment + 1].stop:
                segment += 1
            left, right = spectrum[segment], spectrum[segment + 1]
            if right.stop == left.stop:
                score = right.person.moral_score
            else:
                score = map_range(
                    x, left.stop, right.stop,
                    left.person.moral_score, right.person.moral_score,
                )
            row.append(moral_score_to_rgb(score))
        return [row]

    def plot_spectrum(
        self,
        spectrum: Sequence[SpectrumStop],
        save_path: Optional[str] = None,
    ) -> Figure:
        """Plot the community spectrum as a gradient bar.

        Args:
            spectrum: Stops from ``build_community_spectrum``.
            save_path: Optional file path to save the plot image.

        Returns:
            The matplotlib figure.
        """
        if not spectrum:
            raise ValueError("Cannot plot an empty spectrum")

        fig = Figure(figsize=(10, 3))
        FigureCanvasAgg(fig)
        ax = fig.add_subplot(1, 1, 1)

        ax.imshow(
            self._gradient_row(spectrum),
            aspect='auto',
            extent=(0, 1, 0, 1),
        )

        for stop in spectrum:
            ax.axvline(x=stop.stop, color='black', linewidth=1, alpha=0.6)
            ax.annotate(
                f"{stop.person.name} ({stop.person.moral_score})",
                (stop.stop, 1.0),
                xytext=(0, 5), textcoords='offset points',
                ha='center', fontsize=8,
            )

        ax.set_xlim(0, 1)
        ax.set_yticks([])
        ax.set_xlabel('Position on spectrum (worst to best)')
        ax.set_title('Community Moral Spectrum', pad=20)

        fig.tight_layout()
        self._save(fig, save_path)
        return fig

    def plot_trajectories(
        self,
        stories: Sequence[Story],
        save_path: Optional[str] = None,
    ) -> Figure:
        """Plot each person's moral score over the years of their story.

        Args:
            stories: Stories to plot, one line each.
            save_path: Optional file path to save the plot image.

        Returns:
            The matplotlib figure.
        """
        fig = Figure(figsize=(12, 5))
        FigureCanvasAgg(fig)
        ax = fig.add_subplot(1, 1, 1)

        for story in stories:
            trajectory = story.score_trajectory()
            ax.plot(
                range(len(trajectory)),
                trajectory,
                color=moral_score_to_rgb(story.final_score),
                linewidth=2,
                label=story.person.name,
            )

        ax.set_xlabel('Year')
        ax.set_ylabel('Moral Score')
        ax.set_ylim(0, 100)
        ax.axhline(y=50, color='gray', linestyle='--', alpha=0.5)
        ax.set_title('Moral Trajectories')
        if stories:
            ax.legend()
        ax.grid(True, alpha=0.3)

        fig.tight_layout()
        self._save(fig, save_path)
        return fig

    def export_plot_data(
        self,
        data: Dict[str, Any],
        filename: str,
    ) -> str:
        """Export plot data to JSON inside the output directory.

        Returns:
            The path written to.
        """
        os.makedirs(self.output_dir, exist_ok=True)
        filepath = os.path.join(self.output_dir, filename)
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2, default=str)
        return filepath

    def create_summary_report(
        self,
        metrics: Dict[str, Any],
        spectrum: Sequence[SpectrumStop],
        gradient_css: str,
        save_path: Optional[str] = None,
    ) -> str:
        """Create a text summary report of simulation results.

        Args:
            metrics: Dictionary from ``CommunityMetrics.to_dict``.
            spectrum: Stops from ``build_community_spectrum``.
            gradient_css: The community CSS gradient string.
            save_path: Optional file path to save the text report.

        Returns:
            The formatted report as a string.
        """
        lines = [
            "=" * 60,
            "MORAL SPECTRUM SIMULATION REPORT",
            "=" * 60,
            "",
            "SIMULATION OVERVIEW",
            "-" * 40,
            f"Simulation ID: {metrics.get('simulation_id', 'N/A')}",
            f"Population: {metrics.get('population', 0)}",
            f"Total Events: {metrics.get('total_events', 0)}",
            f"Positive Reactions: {metrics.get('positive_events', 0)}",
            f"Negative Reactions: {metrics.get('negative_events', 0)}",
            f"Positive Ratio: {metrics.get('positive_ratio', 0):.2f}",
            "",
            "MORAL SCORES",
            "-" * 40,
            f"Mean Score: {metrics.get('mean_score', 0):.1f}",
            f"Lowest Score: {metrics.get('min_score', 0)}",
            f"Highest Score: {metrics.get('max_score', 0)}",
            "",
        ]

        events_by_type = metrics.get('events_by_type', {})
        if events_by_type:
            lines.append("Events by Type:")
            for event_type, count in events_by_type.items():
                lines.append(f"  - {event_type}: {count}")
            lines.append("")

        stories = metrics.get('stories', [])
        if stories:
            lines.extend(["LIFE STORIES", "-" * 40])
            for story in stories:
                lines.append(
                    f"  - {story['name']}: {story['initial_score']} -> "
                    f"{story['final_score']} ({story['net_change']:+d}), "
                    f"{story['positive_count']}/{story['event_count']} positive"
                )
            lines.append("")

        lines.extend(["SPECTRUM (worst to best)", "-" * 40])
        for stop in spectrum:
            parent = f", child of {stop.person.parent_name}" if stop.person.parent_name else ""
            lines.append(
                f"  {stop.percentage:3d}%  {stop.person.name} "
                f"[{stop.person.belief_type.value}{parent}] "
                f"score={stop.person.moral_score} {stop.color}"
            )

        lines.extend([
            "",
            f"CSS: {gradient_css}",
            "",
            "=" * 60,
            "END OF REPORT",
            "=" * 60,
        ])

        report = "\n".join(lines)

        if save_path:
            with open(save_path, 'w') as f:
                f.write(report)

        return report

    def __repr__(self) -> str:
        return f"SpectrumPlotter(output_dir={self.output_dir!r})"
