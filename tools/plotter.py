"""Standalone Command-Line Tool for Plotting samplebench Reports.

Reads a report written by samplebench (CSV or Parquet) and renders an
interactive chart comparing the samples of one run:

- bars: wall-clock duration per sample (ms), colored by outcome
- markers on a second axis: heap used per sample (MiB)

Failed samples are drawn in red and labeled with their status; samples whose
memory counters were unavailable have no heap marker and are listed in the
hover text as degraded.

Usage examples:
  # Plot a report next to it
  python tools/plotter.py --report data/performance_metrics.csv

  # Write the chart somewhere else
  python tools/plotter.py --report data/performance_metrics.csv --output-dir plots/
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import pandas as pd
import plotly.graph_objects as go
import polars as pl

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from samplebench.storage import writer_for_path

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("PlotterTool")

BYTES_PER_MIB = 1024 * 1024

STATUS_COLORS = {
    "success": "cornflowerblue",
    "failure": "indianred",
}


def load_report(report_path: Path) -> Optional[pl.DataFrame]:
    """Load a report file, returning None if it is missing, unreadable or empty."""
    if not report_path.is_file():
        logger.error(f"Report not found: {report_path}")
        return None
    try:
        df = writer_for_path(report_path).load(report_path)
    except (OSError, pl.exceptions.PolarsError) as e:
        logger.error(f"Could not read report {report_path}: {e}")
        return None
    if df.is_empty():
        logger.warning(f"Report {report_path} has no rows.")
        return None
    return df


def prepare_plot_data(df: pl.DataFrame) -> pd.DataFrame:
    """Convert the report into the columns the figure needs, keeping row order."""
    prepared = df.with_columns(
        (pl.col("heapUsedBytes") / BYTES_PER_MIB).alias("Heap_Used_MiB"),
        (pl.col("heapTotalBytes") / BYTES_PER_MIB).alias("Heap_Total_MiB"),
        pl.when(pl.col("degraded"))
        .then(pl.lit("unavailable (degraded)"))
        .otherwise(pl.lit("measured"))
        .alias("Heap_State"),
    )
    # Plotly works best with pandas
    return prepared.to_pandas()


def create_report_figure(plot_df: pd.DataFrame, title: str) -> go.Figure:
    """
    Build a dual-axis figure: duration bars and heap-used markers per sample.

    Args:
        plot_df: Output of ``prepare_plot_data``
        title: Figure title

    Returns:
        A configured Plotly Figure object ready for saving.
    """
    fig = go.Figure()

    fig.add_trace(
        go.Bar(
            x=plot_df["sample"],
            y=plot_df["wallClockMillis"],
            name="Wall clock (ms)",
            marker_color=[STATUS_COLORS.get(s, "gray") for s in plot_df["exitStatus"]],
            text=plot_df["exitStatus"],
            textposition="auto",
            customdata=plot_df[["Heap_State"]],
            hovertemplate="%{x}<br>%{y} ms<br>status: %{text}<br>heap: %{customdata[0]}<extra></extra>",
        )
    )

    measured = plot_df[~plot_df["degraded"]]
    fig.add_trace(
        go.Scatter(
            x=measured["sample"],
            y=measured["Heap_Used_MiB"],
            name="Heap used (MiB)",
            mode="markers",
            marker=dict(size=12, color="darkorange", symbol="diamond"),
            yaxis="y2",
            customdata=measured[["Heap_Total_MiB"]],
            hovertemplate="%{x}<br>used %{y:.2f} MiB of %{customdata[0]:.2f} MiB<extra></extra>",
        )
    )

    fig.update_layout(
        title_text=title,
        xaxis=dict(title_text="Sample", type="category"),
        yaxis=dict(
            title_text="Wall clock (ms)",
            title_font=dict(color="cornflowerblue"),
            tickfont=dict(color="cornflowerblue"),
        ),
        yaxis2=dict(
            title_text="Heap used (MiB)",
            title_font=dict(color="darkorange"),
            tickfont=dict(color="darkorange"),
            overlaying="y",
            side="right",
            rangemode="tozero",
        ),
        legend=dict(x=0.01, y=0.98, bordercolor="Black", borderwidth=1),
    )
    return fig


def _save_plotly_figure(fig: go.Figure, base_filename: str, output_dir: Path) -> Optional[Path]:
    """Save a figure as HTML and, when kaleido is installed, as PNG."""
    plot_filename_html = output_dir / f"{base_filename}.html"
    try:
        fig.write_html(plot_filename_html)
        logger.info(f"Interactive plot saved to: {plot_filename_html}")
    except OSError as e:
        logger.error(f"Failed to save plot {plot_filename_html}: {e}")
        return None

    plot_filename_png = output_dir / f"{base_filename}.png"
    try:
        fig.write_image(plot_filename_png, width=1200, height=600)
        logger.info(f"Static plot saved to: {plot_filename_png}")
    except Exception:
        # Not critical; tell the user how to enable it.
        logger.warning(
            "Failed to save static plot to PNG. To enable this feature, "
            "install the optional 'export' dependencies: "
            "`pip install samplebench[export]`"
        )
    return plot_filename_html


def plot_report(report_path: Path, output_dir: Optional[Path] = None) -> Optional[Path]:
    """Render the chart for one report. Returns the HTML path, or None on failure."""
    df = load_report(report_path)
    if df is None:
        return None

    output_dir = output_dir or report_path.parent
    output_dir.mkdir(parents=True, exist_ok=True)

    failed = df.filter(pl.col("exitStatus") != "success").height
    title = f"Benchmark report: {report_path.name} ({df.height} samples, {failed} failed)"
    fig = create_report_figure(prepare_plot_data(df), title)
    return _save_plotly_figure(fig, f"{report_path.stem}_plot", output_dir)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate a chart from a samplebench report.",
    )
    parser.add_argument(
        "--report",
        type=Path,
        required=True,
        help="Required. Path to a report file (.csv or .parquet).",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory to save plots. Defaults to the report's directory.",
    )
    args = parser.parse_args(argv)

    if plot_report(args.report, args.output_dir) is None:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
