from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import matplotlib.dates as mdates

from core.services.evm import EVMTrendPoint


class EvmCurveRenderer:
    def render(self, series: Sequence[EVMTrendPoint], output_path: Path, title: str = "EVM S-Curve (Cumulative)") -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        xs = [p.date for p in series]
        pv = [float(p.planned_value) for p in series]
        ev = [float(p.earned_value) for p in series]
        ac = [float(p.actual_cost) for p in series]
        cpi = [float(p.cpi) for p in series]
        spi = [float(p.spi) for p in series]

        fig, (ax, ax_idx) = plt.subplots(
            2, 1, figsize=(9, 5), sharex=True, gridspec_kw={"height_ratios": [3, 1]}
        )
        ax.plot(xs, pv, label="PV", marker="o", markersize=3)
        ax.plot(xs, ev, label="EV", marker="o", markersize=3)
        ax.plot(xs, ac, label="AC", marker="o", markersize=3)
        ax.set_title(title)
        ax.set_ylabel("Cost")
        ax.legend()
        ax.grid(True, axis="y", linestyle=":", linewidth=0.6)

        ax_idx.plot(xs, cpi, label="CPI")
        ax_idx.plot(xs, spi, label="SPI")
        ax_idx.axhline(1.0, color="grey", linestyle="--", linewidth=0.8)
        ax_idx.set_ylabel("Index")
        ax_idx.legend(loc="upper left", fontsize=8)
        ax_idx.grid(True, axis="y", linestyle=":", linewidth=0.6)

        locator = mdates.AutoDateLocator(minticks=3, maxticks=10)
        ax_idx.xaxis.set_major_locator(locator)
        ax_idx.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator))

        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path
