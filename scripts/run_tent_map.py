from warnings import warn

import matplotlib as mpl
import matplotlib.pyplot as plt
from loguru import logger

from pyscroll import Datum, LiveChart, MatplotlibAxesBinding, configure_logging
from pyscroll.stream.iterate_functions import (
    gauss_map_fn,
    iterate_batches,
    logistic_map_fn,
    tent_map_fn,
)

# --- User configuration dictionary ---
CONFIG = {
    "MAP": "tent",  # iterated map: "tent", "logistic" or "gauss"
    "MU": 1.7,  # tent map slope, clamped to [0, 2]
    "R": 3.9,  # logistic map rate, clamped to [0, 4]
    "ALPHA": 6.2,  # gauss map alpha
    "BETA": -0.5,  # gauss map beta
    "KIND": "difference",  # derived stream: "difference" or "iterate"
    "WINDOW_SIZE": 1,  # lag n of the derived stream
    "UPDATE_PERIOD": 25.0,  # time step between iterates
    "NUM_BATCHES": 200,  # number of batches to stream
    "TIME_WINDOW": (0.0, 1000.0),  # initial x-axis range (time axes scroll)
    "VALUE_RANGE": (-1.0, 1.0),  # initial y-axis range
    "DROP_DATA_AFTER": 5000.0,  # raw history older than this is dropped
    "LOG_LEVEL": "INFO",  # logging level: DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL
    "SHOW_PLOTS": True,
    # ---
    "RUNS": [
        {
            "initial": {"series 1": (0.0, 0.66), "series 2": (0.0, 0.67)},
        },
        {
            "KIND": "iterate",
            "TIME_WINDOW": (0.0, 1.0),
            "VALUE_RANGE": (0.0, 1.0),
            "initial": {"series 1": (0.0, 0.1)},
        },
    ],
}


def iterate_function(config):
    if config["MAP"] == "logistic":
        return logistic_map_fn(config["R"])
    if config["MAP"] == "gauss":
        return gauss_map_fn(config["ALPHA"], config["BETA"])
    return tent_map_fn(config["MU"])


def run(config) -> LiveChart:
    """
    Stream one iterated map through a live chart.
    """
    chart = LiveChart(
        kind=config["KIND"],
        window_size=config["WINDOW_SIZE"],
        drop_data_after=config["DROP_DATA_AFTER"],
    )
    chart.add_x_axis("x-axis", config["TIME_WINDOW"])
    chart.add_y_axis("y-axis", config["VALUE_RANGE"])

    ax = None
    lines = {}
    if config["SHOW_PLOTS"]:
        fig, ax = plt.subplots()
        MatplotlibAxesBinding(chart.axes, ax, "x-axis", "y-axis")
        ax.set_title(f"{config['MAP']} map, {chart.kind.value} (n={chart.window_size})")

    initial = {name: Datum(*point) for name, point in config["initial"].items()}
    batches = iterate_batches(
        iterate_function(config),
        initial,
        update_period=config["UPDATE_PERIOD"],
        num_batches=config["NUM_BATCHES"],
    )
    record = None
    for batch in batches:
        record = chart.on_batch(batch)
        if ax is None:
            continue
        for name, points in record.new_points.items():
            if name not in lines:
                style = "." if chart.kind.value == "iterate" else "-"
                (lines[name],) = ax.plot([], [], style, label=name)
            line = lines[name]
            xs = list(line.get_xdata())
            ys = list(line.get_ydata())
            for point in points:
                if chart.kind.value == "iterate":
                    xs.append(point.iterate_n)
                else:
                    xs.append(point.time)
                ys.append(point.value)
            line.set_data(xs, ys)

    if record is not None and record.global_min is not None:
        logger.success(
            f"Derived range over latest points: [{record.global_min.value:.4f}, {record.global_max.value:.4f}]"
        )
    if ax is not None:
        ax.legend()
        plt.show()
    return chart


def main() -> None:
    """
    Main function to stream all configured runs.
    """
    configure_logging(CONFIG.get("LOG_LEVEL", "INFO"))

    for run_config in CONFIG["RUNS"]:
        # Merge global config with run-specific overrides
        merged_config = CONFIG.copy()
        merged_config.update(run_config)
        run(merged_config)


if __name__ == "__main__":
    for optn, val in {
        "backend": "QtAgg",
        "figure.constrained_layout.use": True,
        "figure.dpi": 90,
        "font.size": 11,
        "legend.fontsize": "x-small",
        "lines.markersize": 4.0,
        "lines.linewidth": 1.8,
        "xtick.direction": "in",
        "ytick.direction": "in",
        "axes.formatter.useoffset": False,
    }.items():
        try:
            mpl.rcParams[optn] = val
        except KeyError:
            warn(f"mpl rcparams key '{optn}' not recognised as a valid rc parameter.")
    main()
