"""
Experiment runner: analyzes a set of sorting routines from a YAML config.

Usage (from repo root):
    python -m sorttree.bench.runner experiments/configs/01_small_sorts.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per timed analysis (with tree statistics)
    - summary.csv             # tree statistics + median/IQR analysis time per (algo, n)
    - trees/<algo>_n<n>.json  # exported decision trees (if export_trees: true)
    - (console) rich summary, compared with the baseline algorithm if one is set

Design notes:
- For each size n, we generate ONE initial order and give it to every algorithm.
- Analyses are exhaustive, so cost grows factorially with n; sizes are caller-chosen.
- On timeout/error for an algorithm at size n, we skip larger sizes for that algo.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import importlib
import json
import logging
import os
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import tqdm

from sorttree.algorithms import BUILTIN_ALGORITHMS
from sorttree.bench.compare import COMPARED_METRICS, compare_to_baseline
from sorttree.bench.measure import time_analysis
from sorttree.core.metrics import summarize_tree
from sorttree.core.operand import symbol_labels
from sorttree.core.tree import tree_to_dict
from sorttree.datasets import make_initial_order
from sorttree.validate import check_sorting_tree

logger = logging.getLogger(__name__)

_console = Console()

REQUIRED_KEYS = [
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "initial_order",
    "sizes",
    "algorithms",
]

STAT_COLUMNS = [
    "avg_comparisons",
    "min_comparisons",
    "max_comparisons",
    "leaves",
    "comparison_nodes",
    "pruned_nodes",
    "paths_explored",
    "sorts_correctly",
]

SUMMARY_COLUMNS = ["algo", "n"] + STAT_COLUMNS + ["samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class AlgoSpec:
    name: str
    label: str
    sort_fn: Any


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    suffix = 1
    while run_dir.exists():
        suffix += 1
        run_dir = base_dir / f"{_timestamp()}_{experiment_name}_{suffix}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
        return out.decode("utf-8").strip()
    except (OSError, subprocess.CalledProcessError):
        return None


def _gather_meta() -> Dict[str, Any]:
    import platform
    meta = {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }
    return meta


def _safe_filename(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", name)


# ------------------------- helpers: algorithms ------------------------- #

def load_routine(name: str) -> Any:
    """
    Resolve a routine by name.

    ``"bubble_sort"`` loads ``sorttree.algorithms.bubble_sort.sort``;
    ``"package.module:function"`` loads any importable callable.
    """
    if ":" in name:
        module_name, attr = name.split(":", 1)
    else:
        module_name, attr = f"sorttree.algorithms.{name}", "sort"

    try:
        mod = importlib.import_module(module_name)
    except Exception as e:
        raise ImportError(f"Could not import algorithm module {module_name!r}: {e!r}") from e

    fn = getattr(mod, attr, None)
    if fn is None or not callable(fn):
        raise AttributeError(f"Algorithm module {module_name!r} must define a callable `{attr}(items)`")
    return fn


def _resolve_algorithms(cfg_algos: List[Dict[str, Any]]) -> List[AlgoSpec]:
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        if isinstance(entry, str):
            entry = {"name": entry}
        name = entry.get("name", None)
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        if name in seen:
            raise ValueError(f"Duplicate algorithm name in config: {name}")
        seen.add(name)

        label = entry.get("label") or BUILTIN_ALGORITHMS.get(name, name)
        specs.append(AlgoSpec(name=name, label=str(label), sort_fn=load_routine(name)))
    return specs


def _validate_sizes(sizes: List[Any]) -> List[int]:
    if not sizes:
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")
    out: List[int] = []
    for n in sizes:
        if not isinstance(n, int) or isinstance(n, bool) or n < 0:
            raise ValueError(f"Config 'sizes' entries must be nonnegative integers; got {n!r}")
        out.append(n)
    return out


# ------------------------- helpers: aggregation ------------------------- #

def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    empty = pd.DataFrame(columns=SUMMARY_COLUMNS)
    if not jsonl_path.exists():
        return empty
    df = pd.read_json(jsonl_path, lines=True)
    # Only analysis lines carry tree statistics; status lines do not
    if "avg_comparisons" not in df.columns:
        return empty
    df = df[df["avg_comparisons"].notna()].copy()
    if df.empty:
        return empty
    df["time_ns"] = pd.to_numeric(df["time_ns"], errors="coerce")

    agg = (
        df.groupby(["algo", "n"], as_index=False)
        .agg(
            **{col: (col, "first") for col in STAT_COLUMNS},
            samples_ok=("time_ns", "count"),
            median_ns=("time_ns", "median"),
            iqr_ns=("time_ns", lambda s: s.quantile(0.75) - s.quantile(0.25)),
            min_ns=("time_ns", "min"),
            max_ns=("time_ns", "max"),
        )
    )
    # Nullable ints: a size analyzed with repeats == 0 has no timing
    for col in ("median_ns", "iqr_ns", "min_ns", "max_ns"):
        agg[col] = agg[col].round().astype("Int64")
    for col in ("min_comparisons", "max_comparisons", "leaves", "comparison_nodes", "pruned_nodes", "paths_explored"):
        agg[col] = agg[col].astype("int64")
    agg["sorts_correctly"] = agg["sorts_correctly"].astype(bool)
    return agg[SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def _format_pct(row: pd.Series, metric: str) -> str:
    col_v = f"{metric}_verdict"
    if col_v not in row or pd.isna(row[col_v]):
        return ""
    pct = row[f"{metric}_pct_diff"]
    colors = {"better": "green", "worse": "red", "ok": "yellow"}
    verdict = row[col_v]
    text = verdict if pd.isna(pct) else f"{pct:.1f}% {verdict}"
    return f" [{colors[verdict]}]({text})[/]"


def _print_rich_summary(summary: pd.DataFrame, baseline: Optional[str]) -> None:
    title = "Decision Tree Summary"
    if baseline:
        title += f" (vs. baseline {baseline})"
    table = Table(title=title)
    table.add_column("Algorithm", style="bold")
    table.add_column("n", justify="right")
    table.add_column("avg. comparisons", justify="right")
    table.add_column("worst case", justify="right")
    table.add_column("pruned nodes", justify="right")
    table.add_column("leaves", justify="right")
    table.add_column("correct", justify="center")
    table.add_column("median ms", justify="right")

    if summary.empty:
        _console.print("(no results)")
        return

    for _, row in summary.iterrows():
        median = row["median_ns"]
        median_txt = "—" if pd.isna(median) else f"{int(median) / 1e6:.2f}"
        table.add_row(
            str(row["algo"]),
            str(int(row["n"])),
            f"{row['avg_comparisons']:.2f}" + _format_pct(row, "avg_comparisons"),
            str(int(row["max_comparisons"])),
            str(int(row["pruned_nodes"])) + _format_pct(row, "pruned_nodes"),
            str(int(row["leaves"])),
            "[green]yes[/]" if row["sorts_correctly"] else "[red]no[/]",
            median_txt,
        )
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path) -> Path:
    cfg = _load_yaml(config_path)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {config_path} must be a YAML mapping")

    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name: str = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    sizes = _validate_sizes(list(cfg["sizes"]))
    repeats: int = int(cfg["repeats"])
    warmup: bool = bool(cfg["warmup"])
    disable_gc: bool = bool(cfg["disable_gc"])
    timeout_seconds: float = float(cfg["timeout_seconds"])
    order_spec: Dict[str, Any] = dict(cfg["initial_order"])
    algos_cfg: List[Any] = list(cfg["algorithms"])
    baseline: Optional[str] = cfg.get("baseline")
    export_trees: bool = bool(cfg.get("export_trees", False))

    algos: List[AlgoSpec] = _resolve_algorithms(algos_cfg)
    if baseline is not None and baseline not in {a.name for a in algos}:
        raise ValueError(f"Baseline {baseline!r} is not one of the configured algorithms")

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"
    trees_dir = run_dir / "trees"
    if export_trees:
        trees_dir.mkdir()

    _write_yaml(cfg, cfg_resolved_path)

    meta = _gather_meta()
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))

    # Per-algorithm skip flags (set on timeout/error)
    per_algo_skip = {a.name: False for a in algos}

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    _console.print(f"[bold]Algorithms:[/bold] {', '.join(a.label for a in algos)}")

    for n in tqdm(sizes, desc="Sizes", unit="n"):
        initial_order = make_initial_order(n, order_spec, rng)
        labels = symbol_labels(n)

        for a_spec in algos:
            if per_algo_skip[a_spec.name]:
                continue

            res = time_analysis(
                algo_name=a_spec.name,
                algo_fn=a_spec.sort_fn,
                array_size=n,
                initial_order=initial_order,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
            )

            tree = res["tree"]
            if tree is not None and res["status"] != "error":
                stats = summarize_tree(tree).to_dict()
                problems = check_sorting_tree(tree, labels)
                if problems:
                    logger.warning(
                        "%s does not sort %d items correctly (%d bad path(s)); first: %s",
                        a_spec.name, n, len(problems), problems[0],
                    )
                record = {
                    "algo": a_spec.name,
                    "n": n,
                    "initial_order": initial_order,
                    **stats,
                    "paths_explored": res["paths_explored"],
                    "sorts_correctly": not problems,
                }
                samples = res["samples_ns"] or [None]
                for trial_idx, t_ns in enumerate(samples):
                    _append_jsonl({**record, "trial": trial_idx, "time_ns": t_ns}, results_path)

                if export_trees:
                    tree_path = trees_dir / f"{_safe_filename(a_spec.name)}_n{n}.json"
                    with tree_path.open("w", encoding="utf-8") as f:
                        json.dump(tree_to_dict(tree), f, indent=1)

            status = res.get("status", "ok")
            if status == "timeout":
                per_algo_skip[a_spec.name] = True
                logger.warning("%s timed out at n=%d; skipping larger sizes", a_spec.name, n)
                _append_jsonl(
                    {
                        "algo": a_spec.name,
                        "n": n,
                        "status": "timeout",
                        "timed_out_on_repeat": res.get("timed_out_on_repeat"),
                    },
                    results_path,
                )
            elif status == "error":
                per_algo_skip[a_spec.name] = True
                logger.error("%s failed at n=%d: %s", a_spec.name, n, res.get("error"))
                _append_jsonl(
                    {
                        "algo": a_spec.name,
                        "n": n,
                        "status": "error",
                        "error": res.get("error"),
                    },
                    results_path,
                )

    summary_df = _aggregate_summary(results_path)
    if baseline is not None and not summary_df.empty and baseline in set(summary_df["algo"]):
        summary_df = compare_to_baseline(summary_df, baseline)
    summary_df.to_csv(summary_path, index=False)

    _print_rich_summary(summary_df, baseline)

    _console.print("[bold green]Done.[/bold green] Wrote:")
    _console.print(f" - {results_path}")
    _console.print(f" - {summary_path}")
    _console.print(f" - {meta_path}")
    _console.print(f" - {cfg_resolved_path}")
    if export_trees:
        _console.print(f" - {trees_dir}")

    return run_dir


# ------------------------- CLI ------------------------- #

def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_console, rich_tracebacks=True)],
    )


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Analyze sorting routines' decision trees from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    _configure_logging(args.log_level)
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
