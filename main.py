"""CLI エントリポイント。

目的:
    設定ファイル（TOML/JSON）で指定した述語を CSV の各列に適用し、
    述語を満たす要素数を列ごとに集計して表示する。

想定される例外:
    - 設定ファイルが存在しない: FileNotFoundError
    - JSON/TOML の構文エラー: パーサ由来の例外
    - 述語設定や列指定の不備: ValueError
"""

import argparse
import json
import os
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

try:
    import matplotlib.pyplot as plt
except ImportError:
    plt = None

from countif.config import CountConfig, load_config
from countif.frame import count_columns, summarize_counts
from countif.logger import WandBLogger, wandb_available
from countif.predicates import make_predicate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="count_if runner")

    parser.add_argument(
        "--config",
        type=Path,
        default=Path("count.toml"),
        help="Path to a TOML or JSON config file.",
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=Path("data/values.csv"),
        help="Path to a CSV dataset.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Path to write result JSON (optional).",
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Save a bar chart of counts per column (requires matplotlib).",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> dict:
    """コマンドライン引数を解釈し、列ごとの件数を集計する。

    Args:
        argv: 引数リスト。None の場合は `sys.argv` を argparse が参照する。

    Returns:
        列名 -> 件数 の辞書。
    """

    args = build_parser().parse_args(argv)

    # 設定を読み込む。ファイル不在・拡張子非対応・パース失敗は例外として伝播する。
    config = load_config(args.config)
    count_config = CountConfig.from_dict(config)
    predicate = make_predicate(count_config.predicate)

    # WandB ログの準備（任意）。
    wandb_logger = None
    wandb_project = os.getenv("WANDB_PROJECT")
    wandb_enabled = os.getenv("WANDB_ENABLED", "").lower() in {"1", "true", "yes"}
    if wandb_project or wandb_enabled:
        if not wandb_project:
            wandb_project = "countif"
        if wandb_available():
            wandb_logger = WandBLogger(project=wandb_project, name="countif-run")
            wandb_logger.start_run(config={"config": config})
        else:
            print("WandB が利用できないためロギングをスキップします。")

    print("\n=== Run parameters ===")
    print(
        {
            "config_path": str(args.config),
            "data_path": str(args.data),
            "output_path": str(args.output) if args.output is not None else None,
            "plot": bool(args.plot),
            "config": config,
        }
    )

    data = pd.read_csv(args.data)
    counts = count_columns(
        data,
        predicate,
        columns=count_config.columns,
        progress=not args.no_progress,
    )
    summary = summarize_counts(counts, len(data))

    print("\n=== Counts ===")
    print(summary.to_string(index=False))

    if args.plot:
        if plt is None:
            print("matplotlib が利用できないためプロットをスキップします。")
        else:
            fig, ax = plt.subplots(figsize=(8, 4))
            ax.bar(summary["column"].astype(str), summary["count"])
            ax.set_xlabel("column")
            ax.set_ylabel("count")
            ax.set_title(f"Elements satisfying {count_config.predicate}")
            ax.grid(True, axis="y", linestyle=":", alpha=0.6)
            output_path = Path("counts.png")
            fig.tight_layout()
            fig.savefig(output_path, dpi=150)
            plt.close(fig)
            print(f"Saved count plot to {output_path}")

    if args.output is not None:
        output_path = args.output
        output_path.parent.mkdir(parents=True, exist_ok=True)
        result = {
            "data_path": str(args.data),
            "n_rows": int(len(data)),
            "counts": {str(k): int(v) for k, v in counts.items()},
            "predicate": count_config.predicate,
            "config": config,
        }
        with output_path.open("w", encoding="utf-8") as handle:
            json.dump(result, handle, ensure_ascii=False, indent=2)
        print(f"Saved result JSON to {output_path}")

    if wandb_logger is not None:
        wandb_logger.log_counts(counts, len(data))
        wandb_logger.finish()

    return counts


if __name__ == "__main__":
    # 直接実行時のみ main() を呼び出す（import された場合に副作用を起こさない）。
    main()
