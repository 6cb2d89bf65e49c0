"""設定ファイル（TOML/JSON）を読み込み、count_if の実行設定を組み立てるユーティリティ。

目的:
    どの列を・どの述語で数えるかを設定ファイルに外出しし、
    CLI の実行を再現可能にする。
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import tomllib


def load_config(path: Path) -> Dict[str, Any]:
    """設定ファイルを読み込み、Python の辞書として返す。

    Args:
        path: 設定ファイルへのパス。拡張子でフォーマットを判定する。

    Returns:
        設定内容を表す辞書。

    Raises:
        FileNotFoundError: 指定パスが存在しない場合。
        ValueError: 対応していない拡張子の場合。
        json.JSONDecodeError: JSON のパースに失敗した場合。
        tomllib.TOMLDecodeError: TOML のパースに失敗した場合。
    """

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    # 拡張子の大文字小文字はここでは区別する（.TOML は非対応）。
    if path.suffix == ".toml":
        with path.open("rb") as handle:
            return tomllib.load(handle)

    if path.suffix == ".json":
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    raise ValueError(f"Unsupported config format: {path.suffix}")


@dataclass
class CountConfig:
    """CLI の実行設定。

    - predicate: make_predicate に渡す辞書（{"op": ">", "value": 0} など）
    - columns: 数える列名。None なら数値列すべて
    """

    predicate: Dict[str, Any]
    columns: Optional[List[str]] = None
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "CountConfig":
        """load_config の結果から CountConfig を構築する。

        Raises:
            ValueError: predicate テーブルが無い、または columns が文字列のリストでない場合。
        """

        predicate = config.get("predicate")
        if not isinstance(predicate, dict):
            raise ValueError("config に [predicate] テーブルが必要です")

        columns = config.get("columns")
        if columns is not None:
            if isinstance(columns, str) or not all(
                isinstance(c, str) for c in columns
            ):
                raise ValueError("columns は文字列のリストである必要があります")
            columns = list(columns)

        extra = {k: v for k, v in config.items() if k not in {"predicate", "columns"}}
        return cls(predicate=dict(predicate), columns=columns, extra=extra)
