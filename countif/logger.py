"""WandB ロギング用のユーティリティ。

方針:
    - WandB は任意依存。未インストールでも集計自体は動作させる。
    - ロギングは count_if から分離し、外側（main 等）で利用する。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional


def _import_wandb():
    try:
        import importlib

        return importlib.import_module("wandb")
    except ImportError as exc:
        raise RuntimeError(
            "wandb がインストールされていません。"
            " `pip install wandb` を実行するか、ロギングを無効化してください。"
        ) from exc


def wandb_available() -> bool:
    """wandb が利用可能かを返す。"""

    try:
        _import_wandb()
        return True
    except RuntimeError:
        return False


@dataclass
class WandBLogger:
    """WandB へのロギングを行うクラス。"""

    project: str
    entity: Optional[str] = None
    name: Optional[str] = None
    tags: Optional[Iterable[str]] = None
    enabled: bool = True
    _run: Any = field(default=None, init=False, repr=False)

    def start_run(self, config: Optional[Dict[str, Any]] = None) -> None:
        """WandB run を開始する。"""

        if not self.enabled:
            return
        wandb = _import_wandb()
        self._run = wandb.init(
            project=self.project,
            entity=self.entity,
            name=self.name,
            tags=list(self.tags) if self.tags else None,
            config=config,
        )

    def log_counts(self, counts: Dict[str, int], length: int) -> None:
        """列ごとの件数と割合を記録する。"""

        if not self.enabled:
            return
        payload: Dict[str, Any] = {"summary/length": length}
        for col, n in counts.items():
            payload[f"count/{col}"] = n
            payload[f"ratio/{col}"] = (n / length) if length > 0 else 0.0
        self.log_metrics(payload)

    def log_metrics(self, metrics: Dict[str, Any]) -> None:
        """指標をそのままログに送る。"""

        if not self.enabled:
            return
        _import_wandb().log(dict(metrics))

    def finish(self) -> None:
        """WandB run を終了する。"""

        if not self.enabled:
            return
        wandb = _import_wandb()
        wandb.finish()
        self._run = None
