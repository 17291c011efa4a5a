"""Grading CLI Controller

Driving Adapter: 將 CLI 指令轉換為 Use Case 調用
"""

import json
from pathlib import Path

from injector import Injector
from rich.console import Console
from rich.table import Table

from libs.grading.src.ports.align_futures_timeframes_port import (
    AlignFuturesTimeframesPort,
)
from libs.grading.src.ports.asset_bundle_provider_port import AssetBundleProviderPort
from libs.grading.src.ports.get_btc_correlation_port import GetBtcCorrelationPort
from libs.grading.src.ports.justify_signal_port import JustifySignalPort
from libs.grading.src.ports.rank_assets_port import RankAssetsPort
from libs.grading.src.ports.score_indicator_quality_port import (
    ScoreIndicatorQualityPort,
)
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleMap
from libs.shared.src.dtos.grading.ranking_dto import RankingResultDTO
from libs.shared.src.enums.trade_direction import TradeDirection
from libs.shared.src.errors.domain_error import DomainError


class GradingController:
    """指標評分 CLI 控制器"""

    def __init__(self, injector: Injector) -> None:
        self._injector = injector
        self._console = Console()

    def _load(self, bundles_file: str) -> AssetBundleMap | None:
        try:
            return self._injector.get(AssetBundleProviderPort).load_bundles(
                Path(bundles_file)
            )
        except DomainError as e:
            self._console.print(f"[red]❌ {e.code}: {e.message}[/red]")
            return None

    def _print_json(self, data: object) -> None:
        print(json.dumps(data, ensure_ascii=False, indent=2, default=str))

    def score(self, bundles_file: str, asset: str) -> None:
        """評分單一標的的指標品質

        Args:
            bundles_file: bundle JSON 檔案
            asset: 標的代號
        """
        bundles = self._load(bundles_file)
        if bundles is None:
            return
        asset = str(asset)
        use_case = self._injector.get(ScoreIndicatorQualityPort)
        self._print_json(use_case.execute(asset, bundles.get(asset)))

    def justify(self, bundles_file: str, asset: str, direction: str = "buy") -> None:
        """列出支持 / 反對某方向的加權證據

        Args:
            bundles_file: bundle JSON 檔案
            asset: 標的代號
            direction: buy / sell
        """
        bundles = self._load(bundles_file)
        if bundles is None:
            return
        try:
            trade_direction = TradeDirection(str(direction).lower())
        except ValueError:
            self._console.print(f"[red]❌ Unknown direction: {direction}[/red]")
            return
        use_case = self._injector.get(JustifySignalPort)
        self._print_json(use_case.execute(trade_direction, bundles.get(str(asset))))

    def align(self, bundles_file: str, asset: str) -> None:
        """期貨多時間框架對齊

        Args:
            bundles_file: bundle JSON 檔案
            asset: 標的代號
        """
        bundles = self._load(bundles_file)
        if bundles is None:
            return
        asset = str(asset)
        use_case = self._injector.get(AlignFuturesTimeframesPort)
        self._print_json(use_case.execute(asset, bundles.get(asset)))

    async def correlate(self, bundles_file: str, asset: str) -> None:
        """計算標的與 BTC 的相關性 (BTC 歷史取自檔案中的 "BTC")

        Args:
            bundles_file: bundle JSON 檔案
            asset: 標的代號
        """
        bundles = self._load(bundles_file)
        if bundles is None:
            return
        asset = str(asset)
        use_case = self._injector.get(GetBtcCorrelationPort)
        history = (bundles.get(asset) or {}).get("history")
        record = await use_case.execute(asset, history)
        btc_price = await use_case.get_btc_price()
        self._print_json({"asset": asset, "btc_price": btc_price, **record})

    async def rank(
        self, bundles_file: str, top_n: int | None = None, allow: str = ""
    ) -> None:
        """多標的合成排名

        Args:
            bundles_file: bundle JSON 檔案
            top_n: 只顯示前 N 名
            allow: 逗號分隔的 allow-list (空 = 全部)
        """
        bundles = self._load(bundles_file)
        if bundles is None:
            return
        # fire 會把 "A,B" 解析成 tuple
        if isinstance(allow, (list, tuple)):
            allow_list = [str(a) for a in allow]
        else:
            allow_list = [a.strip() for a in str(allow).split(",") if a.strip()]

        use_case = self._injector.get(RankAssetsPort)
        result = await use_case.execute(
            bundles, allow_list=allow_list or None, top_n=top_n
        )
        self._print_ranking(result)

    def _print_ranking(self, result: RankingResultDTO) -> None:
        table = Table(title="📊 Asset Ranking")
        table.add_column("#", justify="right")
        table.add_column("Asset", style="bold")
        table.add_column("Aggr %", justify="right")
        table.add_column("Composite", justify="right")
        table.add_column("Score", justify="right")
        table.add_column("Coverage %", justify="right")
        table.add_column("Quality")
        table.add_column("Conf %", justify="right")
        table.add_column("Penalties")

        for i, entry in enumerate(result["entries"], 1):
            diagnostics = entry["diagnostics"]
            table.add_row(
                str(i),
                entry["asset"],
                f"{entry['aggressive_percent']:.1f}",
                f"{entry['composite_score']:.3f}",
                f"{entry['score']:.0f}",
                f"{entry['coverage_pct']:.0f}",
                entry["quality"],
                f"{diagnostics['confidence_percent']:.0f}",
                ", ".join(diagnostics["penalties_applied"]) or "-",
            )

        self._console.print(table)
        self._console.print(
            f"處理 {result['total_processed']} | 排名 {result['total_ranked']} | "
            f"無指標 {result['skipped_no_indicators']} | "
            f"品質淘汰 {result['skipped_quality']} | BTC 淘汰 {result['skipped_btc']}"
        )
