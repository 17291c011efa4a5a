"""
Grading Context Lifecycle Management

Provides dependency injection startup and shutdown
Follows P&A architecture: Driving Port → Application Service
"""

import logging

from injector import Injector, Module, provider, singleton

# Driving Ports
from libs.grading.src.ports.score_indicator_quality_port import (
    ScoreIndicatorQualityPort,
)
from libs.grading.src.ports.justify_signal_port import JustifySignalPort
from libs.grading.src.ports.align_futures_timeframes_port import (
    AlignFuturesTimeframesPort,
)
from libs.grading.src.ports.get_btc_correlation_port import GetBtcCorrelationPort
from libs.grading.src.ports.rank_assets_port import RankAssetsPort

# Application Services
from libs.grading.src.application.queries.score_indicator_quality import (
    ScoreIndicatorQualityQuery,
)
from libs.grading.src.application.queries.justify_signal import JustifySignalQuery
from libs.grading.src.application.queries.align_futures_timeframes import (
    AlignFuturesTimeframesQuery,
)
from libs.grading.src.application.queries.get_btc_correlation import (
    GetBtcCorrelationQuery,
)
from libs.grading.src.application.queries.rank_assets import RankAssetsQuery

# Score Adjusters
from libs.grading.src.domain.services.influence_adjuster import InfluenceAdjuster
from libs.grading.src.domain.services.reward_adjuster import RewardAdjuster
from libs.grading.src.domain.services.scoring_config_loader import load_scoring_config
from libs.grading.src.ports.score_adjuster_port import ScoreAdjusterPort

# Driven Ports
from libs.grading.src.ports.asset_bundle_provider_port import AssetBundleProviderPort
from libs.grading.src.ports.btc_market_data_provider_port import (
    BtcMarketDataProviderPort,
)
from libs.grading.src.adapters.driven.file.json_bundle_file_adapter import (
    JsonBundleFileAdapter,
)

from libs.shared.src.dtos.grading.scoring_config_dto import ScoringConfigDTO


class GradingModule(Module):
    """Grading dependency injection module"""

    def __init__(self, config: ScoringConfigDTO | None = None) -> None:
        self._config = config

    @singleton
    @provider
    def provide_config(self) -> ScoringConfigDTO:
        """Built once from defaults + environment"""
        return self._config if self._config is not None else load_scoring_config()

    @singleton
    @provider
    def provide_score_indicator_quality(
        self,
        config: ScoringConfigDTO,
    ) -> ScoreIndicatorQualityPort:
        adjusters: list[ScoreAdjusterPort] = [InfluenceAdjuster(), RewardAdjuster()]
        return ScoreIndicatorQualityQuery(config=dict(config), adjusters=adjusters)

    @singleton
    @provider
    def provide_justify_signal(self) -> JustifySignalPort:
        return JustifySignalQuery()

    @singleton
    @provider
    def provide_align_futures_timeframes(self) -> AlignFuturesTimeframesPort:
        return AlignFuturesTimeframesQuery()

    @singleton
    @provider
    def provide_get_btc_correlation(
        self,
        market_data: BtcMarketDataProviderPort,
        config: ScoringConfigDTO,
    ) -> GetBtcCorrelationPort:
        return GetBtcCorrelationQuery(market_data=market_data, config=dict(config))

    @singleton
    @provider
    def provide_rank_assets(
        self,
        quality_scorer: ScoreIndicatorQualityPort,
        correlation: GetBtcCorrelationPort,
        futures_aligner: AlignFuturesTimeframesPort,
        config: ScoringConfigDTO,
    ) -> RankAssetsPort:
        return RankAssetsQuery(
            quality_scorer=quality_scorer,
            correlation=correlation,
            futures_aligner=futures_aligner,
            influence=InfluenceAdjuster(),
            config=dict(config),
        )

    # ============================================
    # Driven Ports → Real Adapters
    # ============================================

    @singleton
    @provider
    def provide_bundle_file_adapter(self) -> JsonBundleFileAdapter:
        return JsonBundleFileAdapter()

    @singleton
    @provider
    def provide_asset_bundles(
        self, adapter: JsonBundleFileAdapter
    ) -> AssetBundleProviderPort:
        return adapter

    @singleton
    @provider
    def provide_btc_market_data(
        self, adapter: JsonBundleFileAdapter
    ) -> BtcMarketDataProviderPort:
        """Offline: BTC price / history come from the loaded bundle file"""
        return adapter


_injector: Injector | None = None


def startup() -> Injector:
    """Start dependency injection container"""
    global _injector

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    _injector = Injector([GradingModule()])
    return _injector


def shutdown() -> None:
    """Shutdown and release resources"""
    global _injector
    _injector = None


def get_injector() -> Injector:
    """Get dependency injection container"""
    if _injector is None:
        raise RuntimeError("Injector not initialized. Call startup() first.")
    return _injector


# Alias for libs composition
configure = GradingModule()
