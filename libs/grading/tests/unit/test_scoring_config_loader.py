"""load_scoring_config 單元測試"""

from libs.grading.src.domain.services.scoring_config_loader import load_scoring_config
from libs.shared.src.constants.scoring_defaults import SCORING_DEFAULTS


class TestLoadScoringConfig:
    """測試評分設定載入"""

    def test_defaults_when_environment_empty(self):
        """沒有環境變數時使用預設值"""
        config = load_scoring_config(env={})

        assert set(config) == set(SCORING_DEFAULTS)
        assert config["indicators_total"] == 20
        assert config["pen_trend_ema_aroon"] == 40
        assert config["rank_w_quality"] == 0.35
        assert config["quality_min_coverage"] == 70
        assert config["btc_abs_max"] == 0.8
        assert config["correlation_ttl_seconds"] == 300

    def test_environment_overrides_default(self):
        config = load_scoring_config(env={"PEN_LIQ_TRAP": "30", "AGGRV2_BTC_ABS_MAX": "1.5"})

        assert config["pen_liq_trap"] == 30
        assert config["btc_abs_max"] == 1.5

    def test_non_numeric_environment_falls_back(self):
        """非數字值應退回預設"""
        config = load_scoring_config(
            env={"RANK_W_MOMO": "abc", "AGGR_MAX": "nan", "PEN_VOL_DELTA": "inf"}
        )

        assert config["rank_w_momo"] == 0.25
        assert config["aggr_max"] == 120
        assert config["pen_vol_delta"] == 25

    def test_explicit_overrides_win_over_environment(self):
        config = load_scoring_config(
            env={"PEN_RSI_NO_MOMO": "12"},
            overrides={"pen_rsi_no_momo": 7, "pen_btc_shock": "oops"},
        )

        assert config["pen_rsi_no_momo"] == 7
        assert config["pen_btc_shock"] == 25

    def test_integer_fields_stay_integral(self):
        config = load_scoring_config(env={"INDICATORS_TOTAL": "18.0"})

        assert config["indicators_total"] == 18
        assert isinstance(config["indicators_total"], int)

    def test_non_positive_denominator_falls_back(self):
        """分母不可為 0"""
        config = load_scoring_config(env={"INDICATORS_TOTAL": "0", "AGGR_MAX": "-5"})

        assert config["indicators_total"] == 20
        assert config["aggr_max"] == 120

    def test_returns_fresh_struct_each_call(self):
        first = load_scoring_config(env={})
        second = load_scoring_config(env={})
        first["pen_liq_trap"] = 99

        assert second["pen_liq_trap"] == 25
